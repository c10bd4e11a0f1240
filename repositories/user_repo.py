"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Mapping, Optional, Union

from psycopg2 import extras

from db.connection import get_connection, release_connection
from db.errors import MalformedQueryError, translate_error
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for lookups and inserts on the users table."""

    def __init__(self, conn_pool=None):
        self.pool = conn_pool

    # ── CREATE ────────────────────────────────────────────

    def add(self, user: Union[User, Mapping]) -> User:
        """
        Insert a new user.

        No uniqueness pre-check is made; a duplicate email is rejected only
        if the database carries a unique constraint on it.

        Args:
            user: A User or a mapping with 'name', 'email' and 'password'.

        Returns:
            The stored User with its generated `id`.

        Raises:
            ConstraintViolationError: If the insert violates a constraint.
        """
        if isinstance(user, Mapping):
            try:
                user = User(name=user["name"], email=user["email"], password=user["password"])
            except KeyError as e:
                raise MalformedQueryError(f"missing user field {e}", "add_user") from e
        sql = """
            INSERT INTO users (name, email, password)
            VALUES (%s, %s, %s)
            RETURNING *;
        """
        conn = get_connection(self.pool)
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (user.name, user.email, user.password))
                row = cur.fetchone()
            conn.commit()
            created = self._row_to_user(row)
            logger.info(f"Added user #{created.id}")
            return created
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add user: {e}")
            raise translate_error(e, "add_user") from e
        finally:
            release_connection(conn, self.pool)

    # ── READ ──────────────────────────────────────────────

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user by exact email match.

        Returns:
            A User or None if no row matches.
        """
        return self._fetch_one("SELECT * FROM users WHERE email = %s;", (email,), "get_user_with_email")

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Fetch a user by primary key, or None."""
        return self._fetch_one("SELECT * FROM users WHERE id = %s;", (user_id,), "get_user_with_id")

    # ── HELPERS ───────────────────────────────────────────

    def _fetch_one(self, sql: str, params: tuple, operation: str) -> Optional[User]:
        conn = get_connection(self.pool)
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, params)
                row = cur.fetchone()
                return self._row_to_user(row) if row else None
        except Exception as e:
            logger.error(f"{operation} failed: {e}")
            raise translate_error(e, operation) from e
        finally:
            release_connection(conn, self.pool)

    @staticmethod
    def _row_to_user(row: Mapping) -> User:
        """Convert a database row to a User domain object."""
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password=row["password"],
        )
