"""
repositories/property_repo.py
------------------------------
Data access layer for property listings.
All SQL queries related to the `properties` table live here.
"""

from dataclasses import asdict
from typing import Mapping, Union

from psycopg2 import extras

from config import DEFAULT_RESULT_LIMIT, LOG_SQL
from db.connection import get_connection, release_connection
from db.errors import MalformedQueryError, translate_error
from models.property import Property
from repositories.property_filters import PropertySearchOptions, build_property_search
from utils.logger import get_logger

logger = get_logger(__name__)


def _text(value):
    return None if value is None else str(value)


# (column, coercion) in insert order.
_INSERT_COLUMNS: tuple = (
    ("owner_id", int),
    ("title", _text),
    ("description", _text),
    ("thumbnail_photo_url", _text),
    ("cover_photo_url", _text),
    ("cost_per_night", int),
    ("street", _text),
    ("city", _text),
    ("province", _text),
    ("post_code", _text),
    ("country", _text),
    ("parking_spaces", int),
    ("number_of_bathrooms", int),
    ("number_of_bedrooms", int),
)


class PropertyRepository:
    """Repository for search and inserts on the properties table."""

    def __init__(self, conn_pool=None):
        self.pool = conn_pool

    # ── CREATE ────────────────────────────────────────────

    def add(self, prop: Union[Property, Mapping]) -> Property:
        """
        Insert a new property listing.

        Numeric fields are coerced with int() and text fields with str()
        before binding (None text stays NULL); no range or format validation
        is done.

        Args:
            prop: A Property or a mapping of its columns.

        Returns:
            The stored Property with its generated `id`.

        Raises:
            MalformedQueryError: If a field is missing or cannot be coerced.
            ConstraintViolationError: If the owner does not exist, etc.
        """
        params = self._insert_params(prop)
        columns = ", ".join(col for col, _ in _INSERT_COLUMNS)
        placeholders = ", ".join(["%s"] * len(_INSERT_COLUMNS))
        sql = f"""
            INSERT INTO properties ({columns})
            VALUES ({placeholders})
            RETURNING *;
        """
        conn = get_connection(self.pool)
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, params)
                row = cur.fetchone()
            conn.commit()
            created = self._row_to_property(row)
            logger.info(f"Added property #{created.id} for owner {created.owner_id}")
            return created
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add property: {e}")
            raise translate_error(e, "add_property") from e
        finally:
            release_connection(conn, self.pool)

    # ── READ ──────────────────────────────────────────────

    def get_all(
        self,
        options: Union[PropertySearchOptions, Mapping, None] = None,
        limit: int = DEFAULT_RESULT_LIMIT,
    ) -> list[Property]:
        """
        Search properties, cheapest first.

        Args:
            options: Optional filters (city, owner_id, minimum_price_per_night,
                maximum_price_per_night, minimum_rating). Falsy values are ignored.
            limit: Maximum number of rows.

        Returns:
            List of Property objects with `average_rating` populated
            (None for properties without reviews).
        """
        try:
            sql, params = build_property_search(options, limit)
        except (TypeError, ValueError) as e:
            logger.error(f"Invalid property search options: {e}")
            raise MalformedQueryError(str(e), "get_all_properties") from e

        if LOG_SQL:
            logger.debug(f"Property search: {sql.strip()} {params}")

        conn = get_connection(self.pool)
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, params)
                return [self._row_to_property(r) for r in cur.fetchall()]
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise translate_error(e, "get_all_properties") from e
        finally:
            release_connection(conn, self.pool)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _insert_params(prop: Union[Property, Mapping]) -> tuple:
        """Coerce a property's fields into the insert parameter tuple."""
        data = asdict(prop) if isinstance(prop, Property) else prop
        try:
            return tuple(coerce(data[col]) for col, coerce in _INSERT_COLUMNS)
        except KeyError as e:
            raise MalformedQueryError(f"missing property field {e}", "add_property") from e
        except (TypeError, ValueError) as e:
            raise MalformedQueryError(str(e), "add_property") from e

    @staticmethod
    def _row_to_property(row: Mapping) -> Property:
        """Convert a database row to a Property domain object."""
        rating = row.get("average_rating")
        return Property(
            id=row["id"],
            owner_id=row["owner_id"],
            title=row["title"],
            description=row["description"],
            thumbnail_photo_url=row["thumbnail_photo_url"],
            cover_photo_url=row["cover_photo_url"],
            cost_per_night=row["cost_per_night"],
            street=row["street"],
            city=row["city"],
            province=row["province"],
            post_code=row["post_code"],
            country=row["country"],
            parking_spaces=row["parking_spaces"],
            number_of_bathrooms=row["number_of_bathrooms"],
            number_of_bedrooms=row["number_of_bedrooms"],
            average_rating=float(rating) if rating is not None else None,
        )
