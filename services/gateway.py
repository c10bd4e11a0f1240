"""
services/gateway.py
-------------------
The query gateway: the single interface between application code and
the LightBnB database.

Every operation issues at most one round trip. Lookups return None when
nothing matches; database failures raise a GatewayError subclass
(see db/errors.py) after being logged.
"""

from typing import Mapping, Optional, Union

from config import DEFAULT_RESULT_LIMIT
from models.property import Property
from models.reservation import Reservation
from models.user import User
from repositories.property_filters import PropertySearchOptions
from repositories.property_repo import PropertyRepository
from repositories.reservation_repo import ReservationRepository
from repositories.user_repo import UserRepository


class QueryGateway:
    """
    Users, reservations and properties behind one object.

    Args:
        conn_pool: Optional connection pool (``getconn``/``putconn``).
            Defaults to the process-wide pool from ``db.connection.init_pool``.
    """

    def __init__(self, conn_pool=None):
        self.user_repo = UserRepository(conn_pool)
        self.reservation_repo = ReservationRepository(conn_pool)
        self.property_repo = PropertyRepository(conn_pool)

    # ── Users ─────────────────────────────────────────────

    def get_user_with_email(self, email: str) -> Optional[User]:
        """Get a single user by email, or None."""
        return self.user_repo.get_by_email(email)

    def get_user_with_id(self, user_id: int) -> Optional[User]:
        """Get a single user by id, or None."""
        return self.user_repo.get_by_id(user_id)

    def add_user(self, user: Union[User, Mapping]) -> User:
        """Add a new user and return it with its generated id."""
        return self.user_repo.add(user)

    # ── Reservations ──────────────────────────────────────

    def get_all_reservations(self, guest_id: int, limit: int = DEFAULT_RESULT_LIMIT) -> list[Reservation]:
        """Get a guest's past reservations, ordered by start date."""
        return self.reservation_repo.get_past_for_guest(guest_id, limit)

    # ── Properties ────────────────────────────────────────

    def get_all_properties(
        self,
        options: Union[PropertySearchOptions, Mapping, None] = None,
        limit: int = DEFAULT_RESULT_LIMIT,
    ) -> list[Property]:
        """Search properties with optional filters, cheapest first."""
        return self.property_repo.get_all(options, limit)

    def add_property(self, prop: Union[Property, Mapping]) -> Property:
        """Add a property listing and return the stored row."""
        return self.property_repo.add(prop)
