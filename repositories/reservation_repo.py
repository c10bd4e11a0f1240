"""
repositories/reservation_repo.py
---------------------------------
Data access layer for reservations. Read-only: listings of a guest's
past stays, joined with the booked property and its average rating.
"""

from typing import Mapping

from psycopg2 import extras

from config import DEFAULT_RESULT_LIMIT
from db.connection import get_connection, release_connection
from db.errors import translate_error
from models.reservation import Reservation
from repositories.property_repo import PropertyRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class ReservationRepository:
    """Repository for reading the reservations table."""

    def __init__(self, conn_pool=None):
        self.pool = conn_pool

    def get_past_for_guest(self, guest_id: int, limit: int = DEFAULT_RESULT_LIMIT) -> list[Reservation]:
        """
        Fetch a guest's completed reservations, earliest first.

        A reservation is "past" when its end_date is before today, so stays
        ending today or later are excluded.

        Args:
            guest_id: ID of the guest user.
            limit: Maximum number of rows.

        Returns:
            List of Reservation objects with `property` and `average_rating` set.
        """
        sql = """
            SELECT reservations.id AS reservation_id,
                   reservations.guest_id,
                   reservations.start_date,
                   reservations.end_date,
                   properties.*,
                   avg(property_reviews.rating) AS average_rating
            FROM reservations
            JOIN properties ON reservations.property_id = properties.id
            JOIN property_reviews ON properties.id = property_reviews.property_id
            WHERE reservations.guest_id = %s
              AND reservations.end_date < now()::date
            GROUP BY properties.id, reservations.id
            ORDER BY reservations.start_date
            LIMIT %s;
        """
        conn = get_connection(self.pool)
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, (guest_id, int(limit)))
                return [self._row_to_reservation(r) for r in cur.fetchall()]
        except Exception as e:
            logger.error(f"Failed to list reservations for guest {guest_id}: {e}")
            raise translate_error(e, "get_all_reservations") from e
        finally:
            release_connection(conn, self.pool)

    @staticmethod
    def _row_to_reservation(row: Mapping) -> Reservation:
        """Convert a joined reservation/property row to a Reservation."""
        prop = PropertyRepository._row_to_property(row)
        return Reservation(
            id=row["reservation_id"],
            guest_id=row["guest_id"],
            property_id=prop.id,
            start_date=row["start_date"],
            end_date=row["end_date"],
            property=prop,
            average_rating=prop.average_rating,
        )
