"""
models/reservation.py
---------------------
Domain model for guest reservations. Read-only in this layer.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from models.property import Property


@dataclass
class Reservation:
    """
    A stay booked by a guest at a property.

    Attributes:
        id: Database primary key.
        guest_id: ID of the user who booked.
        property_id: ID of the booked property.
        start_date: First night.
        end_date: Checkout date (never before start_date).
        property: The joined property row, when loaded by a listing query.
        average_rating: Mean rating of the property at query time.
    """
    guest_id: int
    property_id: int
    start_date: date
    end_date: date
    id: Optional[int] = None
    property: Optional[Property] = None
    average_rating: Optional[float] = None

    def nights(self) -> int:
        """Number of nights booked."""
        return (self.end_date - self.start_date).days

    def __str__(self) -> str:
        title = self.property.title if self.property else f"property #{self.property_id}"
        return f"{title}: {self.start_date} → {self.end_date}"
