"""
models/property.py
------------------
Domain model for rental property listings.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Property:
    """
    Represents a rental listing owned by a single user.

    Attributes:
        id: Database primary key (None for new records).
        owner_id: ID of the owning user.
        title: Listing headline.
        description: Free-text description.
        thumbnail_photo_url: Small image shown in search results.
        cover_photo_url: Large image shown on the listing page.
        cost_per_night: Nightly price in minor currency units (cents).
        street, city, province, post_code, country: Address parts.
        parking_spaces: Number of parking spots.
        number_of_bathrooms: Number of bathrooms.
        number_of_bedrooms: Number of bedrooms.
        average_rating: Mean review rating; only set by listing queries,
            None when the property has no reviews.
    """
    owner_id: int
    title: str
    cost_per_night: int
    description: str = ""
    thumbnail_photo_url: str = ""
    cover_photo_url: str = ""
    street: str = ""
    city: str = ""
    province: str = ""
    post_code: str = ""
    country: str = ""
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0
    id: Optional[int] = None
    average_rating: Optional[float] = None

    def __str__(self) -> str:
        return f"{self.title} ({self.city}) - {self.cost_per_night / 100:.2f}/night"
