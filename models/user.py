"""
models/user.py
--------------
Domain model for site users (guests and property owners).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """
    Represents a registered user.

    Attributes:
        id: Database primary key (None for new records).
        name: Display name.
        email: Login email; the application's natural key.
        password: Stored password (hash), passed through untouched.
    """
    name: str
    email: str
    password: str
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
