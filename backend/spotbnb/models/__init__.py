"""
Database models for SpotBnB.

- User: account and credentials
- Spot / SpotImage: bookable listings owned by a user
- Review / ReviewImage: one review per user per spot
- Booking: a reserved date range on a spot
"""

from .booking import Booking
from .review import Review, ReviewImage
from .spot import Spot, SpotImage
from .user import User

__all__ = [
    "Booking",
    "Review",
    "ReviewImage",
    "Spot",
    "SpotImage",
    "User",
]
