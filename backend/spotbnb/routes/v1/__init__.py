# backend/spotbnb/routes/v1/__init__.py
"""
API routes mounted under /api.
"""

from . import bookings, images, reviews, session, spots, users

__all__ = [
    "bookings",
    "images",
    "reviews",
    "session",
    "spots",
    "users",
]
