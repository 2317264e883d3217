# backend/spotbnb/repositories/__init__.py
"""
Repository Pattern Implementation for SpotBnB

This package provides the repository layer for data access,
separating business logic from database queries.

Usage:
    from spotbnb.repositories import RepositoryFactory

    # In a service:
    repository = RepositoryFactory.create_booking_repository(db)
    bookings = repository.list_for_user(user_id)
"""

from .base_repository import BaseRepository
from .booking_repository import BookingRepository
from .conflict_checker_repository import ConflictCheckerRepository
from .factory import RepositoryFactory
from .review_repository import ReviewImageRepository, ReviewRepository
from .spot_image_repository import SpotImageRepository
from .spot_repository import RatingStats, SpotFilters, SpotRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "ConflictCheckerRepository",
    "RatingStats",
    "RepositoryFactory",
    "ReviewImageRepository",
    "ReviewRepository",
    "SpotFilters",
    "SpotImageRepository",
    "SpotRepository",
    "UserRepository",
]
