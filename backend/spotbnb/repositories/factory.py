# backend/spotbnb/repositories/factory.py
"""
Repository Factory for SpotBnB

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .booking_repository import BookingRepository
    from .conflict_checker_repository import ConflictCheckerRepository
    from .review_repository import ReviewImageRepository, ReviewRepository
    from .spot_image_repository import SpotImageRepository
    from .spot_repository import SpotRepository
    from .user_repository import UserRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation so services can be handed fakes in tests.
    """

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        from .user_repository import UserRepository

        return UserRepository(db)

    @staticmethod
    def create_spot_repository(db: Session) -> "SpotRepository":
        from .spot_repository import SpotRepository

        return SpotRepository(db)

    @staticmethod
    def create_spot_image_repository(db: Session) -> "SpotImageRepository":
        from .spot_image_repository import SpotImageRepository

        return SpotImageRepository(db)

    @staticmethod
    def create_review_repository(db: Session) -> "ReviewRepository":
        from .review_repository import ReviewRepository

        return ReviewRepository(db)

    @staticmethod
    def create_review_image_repository(db: Session) -> "ReviewImageRepository":
        from .review_repository import ReviewImageRepository

        return ReviewImageRepository(db)

    @staticmethod
    def create_booking_repository(db: Session) -> "BookingRepository":
        from .booking_repository import BookingRepository

        return BookingRepository(db)

    @staticmethod
    def create_conflict_checker_repository(db: Session) -> "ConflictCheckerRepository":
        from .conflict_checker_repository import ConflictCheckerRepository

        return ConflictCheckerRepository(db)
