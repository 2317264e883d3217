# backend/spotbnb/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
bound to the request's database session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.auth_service import AuthService
from ...services.booking_service import BookingService
from ...services.image_service import ImageService
from ...services.review_service import ReviewService
from ...services.spot_service import SpotService
from .database import get_db


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_spot_service(db: Session = Depends(get_db)) -> SpotService:
    return SpotService(db)


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


def get_image_service(db: Session = Depends(get_db)) -> ImageService:
    return ImageService(db)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """
    Get booking service instance.

    Args:
        db: Database session

    Returns:
        BookingService instance
    """
    return BookingService(db)
