# backend/spotbnb/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from .auth import get_current_user, get_current_user_optional
from .database import get_db
from .services import (
    get_auth_service,
    get_booking_service,
    get_image_service,
    get_review_service,
    get_spot_service,
)

__all__ = [
    # Auth
    "get_current_user",
    "get_current_user_optional",
    # Database
    "get_db",
    # Services
    "get_auth_service",
    "get_booking_service",
    "get_image_service",
    "get_review_service",
    "get_spot_service",
]
