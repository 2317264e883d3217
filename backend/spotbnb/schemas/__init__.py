# backend/spotbnb/schemas/__init__.py
"""
Pydantic schemas for request/response validation.

Request models accept camelCase keys; response models serialize with the
aliases the client expects (camelCase, plus capitalized embedded collections
such as ``Spots`` and ``SpotImages``).
"""

from .base_responses import ErrorResponse, MessageResponse
from .booking import (
    BookingCreate,
    BookingOut,
    BookingOwnerView,
    BookingPublicView,
    BookingWithSpot,
    CurrentBookingsResponse,
    SpotBookingsResponse,
)
from .image import ReviewImageCreate, ReviewImageOut, SpotImageCreate, SpotImageOut
from .review import ReviewCreate, ReviewDetail, ReviewOut, ReviewsResponse
from .spot import (
    OwnedSpotsResponse,
    SpotCreate,
    SpotDetail,
    SpotListQuery,
    SpotListResponse,
    SpotOut,
    SpotPreview,
    SpotSummary,
)
from .user import LoginRequest, SessionResponse, UserCreate, UserOut, UserSummary

__all__ = [
    "BookingCreate",
    "BookingOut",
    "BookingOwnerView",
    "BookingPublicView",
    "BookingWithSpot",
    "CurrentBookingsResponse",
    "ErrorResponse",
    "LoginRequest",
    "MessageResponse",
    "OwnedSpotsResponse",
    "ReviewCreate",
    "ReviewDetail",
    "ReviewImageCreate",
    "ReviewImageOut",
    "ReviewOut",
    "ReviewsResponse",
    "SessionResponse",
    "SpotBookingsResponse",
    "SpotCreate",
    "SpotDetail",
    "SpotImageCreate",
    "SpotImageOut",
    "SpotListQuery",
    "SpotListResponse",
    "SpotOut",
    "SpotPreview",
    "SpotSummary",
    "UserCreate",
    "UserOut",
    "UserSummary",
]
