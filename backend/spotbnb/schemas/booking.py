"""
Booking schemas for SpotBnB.

Dates travel as ``YYYY-MM-DD`` strings. Presence and ordering rules live in
``core.booking_rules`` so the request model only parses.
"""

from datetime import date, datetime
import re
from typing import List, Optional, Union

from pydantic import Field, field_validator

from ._strict_base import StrictModel, StrictRequestModel
from .spot import SpotPreview
from .user import UserSummary

DATE_ONLY_REGEX = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _ensure_date_only(value: object, field_name: str) -> object:
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return None
        if not DATE_ONLY_REGEX.fullmatch(candidate):
            raise ValueError(f"{field_name} must be a YYYY-MM-DD date")
        return candidate
    return value


class BookingCreate(StrictRequestModel):
    """Create or change a booking's date range."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @field_validator("start_date", mode="before")
    @classmethod
    def _start_date_only(cls, v: object) -> object:
        return _ensure_date_only(v, "startDate")

    @field_validator("end_date", mode="before")
    @classmethod
    def _end_date_only(cls, v: object) -> object:
        return _ensure_date_only(v, "endDate")


class BookingOut(StrictModel):
    id: str
    spot_id: str
    user_id: str
    start_date: date
    end_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookingPublicView(StrictModel):
    """What anyone but the spot owner may see of a booking."""

    spot_id: str
    start_date: date
    end_date: date


class BookingOwnerView(BookingOut):
    """Spot owner's view: the booking plus who made it."""

    user: UserSummary = Field(alias="User")


class BookingWithSpot(BookingOut):
    spot: SpotPreview = Field(alias="Spot")


class SpotBookingsResponse(StrictModel):
    bookings: List[Union[BookingOwnerView, BookingPublicView]] = Field(alias="Bookings")


class CurrentBookingsResponse(StrictModel):
    bookings: List[BookingWithSpot] = Field(alias="Bookings")
