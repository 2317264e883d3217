"""Spot request/response schemas."""

from datetime import datetime
import math
from typing import List, Optional

from pydantic import Field, field_validator

from ..core.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    LAT_MAX,
    LAT_MIN,
    LNG_MAX,
    LNG_MIN,
    MAX_PAGE,
    MAX_PAGE_SIZE,
    SPOT_NAME_MAX_LENGTH,
)
from ._strict_base import StrictModel, StrictRequestModel
from .image import SpotImageOut
from .user import UserSummary


def _required_text(value: object, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(message)
    return value.strip()


def _as_number(value: object, message: str) -> float:
    """Coerce numbers and numeric strings; booleans and non-finite values are rejected."""
    if value is None or isinstance(value, bool):
        raise ValueError(message)
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValueError(message)
    if not math.isfinite(number):
        raise ValueError(message)
    return number


LAT_MESSAGE = f"Latitude must be within {LAT_MIN} and {LAT_MAX}"
LNG_MESSAGE = f"Longitude must be within {LNG_MIN} and {LNG_MAX}"
NAME_MESSAGE = f"Name must be less than {SPOT_NAME_MAX_LENGTH} characters"
PRICE_MESSAGE = "Price per day must be a positive number"


class SpotCreate(StrictRequestModel):
    """Create or fully replace a spot. Every field is required."""

    address: Optional[str] = Field(None, validate_default=True)
    city: Optional[str] = Field(None, validate_default=True)
    state: Optional[str] = Field(None, validate_default=True)
    country: Optional[str] = Field(None, validate_default=True)
    lat: Optional[float] = Field(None, validate_default=True)
    lng: Optional[float] = Field(None, validate_default=True)
    name: Optional[str] = Field(None, validate_default=True)
    description: Optional[str] = Field(None, validate_default=True)
    price: Optional[float] = Field(None, validate_default=True)

    @field_validator("address", mode="before")
    @classmethod
    def _address(cls, v: object) -> str:
        return _required_text(v, "Street address is required")

    @field_validator("city", mode="before")
    @classmethod
    def _city(cls, v: object) -> str:
        return _required_text(v, "City is required")

    @field_validator("state", mode="before")
    @classmethod
    def _state(cls, v: object) -> str:
        return _required_text(v, "State is required")

    @field_validator("country", mode="before")
    @classmethod
    def _country(cls, v: object) -> str:
        return _required_text(v, "Country is required")

    @field_validator("description", mode="before")
    @classmethod
    def _description(cls, v: object) -> str:
        return _required_text(v, "Description is required")

    @field_validator("lat", mode="before")
    @classmethod
    def _lat(cls, v: object) -> float:
        lat = _as_number(v, LAT_MESSAGE)
        if not LAT_MIN <= lat <= LAT_MAX:
            raise ValueError(LAT_MESSAGE)
        return lat

    @field_validator("lng", mode="before")
    @classmethod
    def _lng(cls, v: object) -> float:
        lng = _as_number(v, LNG_MESSAGE)
        if not LNG_MIN <= lng <= LNG_MAX:
            raise ValueError(LNG_MESSAGE)
        return lng

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, v: object) -> str:
        name = _required_text(v, NAME_MESSAGE)
        if len(name) > SPOT_NAME_MAX_LENGTH:
            raise ValueError(NAME_MESSAGE)
        return name

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, v: object) -> float:
        price = _as_number(v, PRICE_MESSAGE)
        if price <= 0:
            raise ValueError(PRICE_MESSAGE)
        return price


class SpotListQuery(StrictRequestModel):
    """Query parameters of ``GET /spots``; values arrive as raw strings."""

    page: Optional[int] = Field(None, validate_default=True)
    size: Optional[int] = Field(None, validate_default=True)
    min_lat: Optional[float] = None
    max_lat: Optional[float] = None
    min_lng: Optional[float] = None
    max_lng: Optional[float] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    @field_validator("page", mode="before")
    @classmethod
    def _page(cls, v: object) -> int:
        if v is None or v == "":
            return DEFAULT_PAGE
        message = f"Page must be between 1 and {MAX_PAGE}"
        page = _as_int(v, message)
        if not 1 <= page <= MAX_PAGE:
            raise ValueError(message)
        return page

    @field_validator("size", mode="before")
    @classmethod
    def _size(cls, v: object) -> int:
        if v is None or v == "":
            return DEFAULT_PAGE_SIZE
        message = f"Size must be between 1 and {MAX_PAGE_SIZE}"
        size = _as_int(v, message)
        if not 1 <= size <= MAX_PAGE_SIZE:
            raise ValueError(message)
        return size

    @field_validator("min_lat", mode="before")
    @classmethod
    def _min_lat(cls, v: object) -> Optional[float]:
        return _optional_bounded(v, LAT_MIN, LAT_MAX, "Minimum latitude is invalid")

    @field_validator("max_lat", mode="before")
    @classmethod
    def _max_lat(cls, v: object) -> Optional[float]:
        return _optional_bounded(v, LAT_MIN, LAT_MAX, "Maximum latitude is invalid")

    @field_validator("min_lng", mode="before")
    @classmethod
    def _min_lng(cls, v: object) -> Optional[float]:
        return _optional_bounded(v, LNG_MIN, LNG_MAX, "Minimum longitude is invalid")

    @field_validator("max_lng", mode="before")
    @classmethod
    def _max_lng(cls, v: object) -> Optional[float]:
        return _optional_bounded(v, LNG_MIN, LNG_MAX, "Maximum longitude is invalid")

    @field_validator("min_price", mode="before")
    @classmethod
    def _min_price(cls, v: object) -> Optional[float]:
        return _optional_bounded(v, 0, None, "Minimum price must be greater than or equal to 0")

    @field_validator("max_price", mode="before")
    @classmethod
    def _max_price(cls, v: object) -> Optional[float]:
        return _optional_bounded(v, 0, None, "Maximum price must be greater than or equal to 0")

    @property
    def offset(self) -> int:
        return ((self.page or DEFAULT_PAGE) - 1) * (self.size or DEFAULT_PAGE_SIZE)


def _as_int(value: object, message: str) -> int:
    number = _as_number(value, message)
    if not number.is_integer():
        raise ValueError(message)
    return int(number)


def _optional_bounded(
    value: object, minimum: Optional[float], maximum: Optional[float], message: str
) -> Optional[float]:
    if value is None or value == "":
        return None
    number = _as_number(value, message)
    if minimum is not None and number < minimum:
        raise ValueError(message)
    if maximum is not None and number > maximum:
        raise ValueError(message)
    return number


class SpotOut(StrictModel):
    id: str
    owner_id: str
    address: str
    city: str
    state: str
    country: str
    lat: float
    lng: float
    name: str
    description: str
    price: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SpotSummary(SpotOut):
    """Listing card: spot fields plus rating and thumbnail."""

    avg_rating: Optional[float] = None
    preview_image: Optional[str] = None


class SpotListResponse(StrictModel):
    spots: List[SpotSummary] = Field(alias="Spots")
    page: int
    size: int


class OwnedSpotsResponse(StrictModel):
    spots: List[SpotSummary] = Field(alias="Spots")


class SpotDetail(SpotOut):
    num_reviews: int = 0
    avg_star_rating: Optional[float] = None
    spot_images: List[SpotImageOut] = Field(default_factory=list, alias="SpotImages")
    owner: UserSummary = Field(alias="Owner")


class SpotPreview(StrictModel):
    """Spot as embedded in bookings and reviews of the current user."""

    id: str
    owner_id: str
    address: str
    city: str
    state: str
    country: str
    lat: float
    lng: float
    name: str
    price: float
    preview_image: Optional[str] = None
