"""Review schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from ..core.constants import STARS_MAX, STARS_MIN
from ._strict_base import StrictModel, StrictRequestModel
from .image import ReviewImageOut
from .spot import SpotPreview
from .user import UserSummary

STARS_MESSAGE = f"Stars must be an integer from {STARS_MIN} to {STARS_MAX}"


class ReviewCreate(StrictRequestModel):
    """Create or replace a review."""

    review: Optional[str] = Field(None, validate_default=True)
    stars: Optional[int] = Field(None, validate_default=True)

    @field_validator("review", mode="before")
    @classmethod
    def _review(cls, v: object) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Review text is required")
        return v.strip()

    @field_validator("stars", mode="before")
    @classmethod
    def _stars(cls, v: object) -> int:
        if isinstance(v, bool) or not isinstance(v, (int, float, str)):
            raise ValueError(STARS_MESSAGE)
        try:
            stars = float(v)
        except ValueError:
            raise ValueError(STARS_MESSAGE)
        if not stars.is_integer() or not STARS_MIN <= stars <= STARS_MAX:
            raise ValueError(STARS_MESSAGE)
        return int(stars)


class ReviewOut(StrictModel):
    id: str
    user_id: str
    spot_id: str
    review: str
    stars: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReviewDetail(ReviewOut):
    """Review with reviewer, images and (for the author's own list) the spot."""

    user: Optional[UserSummary] = Field(default=None, alias="User")
    spot: Optional[SpotPreview] = Field(default=None, alias="Spot")
    review_images: List[ReviewImageOut] = Field(default_factory=list, alias="ReviewImages")


class ReviewsResponse(StrictModel):
    reviews: List[ReviewDetail] = Field(alias="Reviews")
