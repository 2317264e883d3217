"""Spot and review image schemas."""

from typing import Optional

from pydantic import Field, field_validator

from ._strict_base import StrictModel, StrictRequestModel


def _url(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Image url is required")
    return value.strip()


class SpotImageCreate(StrictRequestModel):
    url: Optional[str] = Field(None, validate_default=True)
    preview: bool = False

    @field_validator("url", mode="before")
    @classmethod
    def _url_required(cls, v: object) -> str:
        return _url(v)


class ReviewImageCreate(StrictRequestModel):
    url: Optional[str] = Field(None, validate_default=True)

    @field_validator("url", mode="before")
    @classmethod
    def _url_required(cls, v: object) -> str:
        return _url(v)


class SpotImageOut(StrictModel):
    id: str
    url: str
    preview: bool


class ReviewImageOut(StrictModel):
    id: str
    url: str
