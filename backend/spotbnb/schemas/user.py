"""User and session schemas."""

from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import Field, field_validator

from ..core.constants import PASSWORD_MIN_LENGTH, USERNAME_MIN_LENGTH
from ._strict_base import StrictModel, StrictRequestModel


def _required_text(value: object, message: str) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValueError(message)
    return value.strip()


class UserCreate(StrictRequestModel):
    """Signup payload."""

    first_name: Optional[str] = Field(None, validate_default=True)
    last_name: Optional[str] = Field(None, validate_default=True)
    email: Optional[str] = Field(None, validate_default=True)
    username: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)

    @field_validator("first_name", mode="before")
    @classmethod
    def _first_name(cls, v: object) -> str:
        return _required_text(v, "First Name is required")

    @field_validator("last_name", mode="before")
    @classmethod
    def _last_name(cls, v: object) -> str:
        return _required_text(v, "Last Name is required")

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v: object) -> str:
        message = "Please provide a valid email."
        email = _required_text(v, message)
        try:
            return validate_email(email, check_deliverability=False).normalized
        except EmailNotValidError:
            raise ValueError(message)

    @field_validator("username", mode="before")
    @classmethod
    def _username(cls, v: object) -> str:
        message = f"Please provide a username with at least {USERNAME_MIN_LENGTH} characters."
        username = _required_text(v, message)
        if len(username) < USERNAME_MIN_LENGTH:
            raise ValueError(message)
        if "@" in username:
            raise ValueError("Username cannot be an email.")
        return username

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v: object) -> str:
        message = f"Password must be {PASSWORD_MIN_LENGTH} characters or more."
        if not isinstance(v, str) or len(v) < PASSWORD_MIN_LENGTH:
            raise ValueError(message)
        return v


class LoginRequest(StrictRequestModel):
    """Login with email or username."""

    credential: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)

    @field_validator("credential", mode="before")
    @classmethod
    def _credential(cls, v: object) -> str:
        return _required_text(v, "Email or username is required")

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, v: object) -> str:
        if not isinstance(v, str) or not v:
            raise ValueError("Password is required")
        return v


class UserOut(StrictModel):
    id: str
    first_name: str
    last_name: str
    email: str
    username: str


class SessionResponse(StrictModel):
    """``{"user": {...}}`` or ``{"user": null}`` when signed out."""

    user: Optional[UserOut] = None


class UserSummary(StrictModel):
    """Public identity shown next to reviews, bookings and spots."""

    id: str
    first_name: str
    last_name: str
