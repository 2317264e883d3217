"""Cookie utilities for consistent session handling."""
from __future__ import annotations

from typing import Optional

from fastapi import Response

from ..core.config import settings


def session_cookie_name() -> str:
    """Return the configured session cookie name."""
    return settings.session_cookie_name or "token"


def set_session_cookie(response: Response, value: str, *, max_age: Optional[int] = None) -> str:
    """Set the HttpOnly session cookie.

    Args:
        response: FastAPI response instance.
        value: Signed session token.
        max_age: Optional ``Max-Age``; defaults to the token lifetime.

    Returns:
        The cookie name written to the response headers.
    """
    cookie_name = session_cookie_name()
    response.set_cookie(
        key=cookie_name,
        value=value,
        httponly=True,
        samesite=settings.session_cookie_samesite or "lax",
        secure=bool(settings.session_cookie_secure),
        path="/",
        max_age=max_age if max_age is not None else settings.access_token_expire_minutes * 60,
    )
    return cookie_name


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=session_cookie_name(),
        path="/",
        httponly=True,
        samesite=settings.session_cookie_samesite or "lax",
        secure=bool(settings.session_cookie_secure),
    )
