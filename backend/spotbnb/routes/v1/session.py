# backend/spotbnb/routes/v1/session.py
"""
Session routes.

Endpoints:
    POST /session   → Log in with email or username
    GET /session    → Current user, or null when signed out
    DELETE /session → Log out
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response

from ...api.dependencies import get_auth_service, get_current_user_optional
from ...auth import create_access_token
from ...core.exceptions import DomainException, handle_domain_exception
from ...models.user import User
from ...schemas.base_responses import MessageResponse
from ...schemas.user import LoginRequest, SessionResponse, UserOut
from ...services.auth_service import AuthService
from ...utils.cookies import clear_session_cookie, set_session_cookie

logger = logging.getLogger(__name__)

router = APIRouter(tags=["session"])


@router.post("/session", response_model=SessionResponse)
def login(
    payload: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    try:
        user = service.authenticate_user(payload)
    except DomainException as exc:
        handle_domain_exception(exc)

    set_session_cookie(response, create_access_token({"sub": user.id}))
    return SessionResponse(user=UserOut.model_validate(user))


@router.get("/session", response_model=SessionResponse)
def restore_session(current_user: Optional[User] = Depends(get_current_user_optional)) -> SessionResponse:
    if current_user is None:
        return SessionResponse(user=None)
    return SessionResponse(user=UserOut.model_validate(current_user))


@router.delete("/session", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    clear_session_cookie(response)
    return MessageResponse(message="success")
