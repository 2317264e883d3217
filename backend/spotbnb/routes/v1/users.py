# backend/spotbnb/routes/v1/users.py
"""
User routes - signup.

Endpoints:
    POST /users → Create an account and start a session
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from ...api.dependencies import get_auth_service
from ...auth import create_access_token
from ...core.exceptions import DomainException, handle_domain_exception
from ...schemas.user import SessionResponse, UserCreate, UserOut
from ...services.auth_service import AuthService
from ...utils.cookies import set_session_cookie

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.post("/users", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def signup(
    payload: UserCreate,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> SessionResponse:
    """Register a user and log them in."""
    try:
        user = service.register_user(payload)
    except DomainException as exc:
        handle_domain_exception(exc)

    set_session_cookie(response, create_access_token({"sub": user.id}))
    return SessionResponse(user=UserOut.model_validate(user))
