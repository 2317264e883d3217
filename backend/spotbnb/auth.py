from datetime import datetime, timedelta, timezone
import logging
from typing import Any, Dict, Optional, cast

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
import jwt
from jwt import PyJWTError
from passlib.context import CryptContext

from .core.config import settings
from .utils.cookies import session_cookie_name

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Pre-computed bcrypt hash for timing attack prevention.
# Verified against when the credential matches no user.
DUMMY_HASH_FOR_TIMING_ATTACK = "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.V4ferVKnNaOuJi"

oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="api/session", auto_error=False)


def _secret_value(secret_obj: Any) -> str:
    getter = getattr(secret_obj, "get_secret_value", None)
    if callable(getter):
        return cast(str, getter())
    return cast(str, secret_obj)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password
        hashed_password: The hashed password to compare against

    Returns:
        bool: True if password matches, False otherwise
    """
    try:
        return bool(pwd_context.verify(plain_password, hashed_password))
    except ValueError as e:
        logger.error(f"Error verifying password: {str(e)}")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return str(pwd_context.hash(password))


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed session token.

    Args:
        data: Claims to encode; ``sub`` carries the user id
        expires_delta: Optional expiration time delta

    Returns:
        str: The encoded JWT token
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})

    encoded_jwt = cast(
        str,
        jwt.encode(to_encode, _secret_value(settings.secret_key), algorithm=settings.algorithm),
    )
    logger.debug(f"Created access token for user: {data.get('sub')}")
    return encoded_jwt


def decode_access_token(token: str) -> Dict[str, Any]:
    payload = jwt.decode(token, _secret_value(settings.secret_key), algorithms=[settings.algorithm])
    return cast(Dict[str, Any], payload)


def _token_from_request(request: Request, token: Optional[str]) -> Optional[str]:
    """Bearer header wins; otherwise fall back to the session cookie."""
    if token:
        return token
    return request.cookies.get(session_cookie_name())


def get_current_user_id(
    request: Request, token: Optional[str] = Depends(oauth2_scheme_optional)
) -> str:
    """
    Dependency resolving the authenticated user id from the session token.

    Raises:
        HTTPException: 401 when the token is missing, expired or malformed
    """
    not_authenticated = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"message": "Authentication required", "code": "UNAUTHORIZED"},
        headers={"WWW-Authenticate": "Bearer"},
    )

    token = _token_from_request(request, token)
    if not token:
        raise not_authenticated

    try:
        payload = decode_access_token(token)
    except PyJWTError as e:
        logger.info(f"JWT validation error: {str(e)}")
        raise not_authenticated

    user_id = payload.get("sub")
    if not isinstance(user_id, str):
        logger.warning("Token payload missing 'sub' field")
        raise not_authenticated
    return user_id


def get_current_user_id_optional(
    request: Request, token: Optional[str] = Depends(oauth2_scheme_optional)
) -> Optional[str]:
    """
    Like ``get_current_user_id`` but returns None for anonymous requests.

    Used by endpoints that render differently for signed-in users.
    """
    token = _token_from_request(request, token)
    if not token:
        return None
    try:
        payload = decode_access_token(token)
    except PyJWTError as e:
        logger.debug(f"JWT validation error in optional auth: {str(e)}")
        return None
    user_id = payload.get("sub")
    return user_id if isinstance(user_id, str) else None
