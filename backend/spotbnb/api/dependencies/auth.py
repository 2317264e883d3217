# backend/spotbnb/api/dependencies/auth.py
"""
Authentication dependencies.

Resolve the session token to a ``User`` row. Handlers receive the user
explicitly and hand ``user.id`` to services as the acting user.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...auth import get_current_user_id, get_current_user_id_optional
from ...core.request_context import record_actor
from ...models.user import User
from ...repositories.factory import RepositoryFactory
from .database import get_db

logger = logging.getLogger(__name__)


def get_current_user(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    """
    Get the current authenticated user from the database.

    Raises:
        HTTPException: 401 if the token names a user that no longer exists
    """
    user = RepositoryFactory.create_user_repository(db).get_by_id(user_id)
    if user is None:
        logger.warning(f"Session token references unknown user {user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": "Authentication required", "code": "UNAUTHORIZED"},
        )
    record_actor(user.id)
    return user


def get_current_user_optional(
    user_id: Optional[str] = Depends(get_current_user_id_optional),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Current user, or None for anonymous requests and stale tokens."""
    if user_id is None:
        return None
    user = RepositoryFactory.create_user_repository(db).get_by_id(user_id)
    if user is not None:
        record_actor(user.id)
    return user
