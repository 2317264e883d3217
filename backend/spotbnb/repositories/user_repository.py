# backend/spotbnb/repositories/user_repository.py
"""
User Repository for SpotBnB.

Lookups used by signup, login and session restore.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User data access."""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_credential(self, credential: str) -> Optional[User]:
        """Find a user by email or username (case-insensitive)."""
        normalized = credential.strip().lower()
        query = self.db.query(User).filter(
            or_(func.lower(User.email) == normalized, func.lower(User.username) == normalized)
        )
        return self._execute_first(query)

    def find_conflicting(self, email: str, username: str) -> List[User]:
        """Users that already hold ``email`` or ``username``."""
        query = self.db.query(User).filter(
            or_(
                func.lower(User.email) == email.strip().lower(),
                func.lower(User.username) == username.strip().lower(),
            )
        )
        return self._execute_query(query)
