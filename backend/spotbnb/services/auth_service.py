# backend/spotbnb/services/auth_service.py
"""
Authentication Service for SpotBnB

Handles signup, login and session restore. Follows the service layer
pattern to keep business logic out of routes.
"""

import logging
from typing import Dict, Optional

from sqlalchemy.orm import Session

from ..auth import DUMMY_HASH_FOR_TIMING_ATTACK, get_password_hash, verify_password
from ..core.exceptions import DuplicateException, IntegrityViolationException, UnauthorizedException
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..repositories.user_repository import UserRepository
from ..schemas.user import LoginRequest, UserCreate
from .base import BaseService

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    """Service for handling authentication operations."""

    def __init__(self, db: Session, user_repository: Optional[UserRepository] = None) -> None:
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.user_repository = user_repository or RepositoryFactory.create_user_repository(db)

    @BaseService.measure_operation("register_user")
    def register_user(self, data: UserCreate) -> User:
        """
        Register a new user.

        Raises:
            DuplicateException: If the email or username is already taken
        """
        self.log_operation("register_user", username=data.username)

        errors = self._taken_fields(data)
        if errors:
            self.logger.warning(f"Registration failed - duplicate {sorted(errors)}")
            raise DuplicateException("User already exists", errors=errors)

        with self.transaction():
            try:
                user = self.user_repository.create(
                    first_name=data.first_name,
                    last_name=data.last_name,
                    email=data.email,
                    username=data.username,
                    hashed_password=get_password_hash(data.password),
                )
            except IntegrityViolationException:
                # a concurrent signup claimed the email or username first
                errors = self._taken_fields(data)
                if not errors:
                    raise
                raise DuplicateException("User already exists", errors=errors)

        self.logger.info(f"Successfully registered user: {user.id}")
        return user

    def _taken_fields(self, data: UserCreate) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        for existing in self.user_repository.find_conflicting(data.email, data.username):
            if existing.email.lower() == data.email.lower():
                errors["email"] = "User with that email already exists"
            if existing.username.lower() == data.username.lower():
                errors["username"] = "User with that username already exists"
        return errors

    @BaseService.measure_operation("authenticate_user")
    def authenticate_user(self, data: LoginRequest) -> User:
        """
        Authenticate by email or username.

        Raises:
            UnauthorizedException: On unknown credential or wrong password
        """
        user = self.user_repository.get_by_credential(data.credential)
        if user is None:
            # Keep timing comparable to the known-user path
            verify_password(data.password, DUMMY_HASH_FOR_TIMING_ATTACK)
            self.logger.warning("Authentication failed - user not found")
            raise self._invalid_credentials()

        if not verify_password(data.password, user.hashed_password):
            self.logger.warning(f"Authentication failed - incorrect password: {user.id}")
            raise self._invalid_credentials()

        self.logger.info(f"Successful authentication for user: {user.id}")
        return user

    @staticmethod
    def _invalid_credentials() -> UnauthorizedException:
        return UnauthorizedException(
            "Invalid credentials",
            code="INVALID_CREDENTIALS",
            errors={"credential": "The provided credentials were invalid."},
        )
