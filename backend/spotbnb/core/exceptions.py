# backend/spotbnb/core/exceptions.py
"""
Domain-specific exceptions for SpotBnB.

These exceptions carry a business-focused message, a machine-readable code
and an optional field-level error map. The API layer converts them with
``to_http_exception()`` and the global handlers render the JSON envelope
``{"message": ..., "code": ..., "errors": {...}}``.
"""

from typing import Any, Dict, NoReturn, Optional

from fastapi import HTTPException, status


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        errors: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.errors = errors or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        detail: Dict[str, Any] = {"message": self.message, "code": self.code}
        if self.errors:
            detail["errors"] = self.errors
        return HTTPException(status_code=self.status_code, detail=detail)


class ValidationException(DomainException):
    """Raised when request data fails business validation."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        errors: Dict[str, Any],
        message: str = "Bad Request",
        code: str = "VALIDATION_ERROR",
    ) -> None:
        super().__init__(message=message, code=code, errors=errors)


class UnauthorizedException(DomainException):
    """Raised when user is not authenticated."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenException(DomainException):
    """Raised when user lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(
        self,
        message: str = "Forbidden",
        code: Optional[str] = "FORBIDDEN",
        errors: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, code=code, errors=errors)


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, code: str = "NOT_FOUND") -> None:
        self.resource = resource
        super().__init__(message=f"{resource} couldn't be found", code=code)


class ConflictException(DomainException):
    """Raised when the request collides with concurrent work."""

    status_code = status.HTTP_409_CONFLICT


class DuplicateException(ConflictException):
    """Raised when a resource that must be unique already exists."""

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message=message, code="ALREADY_EXISTS", errors=errors)


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# Specific business exceptions


class BookingConflictException(ForbiddenException):
    """Raised when a proposed date range overlaps an existing booking on the spot."""

    START_DATE_MESSAGE = "Start date conflicts with an existing booking"
    END_DATE_MESSAGE = "End date conflicts with an existing booking"

    def __init__(self, *, start_date_conflict: bool, end_date_conflict: bool) -> None:
        errors: Dict[str, Any] = {}
        if start_date_conflict:
            errors["startDate"] = self.START_DATE_MESSAGE
        if end_date_conflict:
            errors["endDate"] = self.END_DATE_MESSAGE
        self.start_date_conflict = start_date_conflict
        self.end_date_conflict = end_date_conflict
        super().__init__(
            message="Sorry, this spot is already booked for the specified dates",
            code="BOOKING_CONFLICT",
            errors=errors,
        )


class BookingInProgressException(ConflictException):
    """Raised when another booking change for the same spot holds the lock."""

    def __init__(self) -> None:
        super().__init__(
            message="Another booking for this spot is being processed. Please retry.",
            code="BOOKING_IN_PROGRESS",
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """


class IntegrityViolationException(RepositoryException):
    """Raised when a write breaks a unique or foreign-key constraint."""


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    raise exc.to_http_exception() from exc
