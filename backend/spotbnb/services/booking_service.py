# backend/spotbnb/services/booking_service.py
"""
Booking Service for SpotBnB

Creates, changes and removes bookings. Writes follow one sequence:

    1. validate the proposed dates (field-level 400s)
    2. load the spot/booking and apply the ownership policy
    3. take the per-spot lock (in-process, plus Redis when configured)
    4. inside one transaction: row-lock the spot, check conflicts, write

so two requests for the same spot cannot both pass the conflict check.
``today`` is injectable on every date-sensitive operation.
"""

from datetime import date
import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ..core.booking_lock import booking_lock
from ..core.booking_rules import BookingRuleViolation, ValidationResult, validate_booking_dates
from ..core.exceptions import (
    BookingInProgressException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from ..core.resource_policy import PolicyAction, authorize, enforce
from ..models.booking import Booking
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.booking_repository import BookingRepository
from ..repositories.factory import RepositoryFactory
from ..schemas.booking import (
    BookingCreate,
    BookingOut,
    BookingOwnerView,
    BookingPublicView,
    BookingWithSpot,
    CurrentBookingsResponse,
    SpotBookingsResponse,
)
from ..schemas.spot import SpotPreview
from ..schemas.user import UserSummary
from .base import BaseService
from .conflict_checker import ConflictChecker

logger = logging.getLogger(__name__)

BOOKING_LABEL = "Booking"
SPOT_LABEL = "Spot"
PAST_BOOKING_MESSAGE = "Past bookings can't be modified"


def _raise_for_invalid(result: ValidationResult) -> None:
    """Map validator failures onto the API: edits of ended bookings are 403, the rest 400."""
    if result.ok:
        return
    if result.has(BookingRuleViolation.ALREADY_STARTED):
        raise ForbiddenException(PAST_BOOKING_MESSAGE, code="BOOKING_ENDED")
    raise ValidationException(result.errors)


class BookingService(BaseService):
    """Service for booking lifecycle operations."""

    def __init__(
        self,
        db: Session,
        repository: Optional[BookingRepository] = None,
        conflict_checker: Optional[ConflictChecker] = None,
        clock: Callable[[], date] = date.today,
    ):
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.repository = repository or RepositoryFactory.create_booking_repository(db)
        self.spot_repository = RepositoryFactory.create_spot_repository(db)
        self.conflict_checker = conflict_checker or ConflictChecker(db)
        self.clock = clock

    def _today(self, today: Optional[date]) -> date:
        return today if today is not None else self.clock()

    def _check_conflicts(
        self,
        spot_id: str,
        start_date: date,
        end_date: date,
        operation: str,
        exclude_booking_id: Optional[str] = None,
    ) -> None:
        report = self.conflict_checker.find_conflicts(spot_id, start_date, end_date, exclude_booking_id)
        if report.has_conflict:
            prometheus_metrics.record_booking_conflict(operation)
            report.raise_for_conflict()

    @BaseService.measure_operation("list_spot_bookings")
    def list_spot_bookings(self, actor_id: str, spot_id: str) -> SpotBookingsResponse:
        """
        Bookings on a spot, projected for the viewer.

        The spot owner sees every booking with the booker's identity; anyone
        else sees only the reserved date ranges.
        """
        spot = self.spot_repository.get_by_id(spot_id, load_relationships=False)
        if spot is None:
            raise NotFoundException(SPOT_LABEL)

        is_owner = authorize(PolicyAction.VIEW_BOOKING_DETAILS, actor_id, spot).allowed
        bookings = self.repository.list_for_spot(spot_id, include_user=is_owner)
        if is_owner:
            return SpotBookingsResponse(
                bookings=[
                    BookingOwnerView.model_validate(
                        {
                            **BookingOut.model_validate(booking).model_dump(),
                            "user": UserSummary.model_validate(booking.user),
                        }
                    )
                    for booking in bookings
                ]
            )
        return SpotBookingsResponse(
            bookings=[BookingPublicView.model_validate(booking) for booking in bookings]
        )

    @BaseService.measure_operation("list_user_bookings")
    def list_user_bookings(self, actor_id: str) -> CurrentBookingsResponse:
        bookings = self.repository.list_for_user(actor_id)
        return CurrentBookingsResponse(
            bookings=[
                BookingWithSpot.model_validate(
                    {
                        **BookingOut.model_validate(booking).model_dump(),
                        "spot": SpotPreview.model_validate(booking.spot),
                    }
                )
                for booking in bookings
            ]
        )

    @BaseService.measure_operation("create_booking")
    def create_booking(
        self,
        actor_id: str,
        spot_id: str,
        data: BookingCreate,
        today: Optional[date] = None,
    ) -> Booking:
        """
        Book a spot for [start_date, end_date).

        Raises:
            ValidationException: Missing dates, inverted range or past start
            NotFoundException: If the spot does not exist
            ForbiddenException: If the actor owns the spot
            BookingConflictException: If the range overlaps an existing booking
            BookingInProgressException: If another write holds the spot lock
        """
        today = self._today(today)
        _raise_for_invalid(validate_booking_dates(data.start_date, data.end_date, today))

        spot = self.spot_repository.get_by_id(spot_id, load_relationships=False)
        enforce(authorize(PolicyAction.CREATE_BOOKING, actor_id, spot), SPOT_LABEL)

        self.log_operation("create_booking", spot_id=spot_id, user_id=actor_id)
        with booking_lock(spot_id) as acquired:
            if not acquired:
                raise BookingInProgressException()
            with self.transaction():
                if self.spot_repository.get_for_update(spot_id) is None:
                    raise NotFoundException(SPOT_LABEL)
                self._check_conflicts(spot_id, data.start_date, data.end_date, "create")
                booking = self.repository.create(
                    spot_id=spot_id,
                    user_id=actor_id,
                    start_date=data.start_date,
                    end_date=data.end_date,
                )

        self.logger.info(f"Booking {booking.id} created on spot {spot_id}")
        return booking

    @BaseService.measure_operation("update_booking")
    def update_booking(
        self,
        actor_id: str,
        booking_id: str,
        data: BookingCreate,
        today: Optional[date] = None,
    ) -> Booking:
        """
        Move a booking to new dates.

        Raises:
            NotFoundException: If the booking does not exist
            ForbiddenException: If the actor did not make the booking, or it has ended
            ValidationException: Missing dates, inverted range or past start
            BookingConflictException: If the new range overlaps another booking
        """
        today = self._today(today)
        booking = self.repository.get_by_id(booking_id, load_relationships=False)
        enforce(authorize(PolicyAction.UPDATE, actor_id, booking), BOOKING_LABEL)
        _raise_for_invalid(validate_booking_dates(data.start_date, data.end_date, today, existing=booking))

        spot_id = booking.spot_id
        with booking_lock(spot_id) as acquired:
            if not acquired:
                raise BookingInProgressException()
            with self.transaction():
                self.spot_repository.get_for_update(spot_id)
                self._check_conflicts(
                    spot_id, data.start_date, data.end_date, "update", exclude_booking_id=booking.id
                )
                self.repository.update(booking, start_date=data.start_date, end_date=data.end_date)

        self.logger.info(f"Booking {booking.id} moved to {data.start_date}..{data.end_date}")
        return booking

    @BaseService.measure_operation("delete_booking")
    def delete_booking(self, actor_id: str, booking_id: str, today: Optional[date] = None) -> None:
        """
        Remove a booking. The booker or the spot owner may do so until it starts.

        Raises:
            NotFoundException: If the booking does not exist
            ForbiddenException: If the actor is unrelated or the booking has started
        """
        today = self._today(today)
        booking = self.repository.get_by_id(booking_id)
        enforce(authorize(PolicyAction.DELETE, actor_id, booking, today=today), BOOKING_LABEL)
        with self.transaction():
            self.repository.delete(booking)
        self.logger.info(f"Booking {booking_id} deleted by {actor_id}")

