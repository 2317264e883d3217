# backend/spotbnb/services/conflict_checker.py
"""
Conflict Checker Service for SpotBnB

Detects date-range collisions between a proposed booking and the existing
bookings on the same spot. Ranges are half-open [start_date, end_date): the
checkout day of one booking may be the first night of the next.

``find_conflicts`` is the pure evaluator; ``ConflictChecker`` loads the
candidate bookings for a spot and delegates to it.
"""

from dataclasses import dataclass, field
from datetime import date
import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from ..core.booking_rules import BookingDates
from ..core.exceptions import BookingConflictException
from ..models.booking import Booking
from ..repositories import RepositoryFactory
from ..repositories.conflict_checker_repository import ConflictCheckerRepository
from .base import BaseService

logger = logging.getLogger(__name__)


@dataclass
class ConflictReport:
    """Result of checking a proposed range against existing bookings."""

    bookings: List[Booking] = field(default_factory=list)
    start_date_conflict: bool = False
    end_date_conflict: bool = False

    @property
    def has_conflict(self) -> bool:
        return bool(self.bookings)

    def raise_for_conflict(self) -> None:
        if self.has_conflict:
            raise BookingConflictException(
                start_date_conflict=self.start_date_conflict,
                end_date_conflict=self.end_date_conflict,
            )


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    return start_a < end_b and start_b < end_a


def find_conflicts(
    existing_bookings: Iterable[BookingDates],
    proposed_start: date,
    proposed_end: date,
    exclude_booking_id: Optional[str] = None,
) -> ConflictReport:
    """
    Evaluate a proposed range against ``existing_bookings``.

    The caller supplies bookings for a single spot. The booking whose id is
    ``exclude_booking_id`` is skipped so an edit never collides with itself.

    Flags:
        start_date_conflict: proposed start falls in [b.start, b.end) of a conflict
        end_date_conflict: proposed end falls in (b.start, b.end] of a conflict

    A proposed range that covers an existing booking sets both flags.
    """
    conflicts = [
        booking
        for booking in existing_bookings
        if (exclude_booking_id is None or getattr(booking, "id", None) != exclude_booking_id)
        and ranges_overlap(proposed_start, proposed_end, booking.start_date, booking.end_date)
    ]
    conflicts.sort(key=lambda booking: (booking.start_date, str(getattr(booking, "id", ""))))

    report = ConflictReport(bookings=conflicts)
    for booking in conflicts:
        if booking.start_date <= proposed_start < booking.end_date:
            report.start_date_conflict = True
        if booking.start_date < proposed_end <= booking.end_date:
            report.end_date_conflict = True
        if proposed_start <= booking.start_date and booking.end_date <= proposed_end:
            report.start_date_conflict = True
            report.end_date_conflict = True
    return report


class ConflictChecker(BaseService):
    """
    Service for checking booking conflicts on a spot.

    Must be called inside the transaction that will write the booking so the
    spot row lock taken by the caller covers the read.
    """

    def __init__(self, db: Session, repository: Optional[ConflictCheckerRepository] = None):
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.repository = repository or RepositoryFactory.create_conflict_checker_repository(db)

    @BaseService.measure_operation("find_conflicts")
    def find_conflicts(
        self,
        spot_id: str,
        proposed_start: date,
        proposed_end: date,
        exclude_booking_id: Optional[str] = None,
    ) -> ConflictReport:
        """
        Check a proposed range against the bookings stored for ``spot_id``.

        Args:
            spot_id: The spot being booked
            proposed_start: First night
            proposed_end: Checkout day
            exclude_booking_id: Booking being edited

        Returns:
            ConflictReport with the colliding bookings and flagged fields
        """
        candidates = self.repository.get_bookings_for_conflict_check(
            spot_id, proposed_start, proposed_end, exclude_booking_id
        )
        report = find_conflicts(candidates, proposed_start, proposed_end, exclude_booking_id)

        if report.has_conflict:
            self.logger.warning(
                f"Found {len(report.bookings)} booking conflicts for spot {spot_id} "
                f"between {proposed_start} and {proposed_end}"
            )
        return report
