"""
Booking date validation and lifecycle rules.

Bookings cover the half-open range [start_date, end_date). A booking moves
through FUTURE -> ACTIVE -> PAST as "today" advances:

    today <  start_date                 FUTURE  (editable, deletable)
    start_date <= today <= end_date     ACTIVE  (editable, not deletable)
    end_date <  today                   PAST    (immutable)

Everything here is pure: callers pass ``today`` explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Protocol


class BookingDates(Protocol):
    start_date: date
    end_date: date


class BookingPhase(str, Enum):
    FUTURE = "future"
    ACTIVE = "active"
    PAST = "past"


class BookingRuleViolation(str, Enum):
    MISSING_FIELD = "missing_field"
    INVALID_RANGE = "invalid_range"
    PAST_DATE = "past_date"
    ALREADY_STARTED = "already_started"


START_DATE_FIELD = "startDate"
END_DATE_FIELD = "endDate"

_MESSAGES = {
    (BookingRuleViolation.MISSING_FIELD, START_DATE_FIELD): "startDate is required",
    (BookingRuleViolation.MISSING_FIELD, END_DATE_FIELD): "endDate is required",
    (BookingRuleViolation.INVALID_RANGE, END_DATE_FIELD): "endDate cannot be on or before startDate",
    (BookingRuleViolation.PAST_DATE, START_DATE_FIELD): "startDate cannot be in the past",
    (BookingRuleViolation.ALREADY_STARTED, END_DATE_FIELD): "Past bookings can't be modified",
}


@dataclass(frozen=True)
class BookingRuleFailure:
    violation: BookingRuleViolation
    field: str

    @property
    def message(self) -> str:
        return _MESSAGES[(self.violation, self.field)]


@dataclass
class ValidationResult:
    failures: List[BookingRuleFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def has(self, violation: BookingRuleViolation) -> bool:
        return any(failure.violation is violation for failure in self.failures)

    @property
    def errors(self) -> Dict[str, str]:
        """Field -> message map; the first failure recorded for a field wins."""
        rendered: Dict[str, str] = {}
        for failure in self.failures:
            rendered.setdefault(failure.field, failure.message)
        return rendered


def has_started(booking: BookingDates, today: date) -> bool:
    return booking.start_date <= today


def has_ended(booking: BookingDates, today: date) -> bool:
    return booking.end_date < today


def booking_phase(booking: BookingDates, today: date) -> BookingPhase:
    if not has_started(booking, today):
        return BookingPhase.FUTURE
    if has_ended(booking, today):
        return BookingPhase.PAST
    return BookingPhase.ACTIVE


def validate_booking_dates(
    start_date: Optional[date],
    end_date: Optional[date],
    today: date,
    existing: Optional[BookingDates] = None,
) -> ValidationResult:
    """
    Check a proposed booking range.

    Every applicable failure is collected instead of stopping at the first
    one, so the API can return a complete field-level error map. Pass
    ``existing`` when editing: past bookings cannot be changed.
    """
    result = ValidationResult()

    if existing is not None and has_ended(existing, today):
        result.failures.append(BookingRuleFailure(BookingRuleViolation.ALREADY_STARTED, END_DATE_FIELD))

    if start_date is None:
        result.failures.append(BookingRuleFailure(BookingRuleViolation.MISSING_FIELD, START_DATE_FIELD))
    if end_date is None:
        result.failures.append(BookingRuleFailure(BookingRuleViolation.MISSING_FIELD, END_DATE_FIELD))

    if start_date is not None and start_date < today:
        result.failures.append(BookingRuleFailure(BookingRuleViolation.PAST_DATE, START_DATE_FIELD))
    if start_date is not None and end_date is not None and end_date <= start_date:
        result.failures.append(BookingRuleFailure(BookingRuleViolation.INVALID_RANGE, END_DATE_FIELD))

    return result


__all__ = [
    "BookingPhase",
    "BookingRuleFailure",
    "BookingRuleViolation",
    "ValidationResult",
    "booking_phase",
    "has_ended",
    "has_started",
    "validate_booking_dates",
]
