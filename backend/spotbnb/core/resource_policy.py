"""
Ownership-based authorization for SpotBnB resources.

``authorize`` is a pure decision function: callers load the resource (and,
for child resources, the parent spot or review) and pass the acting user's
id explicitly. ``enforce`` turns a non-allowed decision into the matching
domain exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional

from ..models.booking import Booking
from ..models.review import Review, ReviewImage
from ..models.spot import Spot, SpotImage
from .booking_rules import has_started
from .exceptions import ForbiddenException, NotFoundException


class PolicyAction(str, Enum):
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    ADD_IMAGE = "add_image"
    CREATE_BOOKING = "create_booking"
    VIEW_BOOKING_DETAILS = "view_booking_details"


class Decision(str, Enum):
    ALLOWED = "allowed"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class PolicyDecision:
    decision: Decision
    reason: str = ""

    @property
    def allowed(self) -> bool:
        return self.decision is Decision.ALLOWED


ALLOW = PolicyDecision(Decision.ALLOWED)
FORBIDDEN_MESSAGE = "Forbidden"
OWN_SPOT_BOOKING_MESSAGE = "Forbidden: Cannot book your own spot"
STARTED_BOOKING_DELETE_MESSAGE = "Bookings that have been started can't be deleted"

_MUTATIONS = {PolicyAction.UPDATE, PolicyAction.DELETE, PolicyAction.ADD_IMAGE}


def _forbid(reason: str = FORBIDDEN_MESSAGE) -> PolicyDecision:
    return PolicyDecision(Decision.FORBIDDEN, reason)


def _owner_only(actor_id: Optional[str], owner_id: Optional[str]) -> PolicyDecision:
    if actor_id is not None and actor_id == owner_id:
        return ALLOW
    return _forbid()


def authorize(
    action: PolicyAction,
    actor_id: Optional[str],
    resource: Any,
    *,
    spot: Optional[Spot] = None,
    review: Optional[Review] = None,
    today: Optional[date] = None,
) -> PolicyDecision:
    """
    Decide whether ``actor_id`` may perform ``action`` on ``resource``.

    ``spot`` is the parent spot for SpotImage and Booking resources and
    ``review`` the parent review for ReviewImage resources; both fall back to
    the loaded relationship when omitted. ``today`` is required for booking
    deletion.
    """
    if resource is None:
        return PolicyDecision(Decision.NOT_FOUND, "Resource couldn't be found")

    if isinstance(resource, Booking):
        return _authorize_booking(action, actor_id, resource, spot or resource.spot, today)

    if action is PolicyAction.READ:
        return ALLOW

    if isinstance(resource, Spot):
        if action is PolicyAction.CREATE_BOOKING:
            if actor_id is not None and actor_id == resource.owner_id:
                return _forbid(OWN_SPOT_BOOKING_MESSAGE)
            return ALLOW
        if action is PolicyAction.VIEW_BOOKING_DETAILS or action in _MUTATIONS:
            return _owner_only(actor_id, resource.owner_id)
        return _forbid()

    if isinstance(resource, SpotImage) and action in _MUTATIONS:
        parent = spot or resource.spot
        return _owner_only(actor_id, parent.owner_id if parent is not None else None)

    if isinstance(resource, Review) and action in _MUTATIONS:
        return _owner_only(actor_id, resource.user_id)

    if isinstance(resource, ReviewImage) and action in _MUTATIONS:
        parent_review = review or resource.review
        return _owner_only(actor_id, parent_review.user_id if parent_review is not None else None)

    return _forbid()


def _authorize_booking(
    action: PolicyAction,
    actor_id: Optional[str],
    booking: Booking,
    spot: Optional[Spot],
    today: Optional[date],
) -> PolicyDecision:
    is_booker = actor_id is not None and actor_id == booking.user_id

    if action in (PolicyAction.READ, PolicyAction.UPDATE):
        return ALLOW if is_booker else _forbid()

    if action is PolicyAction.DELETE:
        if today is None:
            raise ValueError("today is required to authorize booking deletion")
        if has_started(booking, today):
            return _forbid(STARTED_BOOKING_DELETE_MESSAGE)
        is_spot_owner = spot is not None and actor_id is not None and actor_id == spot.owner_id
        if not (is_booker or is_spot_owner):
            return _forbid()
        return ALLOW

    return _forbid()


def enforce(decision: PolicyDecision, resource_label: str) -> None:
    """Raise the domain exception matching a non-allowed decision."""
    if decision.decision is Decision.NOT_FOUND:
        raise NotFoundException(resource_label)
    if decision.decision is Decision.FORBIDDEN:
        raise ForbiddenException(decision.reason or FORBIDDEN_MESSAGE)


__all__ = [
    "Decision",
    "PolicyAction",
    "PolicyDecision",
    "authorize",
    "enforce",
]
