# backend/spotbnb/routes/v1/bookings.py
"""
Booking routes.

All business logic delegated to BookingService.

Endpoints:
    GET /spots/{spot_id}/bookings  → Bookings on a spot (owner sees bookers)
    POST /spots/{spot_id}/bookings → Book a spot
    GET /bookings/current          → Current user's bookings with their spots
    PUT /bookings/{booking_id}     → Change dates (booker, until the booking ends)
    DELETE /bookings/{booking_id}  → Cancel (booker or spot owner, before it starts)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_booking_service, get_current_user
from ...core.exceptions import DomainException, handle_domain_exception
from ...models.user import User
from ...schemas.base_responses import MessageResponse
from ...schemas.booking import (
    BookingCreate,
    BookingOut,
    CurrentBookingsResponse,
    SpotBookingsResponse,
)
from ...services.booking_service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookings"])


@router.get("/spots/{spot_id}/bookings", response_model=SpotBookingsResponse)
def list_spot_bookings(
    spot_id: str,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
) -> SpotBookingsResponse:
    try:
        return service.list_spot_bookings(current_user.id, spot_id)
    except DomainException as exc:
        handle_domain_exception(exc)


@router.post("/spots/{spot_id}/bookings", response_model=BookingOut, status_code=status.HTTP_201_CREATED)
def create_booking(
    spot_id: str,
    payload: Optional[BookingCreate] = None,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
) -> BookingOut:
    """
    Book a spot for [startDate, endDate).

    Overlapping an existing booking answers 403 with the conflicting
    field(s) flagged in ``errors``.
    """
    try:
        booking = service.create_booking(current_user.id, spot_id, payload or BookingCreate())
    except DomainException as exc:
        handle_domain_exception(exc)
    return BookingOut.model_validate(booking)


@router.get("/bookings/current", response_model=CurrentBookingsResponse)
def list_my_bookings(
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
) -> CurrentBookingsResponse:
    return service.list_user_bookings(current_user.id)


@router.put("/bookings/{booking_id}", response_model=BookingOut)
def update_booking(
    booking_id: str,
    payload: Optional[BookingCreate] = None,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
) -> BookingOut:
    try:
        booking = service.update_booking(current_user.id, booking_id, payload or BookingCreate())
    except DomainException as exc:
        handle_domain_exception(exc)
    return BookingOut.model_validate(booking)


@router.delete("/bookings/{booking_id}", response_model=MessageResponse)
def delete_booking(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
) -> MessageResponse:
    try:
        service.delete_booking(current_user.id, booking_id)
    except DomainException as exc:
        handle_domain_exception(exc)
    return MessageResponse()
