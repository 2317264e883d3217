# backend/spotbnb/repositories/booking_repository.py
"""
Booking Repository for SpotBnB.

Listing queries for the "my bookings" page and the per-spot booking views.
Conflict lookups live in ConflictCheckerRepository.
"""

import logging
from typing import List

from sqlalchemy.orm import Query, Session, joinedload, selectinload

from ..models.booking import Booking
from ..models.spot import Spot
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):
    """Repository for Booking data access."""

    def __init__(self, db: Session):
        super().__init__(db, Booking)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Booking.spot))

    def list_for_user(self, user_id: str) -> List[Booking]:
        """A user's bookings with the spot and its images loaded, by start date."""
        query = (
            self.db.query(Booking)
            .options(joinedload(Booking.spot).selectinload(Spot.images))
            .filter(Booking.user_id == user_id)
            .order_by(Booking.start_date, Booking.id)
        )
        return self._execute_query(query)

    def list_for_spot(self, spot_id: str, *, include_user: bool = False) -> List[Booking]:
        """Bookings on a spot by start date; ``include_user`` loads the booker."""
        query = self.db.query(Booking).filter(Booking.spot_id == spot_id)
        if include_user:
            query = query.options(joinedload(Booking.user))
        query = query.order_by(Booking.start_date, Booking.id)
        return self._execute_query(query)
