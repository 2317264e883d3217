# backend/spotbnb/repositories/conflict_checker_repository.py
"""
ConflictChecker Repository for SpotBnB

Loads the bookings on a spot that could collide with a proposed date range.
The SQL filter narrows candidates with the same half-open overlap rule the
evaluator applies (start < other_end AND other_start < end).
"""

from datetime import date
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.booking import Booking
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ConflictCheckerRepository(BaseRepository[Booking]):
    """Repository for conflict checking data access."""

    def __init__(self, db: Session):
        super().__init__(db, Booking)

    def get_bookings_for_conflict_check(
        self,
        spot_id: str,
        start_date: date,
        end_date: date,
        exclude_booking_id: Optional[str] = None,
    ) -> List[Booking]:
        """
        Get bookings on ``spot_id`` overlapping [start_date, end_date).

        Args:
            spot_id: The spot to check
            start_date: Proposed first night
            end_date: Proposed checkout day (exclusive)
            exclude_booking_id: Booking being edited, left out of the result

        Returns:
            Overlapping bookings ordered by start date
        """
        query = self.db.query(Booking).filter(
            Booking.spot_id == spot_id,
            Booking.start_date < end_date,
            Booking.end_date > start_date,
        )
        if exclude_booking_id:
            query = query.filter(Booking.id != exclude_booking_id)
        return self._execute_query(query.order_by(Booking.start_date, Booking.id))
