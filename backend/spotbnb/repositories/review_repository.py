# backend/spotbnb/repositories/review_repository.py
"""
Repositories for reviews and review images.

Follows repository pattern: no business logic, DB-only operations.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Query, Session, joinedload, selectinload

from ..models.review import Review, ReviewImage
from ..models.spot import Spot
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ReviewRepository(BaseRepository[Review]):
    """Data access for `Review`."""

    def __init__(self, db: Session):
        super().__init__(db, Review)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(Review.user), selectinload(Review.images))

    def list_for_spot(self, spot_id: str) -> List[Review]:
        query = (
            self.db.query(Review)
            .options(joinedload(Review.user), selectinload(Review.images))
            .filter(Review.spot_id == spot_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
        )
        return self._execute_query(query)

    def list_for_user(self, user_id: str) -> List[Review]:
        """Reviews written by a user with reviewer, spot (+ images) and review images."""
        query = (
            self.db.query(Review)
            .options(
                joinedload(Review.user),
                joinedload(Review.spot).selectinload(Spot.images),
                selectinload(Review.images),
            )
            .filter(Review.user_id == user_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
        )
        return self._execute_query(query)

    def get_for_user_and_spot(self, user_id: str, spot_id: str) -> Optional[Review]:
        return self.find_one_by(user_id=user_id, spot_id=spot_id)


class ReviewImageRepository(BaseRepository[ReviewImage]):
    """Data access for `ReviewImage`."""

    def __init__(self, db: Session):
        super().__init__(db, ReviewImage)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(ReviewImage.review))

    def count_for_review(self, review_id: str) -> int:
        return self.count(review_id=review_id)
