# backend/spotbnb/services/review_service.py
"""
Review Service for SpotBnB

One review per (user, spot). Only the author may change or remove a review.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import DuplicateException, IntegrityViolationException, NotFoundException
from ..core.resource_policy import PolicyAction, authorize, enforce
from ..models.review import Review
from ..repositories.factory import RepositoryFactory
from ..repositories.review_repository import ReviewRepository
from ..schemas.image import ReviewImageOut
from ..schemas.review import ReviewCreate, ReviewDetail, ReviewOut, ReviewsResponse
from ..schemas.spot import SpotPreview
from ..schemas.user import UserSummary
from .base import BaseService

logger = logging.getLogger(__name__)

REVIEW_LABEL = "Review"
SPOT_LABEL = "Spot"
DUPLICATE_REVIEW_MESSAGE = "User already has a review for this spot"


def review_detail(review: Review, *, include_spot: bool = False) -> ReviewDetail:
    """Render a review with its author and images; ``include_spot`` embeds the spot preview."""
    return ReviewDetail.model_validate(
        {
            **ReviewOut.model_validate(review).model_dump(),
            "user": UserSummary.model_validate(review.user) if review.user is not None else None,
            "spot": SpotPreview.model_validate(review.spot) if include_spot else None,
            "review_images": [ReviewImageOut.model_validate(image) for image in review.images],
        }
    )


class ReviewService(BaseService):
    """Service for reviews."""

    def __init__(self, db: Session, repository: Optional[ReviewRepository] = None):
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.repository = repository or RepositoryFactory.create_review_repository(db)
        self.spot_repository = RepositoryFactory.create_spot_repository(db)

    def _require_spot(self, spot_id: str) -> None:
        if not self.spot_repository.exists(id=spot_id):
            raise NotFoundException(SPOT_LABEL)

    @BaseService.measure_operation("list_spot_reviews")
    def list_spot_reviews(self, spot_id: str) -> ReviewsResponse:
        self._require_spot(spot_id)
        reviews: List[Review] = self.repository.list_for_spot(spot_id)
        return ReviewsResponse(reviews=[review_detail(review) for review in reviews])

    @BaseService.measure_operation("list_user_reviews")
    def list_user_reviews(self, actor_id: str) -> ReviewsResponse:
        reviews = self.repository.list_for_user(actor_id)
        return ReviewsResponse(reviews=[review_detail(review, include_spot=True) for review in reviews])

    @BaseService.measure_operation("create_review")
    def create_review(self, actor_id: str, spot_id: str, data: ReviewCreate) -> Review:
        """
        Create the author's review of a spot.

        Raises:
            NotFoundException: If the spot does not exist
            DuplicateException: If the author already reviewed this spot
        """
        self._require_spot(spot_id)
        if self.repository.get_for_user_and_spot(actor_id, spot_id) is not None:
            raise DuplicateException(DUPLICATE_REVIEW_MESSAGE)

        with self.transaction():
            try:
                review = self.repository.create(
                    user_id=actor_id, spot_id=spot_id, review=data.review, stars=data.stars
                )
            except IntegrityViolationException:
                # a concurrent request stored the same (user, spot) pair first
                if self.repository.get_for_user_and_spot(actor_id, spot_id) is None:
                    raise
                raise DuplicateException(DUPLICATE_REVIEW_MESSAGE)
        self.logger.info(f"Review {review.id} created for spot {spot_id}")
        return review

    @BaseService.measure_operation("update_review")
    def update_review(self, actor_id: str, review_id: str, data: ReviewCreate) -> Review:
        review = self.repository.get_by_id(review_id, load_relationships=False)
        enforce(authorize(PolicyAction.UPDATE, actor_id, review), REVIEW_LABEL)
        with self.transaction():
            self.repository.update(review, review=data.review, stars=data.stars)
        return review

    @BaseService.measure_operation("delete_review")
    def delete_review(self, actor_id: str, review_id: str) -> None:
        review = self.repository.get_by_id(review_id, load_relationships=False)
        enforce(authorize(PolicyAction.DELETE, actor_id, review), REVIEW_LABEL)
        with self.transaction():
            self.repository.delete(review)
