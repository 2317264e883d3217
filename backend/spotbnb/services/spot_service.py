# backend/spotbnb/services/spot_service.py
"""
Spot Service for SpotBnB

Listing, detail and owner-scoped CRUD for spots. Ratings are aggregated in
one grouped query per page so list endpoints stay at a fixed query count.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundException
from ..core.resource_policy import PolicyAction, authorize, enforce
from ..models.spot import Spot
from ..repositories.factory import RepositoryFactory
from ..repositories.spot_repository import RatingStats, SpotFilters, SpotRepository
from ..schemas.image import SpotImageOut
from ..schemas.spot import (
    OwnedSpotsResponse,
    SpotCreate,
    SpotDetail,
    SpotListQuery,
    SpotListResponse,
    SpotOut,
    SpotSummary,
)
from ..schemas.user import UserSummary
from .base import BaseService

logger = logging.getLogger(__name__)

SPOT_LABEL = "Spot"


class SpotService(BaseService):
    """Service for spot listings and owner operations."""

    def __init__(self, db: Session, repository: Optional[SpotRepository] = None):
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.repository = repository or RepositoryFactory.create_spot_repository(db)

    def _summaries(self, spots: List[Spot]) -> List[SpotSummary]:
        stats = self.repository.get_rating_stats(spot.id for spot in spots)
        empty = RatingStats(review_count=0, average=None)
        return [
            SpotSummary.model_validate(spot).model_copy(
                update={"avg_rating": stats.get(spot.id, empty).average}
            )
            for spot in spots
        ]

    @BaseService.measure_operation("list_spots")
    def list_spots(self, query: SpotListQuery) -> SpotListResponse:
        """Filtered, paginated spot listing with average rating and preview image."""
        filters = SpotFilters(
            min_lat=query.min_lat,
            max_lat=query.max_lat,
            min_lng=query.min_lng,
            max_lng=query.max_lng,
            min_price=query.min_price,
            max_price=query.max_price,
        )
        spots = self.repository.list_spots(offset=query.offset, limit=query.size, filters=filters)
        return SpotListResponse(spots=self._summaries(spots), page=query.page, size=query.size)

    @BaseService.measure_operation("list_owned_spots")
    def list_owned_spots(self, actor_id: str) -> OwnedSpotsResponse:
        return OwnedSpotsResponse(spots=self._summaries(self.repository.list_by_owner(actor_id)))

    def get_spot_or_404(self, spot_id: str) -> Spot:
        spot = self.repository.get_by_id(spot_id)
        if spot is None:
            raise NotFoundException(SPOT_LABEL)
        return spot

    @BaseService.measure_operation("get_spot_detail")
    def get_spot_detail(self, spot_id: str) -> SpotDetail:
        spot = self.get_spot_or_404(spot_id)
        stats = self.repository.get_rating_stats([spot.id])[spot.id]
        return SpotDetail.model_validate(
            {
                **SpotOut.model_validate(spot).model_dump(),
                "num_reviews": stats.review_count,
                "avg_star_rating": stats.average,
                "spot_images": [SpotImageOut.model_validate(image) for image in spot.images],
                "owner": UserSummary.model_validate(spot.owner),
            }
        )

    @BaseService.measure_operation("create_spot")
    def create_spot(self, actor_id: str, data: SpotCreate) -> Spot:
        with self.transaction():
            spot = self.repository.create(owner_id=actor_id, **data.model_dump())
        self.logger.info(f"Spot {spot.id} created by {actor_id}")
        return spot

    @BaseService.measure_operation("update_spot")
    def update_spot(self, actor_id: str, spot_id: str, data: SpotCreate) -> Spot:
        spot = self.repository.get_by_id(spot_id)
        enforce(authorize(PolicyAction.UPDATE, actor_id, spot), SPOT_LABEL)
        with self.transaction():
            self.repository.update(spot, **data.model_dump())
        return spot

    @BaseService.measure_operation("delete_spot")
    def delete_spot(self, actor_id: str, spot_id: str) -> None:
        """Delete a spot; its images, reviews and bookings go with it."""
        spot = self.repository.get_by_id(spot_id, load_relationships=False)
        enforce(authorize(PolicyAction.DELETE, actor_id, spot), SPOT_LABEL)
        with self.transaction():
            self.repository.delete(spot)
        self.logger.info(f"Spot {spot_id} deleted by {actor_id}")
