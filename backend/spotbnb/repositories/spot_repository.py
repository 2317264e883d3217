# backend/spotbnb/repositories/spot_repository.py
"""
Spot Repository for SpotBnB.

Listing, detail and ownership queries for spots. Every related row a caller
needs is loaded explicitly here; routes never rely on lazy loading.
"""

from dataclasses import dataclass
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from ..core.exceptions import RepositoryException
from ..models.review import Review
from ..models.spot import Spot
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpotFilters:
    min_lat: Optional[float] = None
    max_lat: Optional[float] = None
    min_lng: Optional[float] = None
    max_lng: Optional[float] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None


@dataclass(frozen=True)
class RatingStats:
    review_count: int
    average: Optional[float]


class SpotRepository(BaseRepository[Spot]):
    """Repository for Spot data access."""

    def __init__(self, db: Session):
        super().__init__(db, Spot)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(selectinload(Spot.images), joinedload(Spot.owner))

    def list_spots(self, *, offset: int, limit: int, filters: SpotFilters) -> List[Spot]:
        """Spots matching the coordinate/price bounds, oldest first, with images loaded."""
        query = self.db.query(Spot).options(selectinload(Spot.images))
        if filters.min_lat is not None:
            query = query.filter(Spot.lat >= filters.min_lat)
        if filters.max_lat is not None:
            query = query.filter(Spot.lat <= filters.max_lat)
        if filters.min_lng is not None:
            query = query.filter(Spot.lng >= filters.min_lng)
        if filters.max_lng is not None:
            query = query.filter(Spot.lng <= filters.max_lng)
        if filters.min_price is not None:
            query = query.filter(Spot.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.filter(Spot.price <= filters.max_price)
        query = query.order_by(Spot.created_at, Spot.id).offset(offset).limit(limit)
        return self._execute_query(query)

    def list_by_owner(self, owner_id: str) -> List[Spot]:
        query = (
            self.db.query(Spot)
            .options(selectinload(Spot.images))
            .filter(Spot.owner_id == owner_id)
            .order_by(Spot.created_at, Spot.id)
        )
        return self._execute_query(query)

    def get_for_update(self, spot_id: str) -> Optional[Spot]:
        """
        Load a spot with a row lock (SELECT ... FOR UPDATE).

        Serializes booking writes for the same spot until the surrounding
        transaction ends. SQLite ignores the clause and takes no lock before the
        first write, so there ``booking_lock`` alone keeps conflict checks apart.
        """
        query = self.db.query(Spot).filter(Spot.id == spot_id).with_for_update()
        return self._execute_first(query)

    def get_rating_stats(self, spot_ids: Iterable[str]) -> Dict[str, RatingStats]:
        """Review count and average stars per spot, in one grouped query."""
        ids = list(spot_ids)
        if not ids:
            return {}
        try:
            rows: List[Tuple[str, int, Optional[float]]] = (
                self.db.query(Review.spot_id, func.count(Review.id), func.avg(Review.stars))
                .filter(Review.spot_id.in_(ids))
                .group_by(Review.spot_id)
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error aggregating ratings: {str(e)}")
            raise RepositoryException(f"Failed to aggregate ratings: {str(e)}")

        stats = {spot_id: RatingStats(review_count=0, average=None) for spot_id in ids}
        for spot_id, count, average in rows:
            stats[spot_id] = RatingStats(
                review_count=int(count),
                average=round(float(average), 2) if average is not None else None,
            )
        return stats
