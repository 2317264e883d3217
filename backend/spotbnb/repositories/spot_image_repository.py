# backend/spotbnb/repositories/spot_image_repository.py
"""Data access for spot images."""

import logging

from sqlalchemy.orm import Query, Session, joinedload

from ..models.spot import SpotImage
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class SpotImageRepository(BaseRepository[SpotImage]):
    """Data access for `SpotImage`; the parent spot is loaded for ownership checks."""

    def __init__(self, db: Session):
        super().__init__(db, SpotImage)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(joinedload(SpotImage.spot))
