# backend/spotbnb/services/image_service.py
"""
Image Service for SpotBnB

Attaches and removes image URLs on spots and reviews. Spot images belong to
the spot owner, review images to the review author.
"""

import logging

from sqlalchemy.orm import Session

from ..core.constants import MAX_REVIEW_IMAGES
from ..core.exceptions import ForbiddenException
from ..core.resource_policy import PolicyAction, authorize, enforce
from ..models.review import ReviewImage
from ..models.spot import SpotImage
from ..repositories.factory import RepositoryFactory
from ..schemas.image import ReviewImageCreate, SpotImageCreate
from .base import BaseService

logger = logging.getLogger(__name__)

IMAGE_LIMIT_MESSAGE = "Maximum number of images for this resource was reached"


class ImageService(BaseService):
    """Service for spot and review images."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.logger = logging.getLogger(__name__)
        self.spot_repository = RepositoryFactory.create_spot_repository(db)
        self.spot_image_repository = RepositoryFactory.create_spot_image_repository(db)
        self.review_repository = RepositoryFactory.create_review_repository(db)
        self.review_image_repository = RepositoryFactory.create_review_image_repository(db)

    @BaseService.measure_operation("add_spot_image")
    def add_spot_image(self, actor_id: str, spot_id: str, data: SpotImageCreate) -> SpotImage:
        spot = self.spot_repository.get_by_id(spot_id, load_relationships=False)
        enforce(authorize(PolicyAction.ADD_IMAGE, actor_id, spot), "Spot")
        with self.transaction():
            image = self.spot_image_repository.create(spot_id=spot_id, url=data.url, preview=data.preview)
        return image

    @BaseService.measure_operation("delete_spot_image")
    def delete_spot_image(self, actor_id: str, image_id: str) -> None:
        image = self.spot_image_repository.get_by_id(image_id)
        enforce(authorize(PolicyAction.DELETE, actor_id, image), "Spot Image")
        with self.transaction():
            self.spot_image_repository.delete(image)

    @BaseService.measure_operation("add_review_image")
    def add_review_image(self, actor_id: str, review_id: str, data: ReviewImageCreate) -> ReviewImage:
        """
        Attach an image to a review.

        Raises:
            NotFoundException: If the review does not exist
            ForbiddenException: If the actor is not the author or the review
                already has the maximum number of images
        """
        review = self.review_repository.get_by_id(review_id, load_relationships=False)
        enforce(authorize(PolicyAction.ADD_IMAGE, actor_id, review), "Review")
        if self.review_image_repository.count_for_review(review_id) >= MAX_REVIEW_IMAGES:
            raise ForbiddenException(IMAGE_LIMIT_MESSAGE, code="IMAGE_LIMIT_REACHED")
        with self.transaction():
            image = self.review_image_repository.create(review_id=review_id, url=data.url)
        return image

    @BaseService.measure_operation("delete_review_image")
    def delete_review_image(self, actor_id: str, image_id: str) -> None:
        image = self.review_image_repository.get_by_id(image_id)
        enforce(authorize(PolicyAction.DELETE, actor_id, image), "Review Image")
        with self.transaction():
            self.review_image_repository.delete(image)
