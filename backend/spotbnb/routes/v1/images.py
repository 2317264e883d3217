# backend/spotbnb/routes/v1/images.py
"""
Image deletion routes.

Endpoints:
    DELETE /spotImages/{image_id}   → Remove a spot image (spot owner)
    DELETE /reviewImages/{image_id} → Remove a review image (review author)
"""

import logging

from fastapi import APIRouter, Depends

from ...api.dependencies import get_current_user, get_image_service
from ...core.exceptions import DomainException, handle_domain_exception
from ...models.user import User
from ...schemas.base_responses import MessageResponse
from ...services.image_service import ImageService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["images"])


@router.delete("/spotImages/{image_id}", response_model=MessageResponse)
def delete_spot_image(
    image_id: str,
    current_user: User = Depends(get_current_user),
    service: ImageService = Depends(get_image_service),
) -> MessageResponse:
    try:
        service.delete_spot_image(current_user.id, image_id)
    except DomainException as exc:
        handle_domain_exception(exc)
    return MessageResponse()


@router.delete("/reviewImages/{image_id}", response_model=MessageResponse)
def delete_review_image(
    image_id: str,
    current_user: User = Depends(get_current_user),
    service: ImageService = Depends(get_image_service),
) -> MessageResponse:
    try:
        service.delete_review_image(current_user.id, image_id)
    except DomainException as exc:
        handle_domain_exception(exc)
    return MessageResponse()
