# backend/spotbnb/routes/v1/reviews.py
"""
Review routes.

Endpoints:
    GET /spots/{spot_id}/reviews     → Reviews of a spot (public)
    POST /spots/{spot_id}/reviews    → Review a spot (one per user)
    GET /reviews/current             → Current user's reviews with their spots
    PUT /reviews/{review_id}         → Edit a review (author)
    DELETE /reviews/{review_id}      → Delete a review (author)
    POST /reviews/{review_id}/images → Attach an image (author, max 10)
"""

import logging

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_current_user, get_image_service, get_review_service
from ...core.exceptions import DomainException, handle_domain_exception
from ...models.user import User
from ...schemas.base_responses import MessageResponse
from ...schemas.image import ReviewImageCreate, ReviewImageOut
from ...schemas.review import ReviewCreate, ReviewOut, ReviewsResponse
from ...services.image_service import ImageService
from ...services.review_service import ReviewService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reviews"])


@router.get("/spots/{spot_id}/reviews", response_model=ReviewsResponse)
def list_spot_reviews(spot_id: str, service: ReviewService = Depends(get_review_service)) -> ReviewsResponse:
    try:
        return service.list_spot_reviews(spot_id)
    except DomainException as exc:
        handle_domain_exception(exc)


@router.post("/spots/{spot_id}/reviews", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def create_review(
    spot_id: str,
    payload: ReviewCreate,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
) -> ReviewOut:
    try:
        review = service.create_review(current_user.id, spot_id, payload)
    except DomainException as exc:
        handle_domain_exception(exc)
    return ReviewOut.model_validate(review)


@router.get("/reviews/current", response_model=ReviewsResponse)
def list_my_reviews(
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
) -> ReviewsResponse:
    return service.list_user_reviews(current_user.id)


@router.put("/reviews/{review_id}", response_model=ReviewOut)
def update_review(
    review_id: str,
    payload: ReviewCreate,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
) -> ReviewOut:
    try:
        review = service.update_review(current_user.id, review_id, payload)
    except DomainException as exc:
        handle_domain_exception(exc)
    return ReviewOut.model_validate(review)


@router.delete("/reviews/{review_id}", response_model=MessageResponse)
def delete_review(
    review_id: str,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
) -> MessageResponse:
    try:
        service.delete_review(current_user.id, review_id)
    except DomainException as exc:
        handle_domain_exception(exc)
    return MessageResponse()


@router.post(
    "/reviews/{review_id}/images",
    response_model=ReviewImageOut,
    status_code=status.HTTP_201_CREATED,
)
def add_review_image(
    review_id: str,
    payload: ReviewImageCreate,
    current_user: User = Depends(get_current_user),
    service: ImageService = Depends(get_image_service),
) -> ReviewImageOut:
    try:
        image = service.add_review_image(current_user.id, review_id, payload)
    except DomainException as exc:
        handle_domain_exception(exc)
    return ReviewImageOut.model_validate(image)
