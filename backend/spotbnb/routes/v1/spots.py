# backend/spotbnb/routes/v1/spots.py
"""
Spot routes.

Endpoints:
    GET /spots                    → Paginated, filterable listing (public)
    GET /spots/current            → Spots owned by the current user
    GET /spots/{spot_id}          → Spot detail with images and owner (public)
    POST /spots                   → Create a spot
    PUT /spots/{spot_id}          → Replace a spot (owner)
    DELETE /spots/{spot_id}       → Delete a spot (owner)
    POST /spots/{spot_id}/images  → Attach an image (owner)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import ValidationError

from ...api.dependencies import get_current_user, get_image_service, get_spot_service
from ...core.exceptions import DomainException, ValidationException, handle_domain_exception
from ...errors import field_errors
from ...models.user import User
from ...schemas.base_responses import MessageResponse
from ...schemas.image import SpotImageCreate, SpotImageOut
from ...schemas.spot import (
    OwnedSpotsResponse,
    SpotCreate,
    SpotDetail,
    SpotListQuery,
    SpotListResponse,
    SpotOut,
)
from ...services.image_service import ImageService
from ...services.spot_service import SpotService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["spots"])


@router.get("/spots", response_model=SpotListResponse)
def list_spots(
    page: Optional[str] = Query(None),
    size: Optional[str] = Query(None),
    min_lat: Optional[str] = Query(None, alias="minLat"),
    max_lat: Optional[str] = Query(None, alias="maxLat"),
    min_lng: Optional[str] = Query(None, alias="minLng"),
    max_lng: Optional[str] = Query(None, alias="maxLng"),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    service: SpotService = Depends(get_spot_service),
) -> SpotListResponse:
    """
    List spots.

    Query values are validated together so a bad request reports every
    offending parameter at once.
    """
    try:
        query = SpotListQuery(
            page=page,
            size=size,
            min_lat=min_lat,
            max_lat=max_lat,
            min_lng=min_lng,
            max_lng=max_lng,
            min_price=min_price,
            max_price=max_price,
        )
    except ValidationError as exc:
        handle_domain_exception(ValidationException(field_errors(exc.errors())))

    try:
        return service.list_spots(query)
    except DomainException as exc:
        handle_domain_exception(exc)


@router.get("/spots/current", response_model=OwnedSpotsResponse)
def list_my_spots(
    current_user: User = Depends(get_current_user),
    service: SpotService = Depends(get_spot_service),
) -> OwnedSpotsResponse:
    return service.list_owned_spots(current_user.id)


@router.get("/spots/{spot_id}", response_model=SpotDetail)
def get_spot(spot_id: str, service: SpotService = Depends(get_spot_service)) -> SpotDetail:
    try:
        return service.get_spot_detail(spot_id)
    except DomainException as exc:
        handle_domain_exception(exc)


@router.post("/spots", response_model=SpotOut, status_code=status.HTTP_201_CREATED)
def create_spot(
    payload: SpotCreate,
    current_user: User = Depends(get_current_user),
    service: SpotService = Depends(get_spot_service),
) -> SpotOut:
    try:
        spot = service.create_spot(current_user.id, payload)
    except DomainException as exc:
        handle_domain_exception(exc)
    return SpotOut.model_validate(spot)


@router.put("/spots/{spot_id}", response_model=SpotOut)
def update_spot(
    spot_id: str,
    payload: SpotCreate,
    current_user: User = Depends(get_current_user),
    service: SpotService = Depends(get_spot_service),
) -> SpotOut:
    try:
        spot = service.update_spot(current_user.id, spot_id, payload)
    except DomainException as exc:
        handle_domain_exception(exc)
    return SpotOut.model_validate(spot)


@router.delete("/spots/{spot_id}", response_model=MessageResponse)
def delete_spot(
    spot_id: str,
    current_user: User = Depends(get_current_user),
    service: SpotService = Depends(get_spot_service),
) -> MessageResponse:
    try:
        service.delete_spot(current_user.id, spot_id)
    except DomainException as exc:
        handle_domain_exception(exc)
    return MessageResponse()


@router.post("/spots/{spot_id}/images", response_model=SpotImageOut, status_code=status.HTTP_201_CREATED)
def add_spot_image(
    spot_id: str,
    payload: SpotImageCreate,
    current_user: User = Depends(get_current_user),
    service: ImageService = Depends(get_image_service),
) -> SpotImageOut:
    try:
        image = service.add_spot_image(current_user.id, spot_id, payload)
    except DomainException as exc:
        handle_domain_exception(exc)
    return SpotImageOut.model_validate(image)
