"""
Listing API endpoints for browse, search, featured listings and CRUD.
Browse and detail pages are public; changing a listing requires owning it.
"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Path, Query, status

from subto.config import settings
from subto.models.profile import Profile
from subto.models.property import Property
from subto.schemas.error import get_crud_error_responses, get_error_responses
from subto.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyListResponse,
    PropertySearchQuery,
    ViewCountResponse,
)
from subto.services.property import PropertyService
from subto.utils.dependencies import (
    get_current_user,
    get_property_service,
    get_search_query,
    to_search_filters,
)


router = APIRouter(prefix="/properties", tags=["Properties"])


def _card(property_obj: Property) -> PropertyResponse:
    return PropertyResponse.model_validate(property_obj.to_dict(include_owner=True))


def _detail(property_obj: Property) -> PropertyResponse:
    return PropertyResponse.model_validate(
        property_obj.to_dict(include_contact=True, include_metrics=True)
    )


def _list(properties: List[Property]) -> PropertyListResponse:
    return PropertyListResponse(data=[_card(p) for p in properties])


@router.get(
    "",
    response_model=PropertyListResponse,
    status_code=status.HTTP_200_OK,
    summary="Browse listings",
    description=(
        "Active listings, newest first. Filters: city, state, minPrice, maxPrice, propertyType, "
        "minInterestRate, maxInterestRate, minBedrooms, maxBedrooms, limit, offset"
    ),
    responses=get_error_responses(422, 500)
)
async def list_properties(
    query: PropertySearchQuery = Depends(get_search_query),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyListResponse:
    properties = await property_service.get_properties(
        to_search_filters(query), limit=query.limit, offset=query.offset
    )
    return _list(properties)


@router.get(
    "/featured",
    response_model=PropertyListResponse,
    status_code=status.HTTP_200_OK,
    summary="Featured listings",
    responses=get_error_responses(500)
)
async def featured_properties(
    limit: int = Query(settings.featured_limit, ge=1, le=settings.max_page_size),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyListResponse:
    return _list(await property_service.get_featured_properties(limit))


@router.get(
    "/search",
    response_model=PropertyListResponse,
    status_code=status.HTTP_200_OK,
    summary="Text search",
    description="Active listings whose title, description, address or city contain the term",
    responses=get_error_responses(422, 500)
)
async def search_properties(
    q: str = Query("", max_length=200, description="Search term"),
    limit: int = Query(settings.search_limit, ge=1, le=settings.max_page_size),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyListResponse:
    return _list(await property_service.search_properties(q, limit))


@router.get(
    "/mine",
    response_model=PropertyListResponse,
    status_code=status.HTTP_200_OK,
    summary="My listings",
    description="The caller's listings of every status, newest first",
    responses=get_error_responses(401)
)
async def my_properties(
    current_user: Profile = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyListResponse:
    return _list(await property_service.get_user_properties(current_user))


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create listing",
    description="Publish a completed listing form. The caller becomes the owner.",
    responses=get_crud_error_responses()
)
async def create_property(
    property_data: PropertyCreate,
    current_user: Profile = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    """
    Create a new listing.

    Raises:
        ValidationError: If any step of the listing form is incomplete
    """
    property_obj = await property_service.create_property(property_data, current_user)
    return _detail(property_obj)


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Listing details",
    description="Full listing with owner contact, ordered images and computed metrics",
    responses=get_error_responses(404, 422)
)
async def get_property(
    property_id: UUID = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    return _detail(await property_service.get_property(property_id))


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    status_code=status.HTTP_200_OK,
    summary="Update listing",
    description="Partial update. Only the owner can update a listing.",
    responses=get_crud_error_responses()
)
async def update_property(
    property_data: PropertyUpdate,
    property_id: UUID = Path(..., description="Property ID"),
    current_user: Profile = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.update_property(property_id, property_data, current_user)
    return _detail(property_obj)


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete listing",
    description="Delete a listing and its photos. Only the owner can delete a listing.",
    responses=get_crud_error_responses()
)
async def delete_property(
    property_id: UUID = Path(..., description="Property ID"),
    current_user: Profile = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> None:
    await property_service.delete_property(property_id, current_user)


@router.post(
    "/{property_id}/views",
    response_model=ViewCountResponse,
    status_code=status.HTTP_200_OK,
    summary="Record a view",
    responses=get_error_responses(404, 422)
)
async def record_view(
    property_id: UUID = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> ViewCountResponse:
    view_count = await property_service.increment_view_count(property_id)
    return ViewCountResponse(property_id=str(property_id), view_count=view_count)
