"""
Saved-listing API endpoints.
"""

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from subto.database import get_db
from subto.models.profile import Profile
from subto.schemas.error import get_error_responses
from subto.schemas.favorite import FavoriteListResponse, FavoriteResponse, FavoriteStatusResponse
from subto.services.favorite import FavoriteService
from subto.utils.dependencies import get_current_user, get_optional_current_user


router = APIRouter(prefix="/favorites", tags=["Favorites"])


async def get_favorite_service(db: AsyncSession = Depends(get_db)) -> FavoriteService:
    return FavoriteService(db)


@router.get(
    "",
    response_model=FavoriteListResponse,
    status_code=status.HTTP_200_OK,
    summary="My saved listings",
    description="Newest first, each with the listing, its owner summary and photos",
    responses=get_error_responses(401)
)
async def list_favorites(
    current_user: Profile = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteListResponse:
    favorites = await favorite_service.get_user_favorites(current_user)
    return FavoriteListResponse(data=[FavoriteResponse.model_validate(f.to_dict()) for f in favorites])


@router.post(
    "/{property_id}",
    response_model=FavoriteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a listing",
    responses=get_error_responses(401, 404, 409, 422)
)
async def add_favorite(
    property_id: UUID = Path(..., description="Property ID"),
    current_user: Profile = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteResponse:
    favorite = await favorite_service.add_favorite(property_id, current_user)
    return FavoriteResponse.model_validate(favorite.to_dict())


@router.delete(
    "/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unsave a listing",
    description="Succeeds whether or not the listing was saved",
    responses=get_error_responses(401, 422)
)
async def remove_favorite(
    property_id: UUID = Path(..., description="Property ID"),
    current_user: Profile = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> None:
    await favorite_service.remove_favorite(property_id, current_user)


@router.get(
    "/{property_id}/status",
    response_model=FavoriteStatusResponse,
    status_code=status.HTTP_200_OK,
    summary="Is this listing saved?",
    description="Anonymous callers always get false",
    responses=get_error_responses(422)
)
async def favorite_status(
    property_id: UUID = Path(..., description="Property ID"),
    current_user: Optional[Profile] = Depends(get_optional_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteStatusResponse:
    is_favorite = await favorite_service.is_favorite(property_id, current_user)
    return FavoriteStatusResponse(property_id=str(property_id), is_favorite=is_favorite)
