"""
Profile API endpoints for viewing and editing member profiles.
"""

from uuid import UUID
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from subto.database import get_db
from subto.models.profile import Profile
from subto.schemas.error import get_error_responses
from subto.schemas.profile import ProfileResponse, ProfileUpdate, PublicProfileResponse
from subto.services.profile import ProfileService
from subto.utils.dependencies import get_current_user


router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get(
    "/me",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get own profile",
    responses=get_error_responses(401)
)
async def get_own_profile(current_user: Profile = Depends(get_current_user)) -> ProfileResponse:
    return ProfileResponse.model_validate(current_user.to_dict())


@router.put(
    "/me",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Update own profile",
    description="Change name, contact details, bio, location, avatar or marketplace role",
    responses=get_error_responses(401, 422)
)
async def update_own_profile(
    profile_data: ProfileUpdate,
    current_user: Profile = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> ProfileResponse:
    profile = await ProfileService(db).update_profile(current_user, profile_data)
    return ProfileResponse.model_validate(profile.to_dict())


@router.get(
    "/{profile_id}",
    response_model=PublicProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get a public profile",
    responses=get_error_responses(404, 422)
)
async def get_public_profile(
    profile_id: UUID = Path(..., description="Profile ID"),
    db: AsyncSession = Depends(get_db)
) -> PublicProfileResponse:
    profile = await ProfileService(db).get_public_profile(profile_id)
    return PublicProfileResponse.model_validate(profile.to_public_dict())
