"""
Listing photo API endpoints.
Handles multi-file upload, listing, primary selection and deletion.
"""

from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, File, Form, Path, UploadFile, status

from subto.models.profile import Profile
from subto.schemas.error import get_crud_error_responses, get_error_responses
from subto.schemas.image import ImageUploadResponse, PropertyImageResponse
from subto.services.image import ImageService
from subto.utils.dependencies import get_current_user, get_image_service


router = APIRouter(tags=["Images"])


@router.post(
    "/properties/{property_id}/images",
    response_model=ImageUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload listing photos",
    description=(
        "Upload one or more JPEG, PNG or WebP files. Files that fail validation or "
        "storage are reported under 'skipped'; the request fails only if none succeed."
    ),
    responses=get_crud_error_responses()
)
async def upload_property_images(
    property_id: UUID = Path(..., description="Property ID"),
    files: List[UploadFile] = File(..., description="Image files in gallery order"),
    primary_index: Optional[int] = Form(0, ge=0, description="Position of the cover photo"),
    current_user: Profile = Depends(get_current_user),
    image_service: ImageService = Depends(get_image_service)
) -> ImageUploadResponse:
    outcome = await image_service.upload_property_images(
        property_id, files, current_user, primary_index=primary_index
    )
    return ImageUploadResponse(
        uploaded=[PropertyImageResponse.model_validate(image.to_dict()) for image in outcome.uploaded],
        skipped=outcome.skipped,
    )


@router.get(
    "/properties/{property_id}/images",
    response_model=List[PropertyImageResponse],
    status_code=status.HTTP_200_OK,
    summary="List listing photos",
    description="Primary photo first, then gallery order",
    responses=get_error_responses(404, 422)
)
async def list_property_images(
    property_id: UUID = Path(..., description="Property ID"),
    image_service: ImageService = Depends(get_image_service)
) -> List[PropertyImageResponse]:
    images = await image_service.get_property_images(property_id)
    return [PropertyImageResponse.model_validate(image.to_dict()) for image in images]


@router.put(
    "/images/{image_id}/primary",
    response_model=PropertyImageResponse,
    status_code=status.HTTP_200_OK,
    summary="Set cover photo",
    responses=get_crud_error_responses()
)
async def set_primary_image(
    image_id: UUID = Path(..., description="Image ID"),
    current_user: Profile = Depends(get_current_user),
    image_service: ImageService = Depends(get_image_service)
) -> PropertyImageResponse:
    image = await image_service.set_primary_image(image_id, current_user)
    return PropertyImageResponse.model_validate(image.to_dict())


@router.delete(
    "/images/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete photo",
    description="Remove the stored object and its row. A deleted cover photo is replaced by the first remaining one.",
    responses=get_crud_error_responses()
)
async def delete_image(
    image_id: UUID = Path(..., description="Image ID"),
    current_user: Profile = Depends(get_current_user),
    image_service: ImageService = Depends(get_image_service)
) -> None:
    await image_service.delete_image(image_id, current_user)
