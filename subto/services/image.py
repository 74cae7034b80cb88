"""
Image service for listing photo uploads, primary-image management and cleanup.
A failed file is skipped; the batch only fails when no file makes it through.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from subto.clients.storage import StorageBackend
from subto.config import settings
from subto.models.image import PropertyImage
from subto.models.profile import Profile
from subto.repositories.image import ImageRepository
from subto.services.property import PropertyService
from subto.utils.exceptions import APIException, FileUploadError, NotFoundError
from subto.utils.file_utils import FileValidator, build_storage_path
import uuid
import logging

logger = logging.getLogger(__name__)


@dataclass
class UploadOutcome:
    uploaded: List[PropertyImage] = field(default_factory=list)
    skipped: List[dict] = field(default_factory=list)

    def skip(self, index: int, file: UploadFile, reason: str) -> None:
        logger.warning(f"Skipping upload {index} ({file.filename}): {reason}")
        self.skipped.append({"index": index, "filename": file.filename, "reason": reason})


class ImageService:
    """Service for managing listing photos in storage and in the property_images table."""

    def __init__(self, db_session: AsyncSession, storage: StorageBackend):
        self.db = db_session
        self.storage = storage
        self.image_repo = ImageRepository(db_session)
        self.property_service = PropertyService(db_session, storage)

    async def upload_property_images(
        self,
        property_id: uuid.UUID,
        files: List[UploadFile],
        current_user: Profile,
        primary_index: Optional[int] = 0,
    ) -> UploadOutcome:
        """
        Upload photos for a listing the caller owns.

        Each file is validated, stored at ``{property_id}/{epoch_ms}-{i}.{ext}`` and
        recorded with ``order_index = i``. Files that fail any step are skipped.

        Args:
            property_id: Listing receiving the photos
            files: Uploaded files in gallery order
            current_user: Caller, must own the listing
            primary_index: Position of the file to mark as primary, or None

        Returns:
            UploadOutcome with stored images and skipped files

        Raises:
            FileUploadError: If no files were sent, too many were sent, or none succeeded
        """
        await self.property_service.get_owned_property(property_id, current_user)

        if not files:
            raise FileUploadError("No files provided")
        if len(files) > settings.max_images_per_upload:
            raise FileUploadError(f"At most {settings.max_images_per_upload} images per upload")

        outcome = UploadOutcome()
        for index, file in enumerate(files):
            try:
                image = await FileValidator.validate_upload_file(file)
            except APIException as e:
                outcome.skip(index, file, e.detail)
                continue

            path = build_storage_path(property_id, index, image.extension)
            try:
                await self.storage.upload(path, image.content, image.content_type)
            except APIException as e:
                outcome.skip(index, file, e.detail)
                continue

            try:
                row = await self.image_repo.add_image({
                    "property_id": property_id,
                    "image_url": self.storage.get_public_url(path),
                    "storage_path": path,
                    "is_primary": index == primary_index,
                    "caption": None,
                    "order_index": index,
                })
            except SQLAlchemyError as e:
                logger.error(f"Failed to record image {path}: {e}")
                await self._remove_objects([path])
                outcome.skip(index, file, "Failed to save image record")
                continue

            outcome.uploaded.append(row)

        if not outcome.uploaded:
            reasons = "; ".join(s["reason"] for s in outcome.skipped)
            raise FileUploadError(f"No images were uploaded ({reasons})")

        logger.info(
            f"Uploaded {len(outcome.uploaded)} images to property {property_id}, "
            f"skipped {len(outcome.skipped)}"
        )
        return outcome

    async def get_property_images(self, property_id: uuid.UUID) -> List[PropertyImage]:
        await self.property_service.get_property(property_id)
        return await self.image_repo.get_by_property(property_id)

    async def _get_owned_image(self, image_id: uuid.UUID, current_user: Profile) -> PropertyImage:
        image = await self.image_repo.get_by_id(image_id)
        if not image:
            raise NotFoundError("Image", str(image_id))
        await self.property_service.get_owned_property(image.property_id, current_user)
        return image

    async def set_primary_image(self, image_id: uuid.UUID, current_user: Profile) -> PropertyImage:
        """Make an image the listing's cover, clearing the previous one."""
        image = await self._get_owned_image(image_id, current_user)
        await self.image_repo.clear_primary(image.property_id, commit=False)
        updated = await self.image_repo.update(image_id, {"is_primary": True})
        logger.info(f"Image {image_id} is now primary for property {image.property_id}")
        return updated

    async def delete_image(self, image_id: uuid.UUID, current_user: Profile) -> None:
        """
        Delete a photo from storage and the database.

        When the primary image goes, the lowest order_index image takes over.
        """
        image = await self._get_owned_image(image_id, current_user)
        property_id = image.property_id
        was_primary = image.is_primary

        await self._remove_objects([image.storage_path])
        await self.image_repo.delete(image_id)

        if was_primary:
            promoted = await self.image_repo.promote_first(property_id)
            if promoted:
                logger.info(f"Image {promoted.id} promoted to primary for property {property_id}")

        logger.info(f"Image {image_id} deleted from property {property_id}")

    async def _remove_objects(self, paths: List[str]) -> None:
        try:
            await self.storage.remove(paths)
        except APIException as e:
            logger.warning(f"Could not remove stored objects {paths}: {e.detail}")
