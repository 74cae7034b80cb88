"""
PropertyImage repository for listing photo rows.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, asc, desc
from subto.repositories.base import BaseRepository
from subto.models.image import PropertyImage
from typing import Optional, List
import uuid
import logging

logger = logging.getLogger(__name__)


class ImageRepository(BaseRepository[PropertyImage]):
    """Repository for listing photos and their primary flag."""

    def __init__(self, db: AsyncSession):
        super().__init__(PropertyImage, db)

    async def get_by_property(self, property_id: uuid.UUID) -> List[PropertyImage]:
        """Images of a listing, primary first then by order_index."""
        try:
            query = (
                select(PropertyImage)
                .execution_options(populate_existing=True)
                .where(PropertyImage.property_id == property_id)
                .order_by(desc(PropertyImage.is_primary), asc(PropertyImage.order_index))
            )
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to get images for property {property_id}: {e}")
            raise

    async def clear_primary(self, property_id: uuid.UUID, commit: bool = True) -> None:
        """Unset the primary flag on every image of a listing."""
        try:
            await self.db.execute(
                update(PropertyImage)
                .where(PropertyImage.property_id == property_id, PropertyImage.is_primary.is_(True))
                .values(is_primary=False)
                .execution_options(synchronize_session="fetch")
            )
            if commit:
                await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to clear primary image for property {property_id}: {e}")
            raise

    async def add_image(self, image_data: dict) -> PropertyImage:
        """
        Insert an image row, keeping at most one primary image per listing.

        Args:
            image_data: Column values for the new row

        Returns:
            Created image
        """
        if image_data.get("is_primary"):
            await self.clear_primary(image_data["property_id"], commit=False)
        return await self.create(image_data)

    async def promote_first(self, property_id: uuid.UUID) -> Optional[PropertyImage]:
        """Make the lowest order_index image primary; returns it, or None when no images remain."""
        try:
            query = (
                select(PropertyImage)
                .execution_options(populate_existing=True)
                .where(PropertyImage.property_id == property_id)
                .order_by(asc(PropertyImage.order_index), asc(PropertyImage.created_at))
                .limit(1)
            )
            image = (await self.db.execute(query)).scalar_one_or_none()
            if image is None:
                return None
            return await self.update(image.id, {"is_primary": True})
        except Exception as e:
            logger.error(f"Failed to promote primary image for property {property_id}: {e}")
            raise
