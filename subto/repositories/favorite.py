"""
Favorite repository for saved listings.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from subto.repositories.base import BaseRepository
from subto.models.favorite import Favorite
from typing import List
import uuid
import logging

logger = logging.getLogger(__name__)


class FavoriteRepository(BaseRepository[Favorite]):

    def __init__(self, db: AsyncSession):
        super().__init__(Favorite, db)

    async def get_by_user(self, user_id: uuid.UUID) -> List[Favorite]:
        """Saved listings, most recently saved first."""
        try:
            query = (
                select(Favorite)
                .execution_options(populate_existing=True)
                .where(Favorite.user_id == user_id)
                .order_by(desc(Favorite.created_at))
            )
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to get favorites for {user_id}: {e}")
            raise

    async def remove(self, user_id: uuid.UUID, property_id: uuid.UUID) -> int:
        return await self.delete_where(
            Favorite.user_id == user_id,
            Favorite.property_id == property_id,
        )

    async def is_favorite(self, user_id: uuid.UUID, property_id: uuid.UUID) -> bool:
        return await self.count(
            Favorite.user_id == user_id,
            Favorite.property_id == property_id,
        ) > 0
