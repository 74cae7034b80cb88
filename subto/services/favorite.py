"""
Favorite service for members saving listings to revisit later.
"""

from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from subto.models.favorite import Favorite
from subto.models.profile import Profile
from subto.repositories.favorite import FavoriteRepository
from subto.services.property import PropertyService
from subto.utils.exceptions import DuplicateResourceError
import uuid
import logging

logger = logging.getLogger(__name__)


class FavoriteService:
    """Service for the saved-listings list of a member."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.favorite_repo = FavoriteRepository(db_session)
        self.property_service = PropertyService(db_session)

    async def add_favorite(self, property_id: uuid.UUID, current_user: Profile) -> Favorite:
        """
        Save a listing for the caller.

        Args:
            property_id: Listing to save
            current_user: Caller

        Returns:
            Created favorite with its listing loaded

        Raises:
            PropertyNotFoundError: If the listing doesn't exist
            DuplicateResourceError: If the listing is already saved
        """
        user_id = current_user.id
        await self.property_service.get_property(property_id)

        try:
            favorite = await self.favorite_repo.create({
                "user_id": user_id,
                "property_id": property_id,
            })
        except IntegrityError:
            logger.warning(f"User {user_id} already saved property {property_id}")
            raise DuplicateResourceError("Favorite", str(property_id))

        logger.info(f"User {user_id} saved property {property_id}")
        return favorite

    async def remove_favorite(self, property_id: uuid.UUID, current_user: Profile) -> bool:
        """Unsave a listing. Removing a listing that was never saved is not an error."""
        removed = await self.favorite_repo.remove(current_user.id, property_id)
        if removed:
            logger.info(f"User {current_user.id} removed property {property_id} from favorites")
        return removed > 0

    async def get_user_favorites(self, current_user: Profile) -> List[Favorite]:
        return await self.favorite_repo.get_by_user(current_user.id)

    async def is_favorite(self, property_id: uuid.UUID, current_user: Optional[Profile]) -> bool:
        if current_user is None:
            return False
        return await self.favorite_repo.is_favorite(current_user.id, property_id)
