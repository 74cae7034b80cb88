"""
Dashboard service assembling a member's listings, saved listings and inbox.
"""

from typing import Any, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from subto.models.profile import Profile
from subto.services.favorite import FavoriteService
from subto.services.message import MessageService
from subto.services.property import PropertyService
import logging

logger = logging.getLogger(__name__)


class DashboardService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_service = PropertyService(db_session)
        self.favorite_service = FavoriteService(db_session)
        self.message_service = MessageService(db_session)

    async def get_dashboard(self, current_user: Profile) -> Dict[str, Any]:
        """
        Collect everything the dashboard page shows for the caller.

        Returns:
            Dict with profile, listings, favorites, messages, unread_count and stats
        """
        listings = await self.property_service.get_user_properties(current_user)
        favorites = await self.favorite_service.get_user_favorites(current_user)
        messages = await self.message_service.get_received_messages(current_user)
        unread_count = await self.message_service.get_unread_count(current_user)
        listing_stats = await self.property_service.property_repo.get_owner_stats(current_user.id)

        logger.debug(
            f"Dashboard for {current_user.id}: {len(listings)} listings, "
            f"{len(favorites)} favorites, {len(messages)} messages"
        )
        return {
            "profile": current_user,
            "listings": listings,
            "favorites": favorites,
            "messages": messages,
            "unread_count": unread_count,
            "stats": {
                **listing_stats,
                "total_favorites": len(favorites),
                "unread_messages": unread_count,
            },
        }
