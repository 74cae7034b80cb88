"""
Profile service for viewing and editing member profiles.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from subto.models.profile import Profile
from subto.repositories.profile import ProfileRepository
from subto.schemas.profile import ProfileUpdate
from subto.utils.exceptions import NotFoundError
import uuid
import logging

logger = logging.getLogger(__name__)


class ProfileService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.profile_repo = ProfileRepository(db_session)

    async def get_public_profile(self, profile_id: uuid.UUID) -> Profile:
        """
        Get a member's public profile.

        Raises:
            NotFoundError: If no such profile exists
        """
        profile = await self.profile_repo.get_by_id(profile_id)
        if not profile:
            raise NotFoundError("Profile", str(profile_id))
        return profile

    async def update_profile(self, current_user: Profile, update_data: ProfileUpdate) -> Profile:
        """
        Update the caller's own profile. Only fields sent in the request change.

        Args:
            current_user: Caller's profile
            update_data: Changed fields

        Returns:
            Updated profile
        """
        changes = update_data.model_dump(exclude_unset=True)
        # full_name and role are not nullable
        for field in ("full_name", "role"):
            if field in changes and changes[field] is None:
                changes.pop(field)

        profile = await self.profile_repo.update(current_user.id, changes)
        if not profile:
            raise NotFoundError("Profile", str(current_user.id))

        logger.info(f"Profile {profile.id} updated: {sorted(changes)}")
        return profile
