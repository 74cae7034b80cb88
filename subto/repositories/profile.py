"""
Profile repository for member records linked to Supabase auth users.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from subto.repositories.base import BaseRepository
from subto.models.profile import Profile, ProfileRole
import uuid
import logging

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository[Profile]):
    """Repository for profile lookups and provisioning."""

    def __init__(self, db: AsyncSession):
        super().__init__(Profile, db)

    async def get_or_create(
        self,
        profile_id: uuid.UUID,
        email: str,
        full_name: str = "",
        role: ProfileRole = ProfileRole.BUYER,
    ) -> Profile:
        """
        Return the profile for an auth user, creating it on first sight.

        Args:
            profile_id: Supabase auth user id
            email: Auth user email
            full_name: Name from signup metadata
            role: Role from signup metadata

        Returns:
            Existing or newly created profile
        """
        profile = await self.get_by_id(profile_id)
        if profile:
            return profile

        try:
            profile = await self.create({
                "id": profile_id,
                "email": email,
                "full_name": full_name,
                "role": role,
            })
        except IntegrityError:
            # another request provisioned it first
            profile = await self.get_by_id(profile_id)
            if profile is None:
                raise
            return profile

        logger.info(f"Provisioned profile {profile_id} for {email}")
        return profile
