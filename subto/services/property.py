"""
Property service for managing subject-to listings with business logic validation.
Handles CRUD operations, ownership validation, browse/search and view counting.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from subto.clients.storage import StorageBackend
from subto.config import settings
from subto.models.profile import Profile
from subto.models.property import Property, PropertyStatus
from subto.repositories.property import PropertyRepository, PropertySearchFilters
from subto.schemas.property import PropertyCreate, PropertyUpdate
from subto.services.listing import ListingWizard
from subto.utils.exceptions import (
    APIException,
    PropertyNotFoundError,
    PropertyOwnershipError,
    ValidationError,
)
import uuid
import logging

logger = logging.getLogger(__name__)

# Columns the database will not accept as NULL
NON_NULLABLE_FIELDS = {
    "title", "address", "city", "state", "zip_code", "property_type", "bedrooms", "bathrooms",
    "current_loan_balance", "interest_rate", "monthly_payment", "asking_price", "property_value",
    "due_on_sale_clause", "status",
}


class PropertyService:
    """
    Property service for listing management.
    Only the owner of a listing may change or remove it.
    """

    def __init__(self, db_session: AsyncSession, storage: Optional[StorageBackend] = None):
        self.db = db_session
        self.storage = storage
        self.property_repo = PropertyRepository(db_session)

    async def get_properties(
        self,
        filters: Optional[PropertySearchFilters] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Property]:
        """
        Browse active listings, newest first.

        Args:
            filters: Optional browse filters
            limit: Maximum number of listings
            offset: Number of listings to skip

        Returns:
            Listings with owner summary and images loaded
        """
        return await self.property_repo.search_properties(filters or PropertySearchFilters(), limit, offset)

    async def get_property(self, property_id: uuid.UUID) -> Property:
        """
        Get listing details.

        Raises:
            PropertyNotFoundError: If the listing doesn't exist
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise PropertyNotFoundError(str(property_id))
        return property_obj

    async def get_owned_property(self, property_id: uuid.UUID, current_user: Profile) -> Property:
        """
        Get a listing the caller owns.

        Raises:
            PropertyNotFoundError: If the listing doesn't exist
            PropertyOwnershipError: If the caller is not the owner
        """
        property_obj = await self.get_property(property_id)
        if not current_user.owns(property_obj.user_id):
            logger.warning(f"User {current_user.id} tried to modify property {property_id} they don't own")
            raise PropertyOwnershipError()
        return property_obj

    async def create_property(self, property_data: PropertyCreate, current_user: Profile) -> Property:
        """
        Create a listing owned by the caller.

        Status, featured flag and view count always start as active, false and 0.

        Args:
            property_data: Completed listing form
            current_user: Seller creating the listing

        Returns:
            Created listing

        Raises:
            ValidationError: If any listing form step is incomplete
        """
        errors = ListingWizard.validate_all(property_data)
        if errors:
            logger.warning(f"Rejected incomplete listing from {current_user.id}: {sorted(errors)}")
            raise ValidationError.from_field_map("Listing is incomplete", errors)

        create_data = property_data.model_dump()
        create_data.update({
            "user_id": current_user.id,
            "status": PropertyStatus.ACTIVE,
            "featured": False,
            "view_count": 0,
        })

        property_obj = await self.property_repo.create(create_data)
        logger.info(f"Property created by {current_user.email}: {property_obj.title} (ID: {property_obj.id})")
        return property_obj

    async def update_property(
        self,
        property_id: uuid.UUID,
        update_data: PropertyUpdate,
        current_user: Profile,
    ) -> Property:
        """
        Partially update a listing the caller owns.

        Args:
            property_id: Listing to update
            update_data: Fields to change; omitted fields are untouched
            current_user: Caller

        Returns:
            Updated listing
        """
        await self.get_owned_property(property_id, current_user)

        changes = update_data.model_dump(exclude_unset=True)
        for field in [f for f, v in changes.items() if v is None and f in NON_NULLABLE_FIELDS]:
            changes.pop(field)

        property_obj = await self.property_repo.update(property_id, changes)
        logger.info(f"Property {property_id} updated by {current_user.id}: {sorted(changes)}")
        return property_obj

    async def delete_property(self, property_id: uuid.UUID, current_user: Profile) -> None:
        """
        Delete a listing the caller owns, with its images.

        Stored image objects are removed first; a storage failure is logged and
        does not block the delete.
        """
        property_obj = await self.get_owned_property(property_id, current_user)
        paths = [image.storage_path for image in property_obj.images]

        if paths and self.storage is not None:
            try:
                await self.storage.remove(paths)
            except APIException as e:
                logger.warning(f"Could not remove {len(paths)} stored images of {property_id}: {e.detail}")

        await self.property_repo.delete(property_id)
        logger.info(f"Property {property_id} deleted by {current_user.id}")

    async def increment_view_count(self, property_id: uuid.UUID) -> int:
        """
        Record one view of a listing.

        Returns:
            New view count

        Raises:
            PropertyNotFoundError: If the listing doesn't exist
        """
        view_count = await self.property_repo.increment_view_count(property_id)
        if view_count is None:
            raise PropertyNotFoundError(str(property_id))
        return view_count

    async def get_user_properties(self, current_user: Profile) -> List[Property]:
        return await self.property_repo.get_by_owner(current_user.id)

    async def get_featured_properties(self, limit: Optional[int] = None) -> List[Property]:
        return await self.property_repo.get_featured(limit or settings.featured_limit)

    async def search_properties(self, term: str, limit: Optional[int] = None) -> List[Property]:
        """Free-text search over title, description, address and city."""
        results = await self.property_repo.search_text(term, limit or settings.search_limit)
        logger.debug(f"Search '{term}' returned {len(results)} listings")
        return results
