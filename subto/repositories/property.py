"""
Property repository for subject-to listings with filtering and text search.
Provides the queries behind browse, featured, search and the seller dashboard.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, and_, or_, func, desc
from subto.repositories.base import BaseRepository
from subto.models.property import Property, PropertyType, PropertyStatus
from typing import Optional, List, Dict, Any
from decimal import Decimal
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertySearchFilters:
    """Browse filters. A filter left as None, blank or 0 is not applied."""

    def __init__(
        self,
        city: Optional[str] = None,
        state: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        property_type: Optional[PropertyType] = None,
        min_interest_rate: Optional[Decimal] = None,
        max_interest_rate: Optional[Decimal] = None,
        min_bedrooms: Optional[int] = None,
        max_bedrooms: Optional[int] = None,
    ):
        self.city = city
        self.state = state
        self.min_price = min_price
        self.max_price = max_price
        self.property_type = property_type
        self.min_interest_rate = min_interest_rate
        self.max_interest_rate = max_interest_rate
        self.min_bedrooms = min_bedrooms
        self.max_bedrooms = max_bedrooms

    def to_dict(self) -> Dict[str, Any]:
        return dict(vars(self))


def _is_set(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    # a numeric bound of 0 means "no bound"
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool) and value == 0:
        return False
    return True


class PropertyRepository(BaseRepository[Property]):
    """Repository for listing queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    def _build_filter_conditions(self, filters: PropertySearchFilters) -> List:
        """
        Build SQL conditions from browse filters.

        Args:
            filters: PropertySearchFilters instance

        Returns:
            List of SQLAlchemy conditions
        """
        conditions = [Property.status == PropertyStatus.ACTIVE]

        if _is_set(filters.city):
            conditions.append(Property.city.ilike(f"%{filters.city.strip()}%"))

        if _is_set(filters.state):
            conditions.append(Property.state.ilike(f"%{filters.state.strip()}%"))

        if _is_set(filters.min_price):
            conditions.append(Property.asking_price >= filters.min_price)

        if _is_set(filters.max_price):
            conditions.append(Property.asking_price <= filters.max_price)

        if _is_set(filters.property_type):
            conditions.append(Property.property_type == filters.property_type)

        if _is_set(filters.min_interest_rate):
            conditions.append(Property.interest_rate >= filters.min_interest_rate)

        if _is_set(filters.max_interest_rate):
            conditions.append(Property.interest_rate <= filters.max_interest_rate)

        if _is_set(filters.min_bedrooms):
            conditions.append(Property.bedrooms >= filters.min_bedrooms)

        if _is_set(filters.max_bedrooms):
            conditions.append(Property.bedrooms <= filters.max_bedrooms)

        return conditions

    async def search_properties(
        self,
        filters: PropertySearchFilters,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Property]:
        """
        Active listings matching the filters, newest first.

        Args:
            filters: Browse filters
            limit: Maximum number of listings
            offset: Number of listings to skip

        Returns:
            List of listings with owner and images loaded
        """
        try:
            query = (
                select(Property)
                .execution_options(populate_existing=True)
                .where(and_(*self._build_filter_conditions(filters)))
                .order_by(desc(Property.created_at))
                .offset(offset)
                .limit(limit)
            )
            result = await self.db.execute(query)
            properties = list(result.scalars().all())
            logger.debug(f"Browse returned {len(properties)} listings for filters {filters.to_dict()}")
            return properties
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise

    async def get_featured(self, limit: int = 6) -> List[Property]:
        try:
            query = (
                select(Property)
                .execution_options(populate_existing=True)
                .where(Property.status == PropertyStatus.ACTIVE, Property.featured.is_(True))
                .order_by(desc(Property.created_at))
                .limit(limit)
            )
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to get featured properties: {e}")
            raise

    async def search_text(self, term: str, limit: int = 20) -> List[Property]:
        """
        Case-insensitive substring search over title, description, address and city.

        Args:
            term: Text typed into the search box
            limit: Maximum number of listings

        Returns:
            Matching active listings, newest first
        """
        pattern = f"%{term.strip()}%"
        try:
            query = (
                select(Property)
                .execution_options(populate_existing=True)
                .where(
                    Property.status == PropertyStatus.ACTIVE,
                    or_(
                        Property.title.ilike(pattern),
                        Property.description.ilike(pattern),
                        Property.address.ilike(pattern),
                        Property.city.ilike(pattern),
                    ),
                )
                .order_by(desc(Property.created_at))
                .limit(limit)
            )
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed text search for '{term}': {e}")
            raise

    async def get_by_owner(self, user_id: uuid.UUID) -> List[Property]:
        """All of a member's listings, every status, newest first."""
        try:
            query = (
                select(Property)
                .execution_options(populate_existing=True)
                .where(Property.user_id == user_id)
                .order_by(desc(Property.created_at))
            )
            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to get properties for owner {user_id}: {e}")
            raise

    async def increment_view_count(self, property_id: uuid.UUID) -> Optional[int]:
        """
        Atomically add one view.

        Returns:
            New view count, or None when the listing does not exist
        """
        try:
            stmt = (
                update(Property)
                .where(Property.id == property_id)
                # views are not edits, keep updated_at as is
                .values(view_count=Property.view_count + 1, updated_at=Property.updated_at)
            )
            result = await self.db.execute(stmt)
            await self.db.commit()
            if result.rowcount == 0:
                return None

            count_result = await self.db.execute(
                select(Property.view_count).where(Property.id == property_id)
            )
            return count_result.scalar_one()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to increment view count for {property_id}: {e}")
            raise

    async def get_owner_stats(self, user_id: uuid.UUID) -> Dict[str, int]:
        """Totals shown on the seller dashboard."""
        try:
            query = select(
                func.count(Property.id),
                func.count(Property.id).filter(Property.status == PropertyStatus.ACTIVE),
                func.coalesce(func.sum(Property.view_count), 0),
            ).where(Property.user_id == user_id)
            total, active, views = (await self.db.execute(query)).one()
            return {
                "total_listings": total,
                "active_listings": active,
                "total_views": int(views),
            }
        except Exception as e:
            logger.error(f"Failed to get listing stats for {user_id}: {e}")
            raise
