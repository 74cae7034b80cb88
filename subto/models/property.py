"""
Property model for subject-to listings.
Holds the house itself, the existing loan being taken over and the seller's asking terms.
"""

from sqlalchemy import String, Text, Integer, Numeric, Boolean, Enum as SQLEnum, Index, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from subto.database import Base
from datetime import datetime, timezone
from decimal import Decimal
import enum
import math
import uuid
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from subto.models.profile import Profile
    from subto.models.image import PropertyImage


class PropertyType(str, enum.Enum):
    """Kind of building being listed."""
    SINGLE_FAMILY = "single_family"
    TOWNHOUSE = "townhouse"
    CONDO = "condo"
    MULTI_FAMILY = "multi_family"
    DUPLEX = "duplex"
    OTHER = "other"


class PropertyStatus(str, enum.Enum):
    """Listing lifecycle status."""
    ACTIVE = "active"
    PENDING = "pending"
    SOLD = "sold"
    WITHDRAWN = "withdrawn"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


def _money(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


class Property(Base):
    """
    Subject-to listing.
    The financial columns describe the seller's existing mortgage, which the buyer takes over.
    """

    __tablename__ = "properties"

    # Ownership
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Profile that created the listing"
    )

    # Basic information
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Listing headline"
    )

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    address: Mapped[str] = mapped_column(String(255), nullable=False)

    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    state: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    zip_code: Mapped[str] = mapped_column(String(20), nullable=False)

    # Property details
    property_type: Mapped[PropertyType] = mapped_column(
        SQLEnum(PropertyType, name="property_type", values_callable=_enum_values),
        nullable=False,
        default=PropertyType.SINGLE_FAMILY,
        index=True,
    )

    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    bathrooms: Mapped[Decimal] = mapped_column(
        Numeric(precision=4, scale=1),
        nullable=False,
        comment="Half baths allowed, e.g. 2.5"
    )

    square_feet: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Existing loan
    current_loan_balance: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        comment="Outstanding principal on the seller's mortgage"
    )

    interest_rate: Mapped[Decimal] = mapped_column(
        Numeric(precision=5, scale=3),
        nullable=False,
        index=True,
        comment="Annual rate of the existing loan, in percent"
    )

    monthly_payment: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
        comment="Principal and interest payment on the existing loan"
    )

    loan_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    lender: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    years_remaining: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    due_on_sale_clause: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Deal terms
    asking_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        index=True,
        comment="Cash the seller wants on top of the loan takeover"
    )

    property_value: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        comment="Estimated market value"
    )

    monthly_rent: Mapped[Optional[Decimal]] = mapped_column(Numeric(precision=10, scale=2), nullable=True)

    property_taxes: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=True,
        comment="Monthly property taxes"
    )

    insurance: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=True,
        comment="Monthly insurance premium"
    )

    hoa_fees: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=True,
        comment="Monthly HOA dues"
    )

    # Listing state
    status: Mapped[PropertyStatus] = mapped_column(
        SQLEnum(PropertyStatus, name="property_status", values_callable=_enum_values),
        nullable=False,
        default=PropertyStatus.ACTIVE,
        index=True,
    )

    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    owner: Mapped["Profile"] = relationship("Profile", lazy="selectin")

    images: Mapped[List["PropertyImage"]] = relationship(
        "PropertyImage",
        back_populates="property_rel",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PropertyImage.is_primary.desc(), PropertyImage.order_index.asc()"
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title={self.title[:30]}, asking_price={self.asking_price})>"

    @property
    def equity(self) -> Decimal:
        """Market value above the outstanding loan."""
        return self.property_value - self.current_loan_balance

    @property
    def monthly_expenses(self) -> Decimal:
        """Loan payment plus carrying costs; missing costs count as zero."""
        return (
            self.monthly_payment
            + (self.property_taxes or Decimal("0"))
            + (self.insurance or Decimal("0"))
            + (self.hoa_fees or Decimal("0"))
        )

    @property
    def monthly_cash_flow(self) -> Decimal:
        return (self.monthly_rent or Decimal("0")) - self.monthly_expenses

    def days_listed(self, now: Optional[datetime] = None) -> int:
        """
        Whole days since the listing was created, rounded up.

        Args:
            now: Reference time, defaults to the current UTC time

        Returns:
            Number of days the listing has been on the marketplace
        """
        now = now or datetime.now(timezone.utc)
        created_at = self.created_at
        # SQLite hands back naive timestamps
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return math.ceil(abs((now - created_at).total_seconds()) / 86400)

    def to_dict(
        self,
        include_owner: bool = False,
        include_contact: bool = False,
        include_images: bool = True,
        include_metrics: bool = False,
    ) -> dict:
        """
        Convert listing to dictionary.

        Args:
            include_owner: Add the owner summary shown on listing cards
            include_contact: Add the owner's contact details instead of the summary
            include_images: Add the ordered image list
            include_metrics: Add equity, cash flow and days listed

        Returns:
            Dictionary representation of the listing
        """
        result = {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "title": self.title,
            "description": self.description,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "property_type": self.property_type.value,
            "bedrooms": self.bedrooms,
            "bathrooms": float(self.bathrooms),
            "square_feet": self.square_feet,
            "current_loan_balance": float(self.current_loan_balance),
            "interest_rate": float(self.interest_rate),
            "monthly_payment": float(self.monthly_payment),
            "asking_price": float(self.asking_price),
            "property_value": float(self.property_value),
            "monthly_rent": _money(self.monthly_rent),
            "property_taxes": _money(self.property_taxes),
            "insurance": _money(self.insurance),
            "hoa_fees": _money(self.hoa_fees),
            "loan_type": self.loan_type,
            "lender": self.lender,
            "years_remaining": self.years_remaining,
            "due_on_sale_clause": self.due_on_sale_clause,
            "status": self.status.value,
            "featured": self.featured,
            "view_count": self.view_count,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

        if include_contact and self.owner:
            result["owner"] = self.owner.to_contact()
        elif include_owner and self.owner:
            result["owner"] = self.owner.to_summary()

        if include_images:
            result["images"] = [image.to_dict() for image in self.images]

        if include_metrics:
            result["metrics"] = {
                "equity": float(self.equity),
                "monthly_cash_flow": float(self.monthly_cash_flow),
                "days_listed": self.days_listed(),
            }

        return result

    def to_summary(self) -> dict:
        """Short form attached to messages."""
        return {
            "id": str(self.id),
            "title": self.title,
            "address": self.address,
            "asking_price": float(self.asking_price),
        }


# Browse page: active listings newest first, narrowed by location
status_created_index = Index(
    'idx_properties_status_created',
    Property.status,
    Property.created_at.desc()
)

location_status_index = Index(
    'idx_properties_location_status',
    Property.state,
    Property.city,
    Property.status
)

# Home page featured strip
featured_status_index = Index(
    'idx_properties_featured_status',
    Property.featured,
    Property.status,
    Property.created_at.desc()
)

# Seller dashboard
owner_created_index = Index(
    'idx_properties_owner_created',
    Property.user_id,
    Property.created_at.desc()
)
