"""
Profile model mirroring the public.profiles table.
A profile row shares its id with the Supabase auth user it belongs to.
"""

from sqlalchemy import String, Text, Boolean, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from subto.database import Base
import enum
from typing import Optional


class ProfileRole(str, enum.Enum):
    """What the member does on the marketplace."""
    BUYER = "buyer"
    SELLER = "seller"
    BOTH = "both"


class Profile(Base):
    """
    Marketplace member profile.
    Authentication lives in Supabase; this row holds the public-facing details.
    """

    __tablename__ = "profiles"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Email of the linked auth user"
    )

    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
        comment="Display name"
    )

    role: Mapped[ProfileRole] = mapped_column(
        SQLEnum(
            ProfileRole,
            name="profile_role",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
        default=ProfileRole.BUYER,
        comment="buyer, seller or both"
    )

    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Set by marketplace staff after identity checks"
    )

    avatar_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, email={self.email}, role={self.role})>"

    def owns(self, owner_id) -> bool:
        """Check whether a record owned by ``owner_id`` belongs to this profile."""
        return self.id == owner_id

    def to_summary(self) -> dict:
        """Owner block shown on listing cards."""
        return {
            "id": str(self.id),
            "full_name": self.full_name,
            "verified": self.verified,
        }

    def to_contact(self) -> dict:
        """Owner block shown on the listing detail page."""
        return {
            "id": str(self.id),
            "full_name": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "verified": self.verified,
            "bio": self.bio,
        }

    def to_public_dict(self) -> dict:
        return {
            "id": str(self.id),
            "full_name": self.full_name,
            "role": self.role.value,
            "verified": self.verified,
            "bio": self.bio,
            "location": self.location,
            "avatar_url": self.avatar_url,
            "created_at": self.created_at.isoformat(),
        }

    def to_dict(self) -> dict:
        """
        Convert profile to dictionary.

        Returns:
            Dictionary representation of the caller's own profile
        """
        return {
            "id": str(self.id),
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role.value,
            "phone": self.phone,
            "bio": self.bio,
            "location": self.location,
            "verified": self.verified,
            "avatar_url": self.avatar_url,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
