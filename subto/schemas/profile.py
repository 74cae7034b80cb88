"""
Pydantic schemas for member profiles.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from subto.models.profile import ProfileRole


class OwnerSummary(BaseModel):
    """Owner block on listing cards."""

    id: str
    full_name: str
    verified: bool


class OwnerContact(OwnerSummary):
    """Owner block on the listing detail page."""

    email: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Fields a member may change on their own profile."""

    full_name: Optional[str] = Field(
        None,
        min_length=1,
        max_length=255,
        description="Display name",
        examples=["Jane Seller"]
    )
    role: Optional[ProfileRole] = Field(
        None,
        description="buyer, seller or both",
        examples=["both"]
    )
    phone: Optional[str] = Field(None, max_length=50, examples=["512-555-0142"])
    bio: Optional[str] = Field(None, max_length=2000)
    location: Optional[str] = Field(None, max_length=255, examples=["Austin, TX"])
    avatar_url: Optional[str] = Field(None, max_length=1024)

    @field_validator('full_name')
    @classmethod
    def validate_full_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Full name cannot be blank")
        return v.strip() if v else v


class PublicProfileResponse(BaseModel):
    """Profile as other members see it."""

    id: str
    full_name: str
    role: ProfileRole
    verified: bool
    bio: Optional[str] = None
    location: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime


class ProfileResponse(PublicProfileResponse):
    """Profile as its owner sees it."""

    email: EmailStr
    phone: Optional[str] = None
    updated_at: datetime
