"""
Pydantic schemas for member messages.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
import uuid
from subto.schemas.profile import OwnerSummary
from subto.schemas.property import PropertySummary


class MessageCreate(BaseModel):
    """Message sent from a listing page."""

    property_id: uuid.UUID = Field(..., description="Listing the message is about")
    recipient_id: uuid.UUID = Field(..., description="Member receiving the message")
    subject: Optional[str] = Field(None, max_length=255, examples=["Question about the loan terms"])
    content: str = Field(
        ...,
        max_length=5000,
        description="Message body",
        examples=["Is the seller open to a shorter close?"]
    )

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        if not v or not v.strip():
            raise ValueError("Message content cannot be empty")
        return v.strip()

    @field_validator('subject')
    @classmethod
    def clean_subject(cls, v):
        if v is None:
            return v
        return v.strip() or None


class MessageResponse(BaseModel):
    id: str
    property_id: str
    sender_id: str
    recipient_id: str
    subject: Optional[str] = None
    content: str
    read: bool
    created_at: datetime
    sender: Optional[OwnerSummary] = None
    recipient: Optional[OwnerSummary] = None
    property: Optional[PropertySummary] = None


class MessageListResponse(BaseModel):
    data: List[MessageResponse]


class UnreadCountResponse(BaseModel):
    unread_count: int
