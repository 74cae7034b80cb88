"""
Pydantic schemas for listing photos.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class PropertyImageResponse(BaseModel):
    """Stored listing photo."""

    id: str
    property_id: str
    image_url: str = Field(..., description="Public URL of the photo")
    storage_path: str = Field(..., description="Object path inside the bucket")
    is_primary: bool
    caption: Optional[str] = None
    order_index: int
    created_at: datetime


class SkippedUpload(BaseModel):
    filename: Optional[str] = None
    index: int
    reason: str


class ImageUploadResponse(BaseModel):
    """Result of a multi-file upload; failed files are reported, not fatal."""

    uploaded: List[PropertyImageResponse]
    skipped: List[SkippedUpload] = Field(default_factory=list)
