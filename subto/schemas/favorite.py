"""
Pydantic schemas for saved listings.
"""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from subto.schemas.property import PropertyResponse


class FavoriteResponse(BaseModel):
    id: str
    user_id: str
    property_id: str
    created_at: datetime
    property: Optional[PropertyResponse] = None


class FavoriteListResponse(BaseModel):
    data: List[FavoriteResponse]


class FavoriteStatusResponse(BaseModel):
    property_id: str
    is_favorite: bool
