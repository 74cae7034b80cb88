"""
Pydantic schema for the member dashboard.
"""

from pydantic import BaseModel
from typing import List
from subto.schemas.profile import ProfileResponse
from subto.schemas.property import PropertyResponse
from subto.schemas.favorite import FavoriteResponse
from subto.schemas.message import MessageResponse


class DashboardStats(BaseModel):
    total_listings: int
    active_listings: int
    total_views: int
    total_favorites: int
    unread_messages: int


class DashboardResponse(BaseModel):
    profile: ProfileResponse
    listings: List[PropertyResponse]
    favorites: List[FavoriteResponse]
    messages: List[MessageResponse]
    unread_count: int
    stats: DashboardStats
