"""
Repository layer for data access operations.
"""

from subto.repositories.base import BaseRepository
from subto.repositories.profile import ProfileRepository
from subto.repositories.property import PropertyRepository, PropertySearchFilters
from subto.repositories.image import ImageRepository
from subto.repositories.favorite import FavoriteRepository
from subto.repositories.message import MessageRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "PropertyRepository",
    "PropertySearchFilters",
    "ImageRepository",
    "FavoriteRepository",
    "MessageRepository",
]
