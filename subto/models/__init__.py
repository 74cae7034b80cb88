"""
Database models for the SubTo Marketplace API.
Mirrors the Supabase tables: profiles, properties, property_images, messages and favorites.
"""

from subto.models.profile import Profile, ProfileRole
from subto.models.property import Property, PropertyType, PropertyStatus
from subto.models.image import PropertyImage
from subto.models.message import Message
from subto.models.favorite import Favorite

__all__ = [
    "Profile",
    "ProfileRole",
    "Property",
    "PropertyType",
    "PropertyStatus",
    "PropertyImage",
    "Message",
    "Favorite",
]
