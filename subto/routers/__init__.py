"""
API route handlers for the SubTo Marketplace API.
"""

from .auth import router as auth_router
from .profiles import router as profiles_router
from .properties import router as properties_router
from .images import router as images_router
from .favorites import router as favorites_router
from .messages import router as messages_router
from .dashboard import router as dashboard_router
from .listings import router as listings_router
from .calculators import router as calculators_router

__all__ = [
    "auth_router",
    "profiles_router",
    "properties_router",
    "images_router",
    "favorites_router",
    "messages_router",
    "dashboard_router",
    "listings_router",
    "calculators_router",
]
