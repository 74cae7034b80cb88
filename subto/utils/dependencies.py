"""
FastAPI dependency injection utilities for authentication, services and query parsing.
Provides reusable dependencies for route protection and caller extraction.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from subto.clients.storage import StorageBackend, get_storage
from subto.clients.supabase_auth import SupabaseAuthClient, get_auth_client
from subto.database import get_db
from subto.models.profile import Profile
from subto.repositories.property import PropertySearchFilters
from subto.schemas.property import PropertySearchQuery
from subto.services.auth import AuthService
from subto.services.image import ImageService
from subto.services.property import PropertyService
from subto.utils.exceptions import UnauthorizedError
import logging

logger = logging.getLogger(__name__)

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    auth_client: SupabaseAuthClient = Depends(get_auth_client)
) -> AuthService:
    return AuthService(db, auth_client)


async def get_property_service(
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage)
) -> PropertyService:
    return PropertyService(db, storage)


async def get_image_service(
    db: AsyncSession = Depends(get_db),
    storage: StorageBackend = Depends(get_storage)
) -> ImageService:
    return ImageService(db, storage)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """
    Get the raw bearer token from the Authorization header.

    Raises:
        UnauthorizedError: If no token was sent
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")
    return credentials.credentials


async def get_current_user(
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> Profile:
    """
    Get the caller's profile from the Supabase access token.

    Args:
        token: Bearer access token
        auth_service: Authentication service

    Returns:
        Caller's profile

    Raises:
        UnauthorizedError: If no token was sent or it is not a member token
        InvalidTokenError: If the token is invalid
        TokenExpiredError: If the token has expired
    """
    return await auth_service.get_current_user(token)


async def get_optional_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[Profile]:
    """
    Get the caller's profile if a valid token was sent, otherwise None.

    Used by public endpoints that show extra state to signed-in members.
    """
    if not credentials:
        return None

    try:
        return await auth_service.get_current_user(credentials.credentials)
    except UnauthorizedError as e:
        logger.debug(f"Ignoring invalid optional token: {e.detail}")
        return None


async def get_search_query(request: Request) -> PropertySearchQuery:
    """
    Parse browse query parameters, accepting camelCase and snake_case names.

    Raises:
        RequestValidationError: If a parameter has an invalid value
    """
    try:
        return PropertySearchQuery.model_validate(dict(request.query_params))
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))


def to_search_filters(query: PropertySearchQuery) -> PropertySearchFilters:
    return PropertySearchFilters(
        city=query.city,
        state=query.state,
        min_price=query.min_price,
        max_price=query.max_price,
        property_type=query.property_type,
        min_interest_rate=query.min_interest_rate,
        max_interest_rate=query.max_interest_rate,
        min_bedrooms=query.min_bedrooms,
        max_bedrooms=query.max_bedrooms,
    )
