"""
Authentication service built on Supabase auth.
Handles signup, login, session refresh, logout and resolving the caller's profile from a token.
"""

from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from subto.clients.supabase_auth import SupabaseAuthClient, AuthSession, AuthUser
from subto.models.profile import Profile, ProfileRole
from subto.repositories.profile import ProfileRepository
from subto.schemas.auth import SignupRequest
from subto.utils.auth import verify_token, TokenPayload
from subto.utils.exceptions import UnauthorizedError
import logging

logger = logging.getLogger(__name__)


def _parse_role(value: Optional[str]) -> ProfileRole:
    try:
        return ProfileRole(value)
    except ValueError:
        return ProfileRole.BUYER


class AuthService:
    """
    Authentication service.
    Credentials and sessions live in Supabase; this service keeps the profiles table in step.
    """

    def __init__(self, db_session: AsyncSession, auth_client: SupabaseAuthClient):
        self.db = db_session
        self.auth_client = auth_client
        self.profile_repo = ProfileRepository(db_session)

    async def _provision_profile(self, user: AuthUser) -> Profile:
        return await self.profile_repo.get_or_create(
            profile_id=user.id,
            email=user.email,
            full_name=user.full_name,
            role=_parse_role(user.role),
        )

    async def signup(self, signup_data: SignupRequest) -> Tuple[Profile, Optional[AuthSession]]:
        """
        Register with Supabase and create the matching profile.

        Args:
            signup_data: Email, password, name and role

        Returns:
            Tuple of (profile, session); session is None while email confirmation is pending

        Raises:
            DuplicateResourceError: If the email is already registered
            ValidationError: If Supabase rejects the email or password
        """
        result = await self.auth_client.sign_up(
            email=signup_data.email,
            password=signup_data.password,
            full_name=signup_data.full_name,
            role=signup_data.role.value,
        )

        profile = await self.profile_repo.get_or_create(
            profile_id=result.user.id,
            email=result.user.email or signup_data.email,
            full_name=signup_data.full_name,
            role=signup_data.role,
        )
        logger.info(f"User signed up: {profile.email} as {profile.role.value}")
        return profile, result.session

    async def login(self, email: str, password: str) -> Tuple[Profile, AuthSession]:
        """
        Password login.

        Returns:
            Tuple of (profile, session)

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        result = await self.auth_client.sign_in_with_password(email, password)
        profile = await self._provision_profile(result.user)
        logger.info(f"User logged in: {profile.email}")
        return profile, result.session

    async def refresh(self, refresh_token: str) -> AuthSession:
        """
        Exchange a refresh token for a new session.

        Raises:
            InvalidTokenError: If the refresh token is invalid or revoked
        """
        result = await self.auth_client.refresh_session(refresh_token)
        logger.debug(f"Session refreshed for {result.user.id}")
        return result.session

    async def logout(self, access_token: str) -> None:
        await self.auth_client.sign_out(access_token)

    async def get_current_user(self, token: str) -> Profile:
        """
        Resolve the caller's profile from a Supabase access token.

        The profile is provisioned from the token claims when it does not exist yet.

        Args:
            token: Bearer access token

        Returns:
            Caller's profile

        Raises:
            InvalidTokenError: If the token is invalid
            TokenExpiredError: If the token has expired
        """
        payload: TokenPayload = verify_token(token)

        profile = await self.profile_repo.get_by_id(payload.user_id)
        if profile:
            return profile

        if not payload.email:
            raise UnauthorizedError("Token does not identify a marketplace member")

        return await self.profile_repo.get_or_create(
            profile_id=payload.user_id,
            email=payload.email,
            full_name=payload.full_name,
            role=_parse_role(payload.marketplace_role),
        )
