"""
Authentication API endpoints backed by Supabase auth.
Provides signup, password login, token refresh, logout and the caller's profile.
"""

from dataclasses import asdict
from typing import Optional
from fastapi import APIRouter, Depends, status

from subto.clients.supabase_auth import AuthSession
from subto.models.profile import Profile
from subto.schemas.auth import (
    SignupRequest,
    LoginRequest,
    RefreshTokenRequest,
    TokenResponse,
    AuthResponse,
    LogoutResponse,
)
from subto.schemas.error import get_error_responses
from subto.schemas.profile import ProfileResponse
from subto.services.auth import AuthService
from subto.utils.dependencies import get_auth_service, get_bearer_token, get_current_user


router = APIRouter(prefix="/auth", tags=["Authentication"])


def _token_response(session: Optional[AuthSession]) -> Optional[TokenResponse]:
    if session is None:
        return None
    return TokenResponse(**asdict(session))


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    description="Register with email and password; the profile is created with the chosen role",
    responses=get_error_responses(409, 422, 502)
)
async def signup(
    signup_data: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    """
    Register a new member.

    When the Supabase project requires email confirmation no session is returned
    and ``email_confirmation_required`` is true.
    """
    profile, session = await auth_service.signup(signup_data)
    return AuthResponse(
        profile=ProfileResponse.model_validate(profile.to_dict()),
        session=_token_response(session),
        email_confirmation_required=session is None,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Password login",
    description="Authenticate with email and password, returns the profile and session tokens",
    responses=get_error_responses(401, 422, 502)
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AuthResponse:
    profile, session = await auth_service.login(login_data.email, login_data.password)
    return AuthResponse(
        profile=ProfileResponse.model_validate(profile.to_dict()),
        session=_token_response(session),
    )


@router.post(
    "/refresh",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Refresh session",
    description="Exchange a refresh token for a new access token",
    responses=get_error_responses(401, 422, 502)
)
async def refresh(
    refresh_data: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenResponse:
    session = await auth_service.refresh(refresh_data.refresh_token)
    return _token_response(session)


@router.post(
    "/logout",
    response_model=LogoutResponse,
    status_code=status.HTTP_200_OK,
    summary="Logout",
    description="Invalidate the bearer token's session on the auth server",
    responses=get_error_responses(401, 502)
)
async def logout(
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> LogoutResponse:
    await auth_service.logout(token)
    return LogoutResponse()


@router.get(
    "/me",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Current member",
    responses=get_error_responses(401)
)
async def get_me(current_user: Profile = Depends(get_current_user)) -> ProfileResponse:
    return ProfileResponse.model_validate(current_user.to_dict())
