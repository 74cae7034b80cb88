"""
Pydantic schemas for authentication requests and responses.
Handles signup, login, token refresh and session payloads.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from subto.models.profile import ProfileRole
from subto.schemas.profile import ProfileResponse


class SignupRequest(BaseModel):
    """Signup request schema."""

    email: EmailStr = Field(
        ...,
        description="Email address",
        examples=["investor@example.com"]
    )
    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="Password (minimum 6 characters)",
        examples=["securepassword123"]
    )
    full_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name",
        examples=["Jane Investor"]
    )
    role: ProfileRole = Field(
        ProfileRole.BUYER,
        description="buyer, seller or both",
        examples=["buyer"]
    )

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator('full_name')
    @classmethod
    def validate_full_name(cls, v):
        if not v.strip():
            raise ValueError("Full name cannot be blank")
        return v.strip()


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr = Field(
        ...,
        description="Email address",
        examples=["investor@example.com"]
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Password",
        examples=["securepassword123"]
    )

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()


class RefreshTokenRequest(BaseModel):
    """Refresh token request schema."""

    refresh_token: str = Field(
        ...,
        min_length=1,
        description="Refresh token from a previous login"
    )


class TokenResponse(BaseModel):
    """Session tokens issued by Supabase auth."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="Refresh token")
    token_type: str = Field(default="bearer", examples=["bearer"])
    expires_in: int = Field(..., description="Access token lifetime in seconds", examples=[3600])


class AuthResponse(BaseModel):
    """Profile plus session; session is null while email confirmation is pending."""

    profile: ProfileResponse
    session: Optional[TokenResponse] = None
    email_confirmation_required: bool = False


class LogoutResponse(BaseModel):
    message: str = Field(default="Successfully logged out")
