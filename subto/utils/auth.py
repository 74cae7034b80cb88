"""
Verification of Supabase-issued access tokens.
Tokens are signed by GoTrue with the project JWT secret and checked locally with python-jose.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from jose import ExpiredSignatureError, JWTError, jwt
from subto.config import settings
from subto.utils.exceptions import InvalidTokenError, TokenExpiredError
import logging
import uuid

logger = logging.getLogger(__name__)


class TokenPayload:
    """Claims of a Supabase access token."""

    def __init__(
        self,
        user_id: uuid.UUID,
        email: Optional[str],
        role: Optional[str],
        user_metadata: Dict[str, Any],
        exp: datetime,
    ):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.user_metadata = user_metadata
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from decoded claims."""
        return cls(
            user_id=uuid.UUID(data["sub"]),
            email=data.get("email"),
            role=data.get("role"),  # Postgres role, "authenticated" for signed-in users
            user_metadata=data.get("user_metadata") or {},
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc),
        )

    @property
    def full_name(self) -> str:
        return self.user_metadata.get("full_name") or ""

    @property
    def marketplace_role(self) -> Optional[str]:
        """Role chosen at signup, kept in user metadata."""
        return self.user_metadata.get("role")


def verify_token(token: str) -> TokenPayload:
    """
    Verify and decode a Supabase access token.

    Args:
        token: JWT from the Authorization header

    Returns:
        TokenPayload with the caller's claims

    Raises:
        TokenExpiredError: If the token has expired
        InvalidTokenError: If the signature, audience or claims are invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=[settings.supabase_jwt_algorithm],
            audience=settings.supabase_jwt_audience,
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError as e:
        logger.debug(f"Rejected access token: {e}")
        raise InvalidTokenError()

    if not payload.get("sub") or not payload.get("exp"):
        raise InvalidTokenError("Invalid token payload")

    try:
        return TokenPayload.from_dict(payload)
    except ValueError:
        raise InvalidTokenError("Invalid token subject")
