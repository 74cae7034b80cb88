"""
Async client for the Supabase GoTrue auth REST API.
Covers signup, password login, session refresh, logout and user lookup.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import logging
import uuid

import httpx

from subto.config import settings
from subto.utils.exceptions import (
    APIException,
    DuplicateResourceError,
    InvalidCredentialsError,
    InvalidTokenError,
    UnauthorizedError,
    UpstreamServiceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass
class AuthUser:
    """User record as returned by GoTrue."""
    id: uuid.UUID
    email: str
    user_metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthUser":
        return cls(
            id=uuid.UUID(data["id"]),
            email=data.get("email") or "",
            user_metadata=data.get("user_metadata") or {},
        )

    @property
    def full_name(self) -> str:
        return self.user_metadata.get("full_name") or ""

    @property
    def role(self) -> Optional[str]:
        return self.user_metadata.get("role")


@dataclass
class AuthSession:
    """Token pair issued by GoTrue."""
    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthSession":
        return cls(
            access_token=data["access_token"],
            refresh_token=data["refresh_token"],
            expires_in=int(data.get("expires_in") or 3600),
            token_type=data.get("token_type") or "bearer",
        )


@dataclass
class AuthResult:
    user: AuthUser
    session: Optional[AuthSession] = None


def _error_info(response: httpx.Response) -> tuple:
    """Pull (error_code, message) out of the several GoTrue error body shapes."""
    try:
        body = response.json()
    except ValueError:
        return None, response.text or response.reason_phrase
    if not isinstance(body, dict):
        return None, str(body)
    code = body.get("error_code") or body.get("error")
    message = body.get("msg") or body.get("error_description") or body.get("message") or str(code)
    return code, message


class SupabaseAuthClient:
    """
    Thin wrapper over ``{supabase_url}/auth/v1``.

    Every request carries the project ``apikey``; user-scoped calls also send the
    caller's access token as a bearer token.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.supabase_auth_url
        self.api_key = api_key if api_key is not None else settings.supabase_anon_key
        self.timeout = timeout or settings.supabase_timeout_seconds
        self._transport = transport

    def _client(self, access_token: Optional[str] = None) -> httpx.AsyncClient:
        headers = {"apikey": self.api_key, "Content-Type": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
        access_token: Optional[str] = None,
    ) -> httpx.Response:
        try:
            async with self._client(access_token) as client:
                response = await client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error(f"Supabase auth {method} {path} failed: {e}")
            raise UpstreamServiceError("Supabase auth", "service unreachable")

        if response.status_code >= 500:
            logger.error(f"Supabase auth {method} {path} returned {response.status_code}")
            raise UpstreamServiceError("Supabase auth", f"status {response.status_code}")
        return response

    @staticmethod
    def _unexpected(response: httpx.Response) -> APIException:
        code, message = _error_info(response)
        logger.error(f"Unexpected Supabase auth response {response.status_code}: {code} {message}")
        return UpstreamServiceError("Supabase auth", message)

    async def sign_up(self, email: str, password: str, full_name: str, role: str) -> AuthResult:
        """
        Register a new auth user.

        The session is absent when the project requires email confirmation.

        Raises:
            DuplicateResourceError: If the email is already registered
            ValidationError: If GoTrue rejects the email or password
        """
        response = await self._request(
            "POST",
            "/signup",
            json={
                "email": email,
                "password": password,
                "data": {"full_name": full_name, "role": role},
            },
        )

        if response.is_success:
            body = response.json()
            if "access_token" in body:
                return AuthResult(user=AuthUser.from_dict(body["user"]), session=AuthSession.from_dict(body))
            return AuthResult(user=AuthUser.from_dict(body.get("user") or body))

        code, message = _error_info(response)
        if code in ("user_already_exists", "email_exists") or "already registered" in message.lower():
            raise DuplicateResourceError("User", email)
        if response.status_code in (400, 422):
            raise ValidationError(message, [{"field": "password" if code == "weak_password" else "email", "message": message}])
        raise self._unexpected(response)

    async def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        """
        Password login.

        Raises:
            InvalidCredentialsError: If the email/password pair is rejected
            UnauthorizedError: If the email has not been confirmed yet
        """
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )

        if response.is_success:
            body = response.json()
            return AuthResult(user=AuthUser.from_dict(body["user"]), session=AuthSession.from_dict(body))

        code, message = _error_info(response)
        if code == "email_not_confirmed":
            raise UnauthorizedError("Email not confirmed")
        if response.status_code in (400, 401, 422):
            raise InvalidCredentialsError()
        raise self._unexpected(response)

    async def refresh_session(self, refresh_token: str) -> AuthResult:
        """Exchange a refresh token for a new session."""
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        )

        if response.is_success:
            body = response.json()
            return AuthResult(user=AuthUser.from_dict(body["user"]), session=AuthSession.from_dict(body))

        if response.status_code in (400, 401, 403):
            raise InvalidTokenError("Invalid refresh token")
        raise self._unexpected(response)

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind ``access_token`` server-side."""
        response = await self._request("POST", "/logout", access_token=access_token)

        if response.is_success:
            return
        # Already revoked sessions are fine to sign out of
        if response.status_code in (401, 403, 404):
            logger.info("Sign out of an already invalid session")
            return
        raise self._unexpected(response)

    async def get_user(self, access_token: str) -> AuthUser:
        """Fetch the auth user behind ``access_token``."""
        response = await self._request("GET", "/user", access_token=access_token)

        if response.is_success:
            return AuthUser.from_dict(response.json())
        if response.status_code in (401, 403):
            raise InvalidTokenError()
        raise self._unexpected(response)


def get_auth_client() -> SupabaseAuthClient:
    """FastAPI dependency returning a client bound to the configured project."""
    return SupabaseAuthClient()
