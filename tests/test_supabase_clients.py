"""
Tests for the Supabase auth and storage clients and local token verification.
HTTP traffic is served by httpx.MockTransport.
"""

import json
import uuid

import httpx
import pytest

from subto.clients.storage import LocalStorage, SupabaseStorage
from subto.clients.supabase_auth import SupabaseAuthClient
from subto.utils.auth import verify_token
from subto.utils.exceptions import (
    DuplicateResourceError,
    FileUploadError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    UnauthorizedError,
    UpstreamServiceError,
    ValidationError,
)
from tests.conftest import make_access_token


def auth_client(handler) -> SupabaseAuthClient:
    return SupabaseAuthClient(
        base_url="http://supabase.test/auth/v1",
        api_key="anon",
        transport=httpx.MockTransport(handler),
    )


def storage_client(handler) -> SupabaseStorage:
    return SupabaseStorage(
        base_url="http://supabase.test/storage/v1",
        api_key="service-role",
        bucket="property-images",
        transport=httpx.MockTransport(handler),
    )


class TestSupabaseAuthClient:
    """Test request shapes and error mapping."""

    @pytest.mark.asyncio
    async def test_sign_up_sends_metadata_and_apikey(self):
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, json={
                "id": str(uuid.uuid4()),
                "email": "a@example.com",
                "user_metadata": {"full_name": "Ann", "role": "seller"},
            })

        result = await auth_client(handler).sign_up("a@example.com", "secret123", "Ann", "seller")

        request = seen["request"]
        assert request.url.path == "/auth/v1/signup"
        assert request.headers["apikey"] == "anon"
        assert json.loads(request.content)["data"] == {"full_name": "Ann", "role": "seller"}
        assert result.session is None
        assert result.user.full_name == "Ann"
        assert result.user.role == "seller"

    @pytest.mark.asyncio
    async def test_sign_up_existing_email(self):
        def handler(request):
            return httpx.Response(400, json={"msg": "User already registered"})

        with pytest.raises(DuplicateResourceError):
            await auth_client(handler).sign_up("a@example.com", "secret123", "Ann", "buyer")

    @pytest.mark.asyncio
    async def test_sign_up_weak_password(self):
        def handler(request):
            return httpx.Response(422, json={"error_code": "weak_password", "msg": "Password is too weak"})

        with pytest.raises(ValidationError) as exc_info:
            await auth_client(handler).sign_up("a@example.com", "123", "Ann", "buyer")

        assert exc_info.value.field_errors[0]["field"] == "password"

    @pytest.mark.asyncio
    async def test_login_uses_password_grant(self):
        seen = {}

        def handler(request):
            seen["grant_type"] = request.url.params["grant_type"]
            return httpx.Response(400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"})

        with pytest.raises(InvalidCredentialsError):
            await auth_client(handler).sign_in_with_password("a@example.com", "nope")

        assert seen["grant_type"] == "password"

    @pytest.mark.asyncio
    async def test_login_unconfirmed_email(self):
        def handler(request):
            return httpx.Response(400, json={"error_code": "email_not_confirmed", "msg": "Email not confirmed"})

        with pytest.raises(UnauthorizedError, match="Email not confirmed"):
            await auth_client(handler).sign_in_with_password("a@example.com", "secret123")

    @pytest.mark.asyncio
    async def test_refresh_with_revoked_token(self):
        def handler(request):
            return httpx.Response(400, json={"error": "invalid_grant"})

        with pytest.raises(InvalidTokenError):
            await auth_client(handler).refresh_session("revoked")

    @pytest.mark.asyncio
    async def test_sign_out_sends_bearer_token(self):
        seen = {}

        def handler(request):
            seen["authorization"] = request.headers.get("authorization")
            return httpx.Response(204)

        await auth_client(handler).sign_out("access-token")

        assert seen["authorization"] == "Bearer access-token"

    @pytest.mark.asyncio
    async def test_sign_out_of_invalid_session(self):
        await auth_client(lambda request: httpx.Response(401, json={"msg": "invalid"})).sign_out("stale")

    @pytest.mark.asyncio
    async def test_get_user(self):
        user_id = uuid.uuid4()

        def handler(request):
            return httpx.Response(200, json={"id": str(user_id), "email": "a@example.com"})

        user = await auth_client(handler).get_user("token")

        assert user.id == user_id
        assert user.user_metadata == {}

    @pytest.mark.asyncio
    async def test_server_error(self):
        with pytest.raises(UpstreamServiceError):
            await auth_client(lambda request: httpx.Response(503)).sign_in_with_password("a@b.co", "x")

    @pytest.mark.asyncio
    async def test_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamServiceError) as exc_info:
            await auth_client(handler).sign_in_with_password("a@b.co", "x")

        assert exc_info.value.status_code == 502


class TestSupabaseStorage:

    @pytest.mark.asyncio
    async def test_upload(self):
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, json={"Key": "property-images/p/1-0.jpg"})

        path = await storage_client(handler).upload("p/1-0.jpg", b"bytes", "image/jpeg")

        request = seen["request"]
        assert path == "p/1-0.jpg"
        assert request.method == "POST"
        assert request.url.path == "/storage/v1/object/property-images/p/1-0.jpg"
        assert request.headers["content-type"] == "image/jpeg"
        assert request.headers["x-upsert"] == "false"
        assert request.headers["authorization"] == "Bearer service-role"
        assert request.content == b"bytes"

    @pytest.mark.asyncio
    async def test_upload_rejected(self):
        def handler(request):
            return httpx.Response(400, json={"message": "The resource already exists"})

        with pytest.raises(FileUploadError, match="already exists"):
            await storage_client(handler).upload("p/1-0.jpg", b"bytes", "image/jpeg")

    @pytest.mark.asyncio
    async def test_upload_server_error(self):
        with pytest.raises(UpstreamServiceError):
            await storage_client(lambda request: httpx.Response(500)).upload("p/1.jpg", b"x", "image/jpeg")

    @pytest.mark.asyncio
    async def test_remove(self):
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, json=[])

        await storage_client(handler).remove(["p/1-0.jpg", "p/1-1.jpg"])

        request = seen["request"]
        assert request.method == "DELETE"
        assert request.url.path == "/storage/v1/object/property-images"
        assert json.loads(request.content) == {"prefixes": ["p/1-0.jpg", "p/1-1.jpg"]}

    @pytest.mark.asyncio
    async def test_remove_nothing_makes_no_request(self):
        def handler(request):
            raise AssertionError("no request expected")

        await storage_client(handler).remove([])

    def test_public_url(self):
        storage = storage_client(lambda request: httpx.Response(200))
        assert storage.get_public_url("p/1-0.jpg") == (
            "http://supabase.test/storage/v1/object/public/property-images/p/1-0.jpg"
        )


class TestLocalStorage:

    @pytest.mark.asyncio
    async def test_upload_and_remove(self, storage):
        await storage.upload("p/1-0.jpg", b"bytes", "image/jpeg")
        stored = storage.base_dir / "property-images" / "p" / "1-0.jpg"
        assert stored.read_bytes() == b"bytes"

        await storage.remove(["p/1-0.jpg", "p/missing.jpg"])
        assert not stored.exists()

    @pytest.mark.asyncio
    async def test_no_overwrite(self, storage):
        await storage.upload("p/1-0.jpg", b"first", "image/jpeg")

        with pytest.raises(FileUploadError):
            await storage.upload("p/1-0.jpg", b"second", "image/jpeg")

    @pytest.mark.asyncio
    async def test_rejects_paths_outside_bucket(self, storage):
        with pytest.raises(FileUploadError):
            await storage.upload("../escape.jpg", b"bytes", "image/jpeg")

    def test_public_url(self, storage):
        assert storage.get_public_url("p/1-0.jpg") == "http://test/uploads/property-images/p/1-0.jpg"


class TestVerifyToken:
    """Test local verification of Supabase access tokens."""

    def test_valid_token(self):
        profile_id = uuid.uuid4()
        payload = verify_token(make_access_token(profile_id, "a@example.com", "Ann", "seller"))

        assert payload.user_id == profile_id
        assert payload.email == "a@example.com"
        assert payload.role == "authenticated"
        assert payload.full_name == "Ann"
        assert payload.marketplace_role == "seller"

    def test_expired(self):
        with pytest.raises(TokenExpiredError):
            verify_token(make_access_token(uuid.uuid4(), "a@example.com", expires_in=-60))

    def test_wrong_secret(self):
        token = make_access_token(uuid.uuid4(), "a@example.com", secret="another-secret-that-is-long-enough-123")
        with pytest.raises(InvalidTokenError):
            verify_token(token)

    def test_wrong_audience(self):
        token = make_access_token(uuid.uuid4(), "a@example.com", audience="anon")
        with pytest.raises(InvalidTokenError):
            verify_token(token)

    def test_malformed(self):
        with pytest.raises(InvalidTokenError):
            verify_token("abc.def.ghi")
