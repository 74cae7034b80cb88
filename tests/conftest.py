"""
Test configuration and fixtures for the SubTo Marketplace API.
Provides database fixtures, a fake Supabase auth server, test data factories and common utilities.
"""

import os
import tempfile

# Settings are read at import time, so the test environment must be in place first
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="subto-uploads-")
os.environ["SUPABASE_URL"] = "http://supabase.test"
os.environ["SUPABASE_ANON_KEY"] = "test-anon-key"

import io
import json
import time
import uuid
from decimal import Decimal
from typing import AsyncGenerator, Dict, List, Optional

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from PIL import Image
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from subto.clients.storage import LocalStorage, get_storage
from subto.clients.supabase_auth import SupabaseAuthClient, get_auth_client
from subto.config import settings
from subto.database import Base, get_db
from subto.main import app
from subto.models.profile import Profile, ProfileRole
from subto.models.property import Property, PropertyStatus, PropertyType
from subto.repositories.profile import ProfileRepository
from subto.repositories.property import PropertyRepository


@pytest.fixture
async def engine(tmp_path):
    """Fresh SQLite database per test, with foreign keys enforced like Postgres."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(base_dir=tmp_path / "uploads", bucket="property-images", public_base_url="http://test")


# Access tokens
def make_access_token(
    profile_id: uuid.UUID,
    email: str,
    full_name: str = "Test Member",
    role: str = "buyer",
    expires_in: int = 3600,
    secret: Optional[str] = None,
    audience: str = "authenticated",
) -> str:
    """Mint an access token shaped like the ones Supabase auth issues."""
    now = int(time.time())
    claims = {
        "sub": str(profile_id),
        "email": email,
        "aud": audience,
        "role": "authenticated",
        "iat": now,
        "exp": now + expires_in,
        "user_metadata": {"full_name": full_name, "role": role},
    }
    return jwt.encode(claims, secret or settings.supabase_jwt_secret, algorithm="HS256")


def auth_headers(profile: Profile) -> Dict[str, str]:
    token = make_access_token(profile.id, profile.email, profile.full_name, profile.role.value)
    return {"Authorization": f"Bearer {token}"}


class FakeGoTrue:
    """
    In-memory stand-in for the Supabase auth REST API, served through httpx.MockTransport.

    Users and refresh tokens live in dicts; every request is recorded for assertions.
    """

    def __init__(self):
        self.users: Dict[str, dict] = {}
        self.refresh_tokens: Dict[str, str] = {}
        self.requests: List[httpx.Request] = []
        self.confirm_email = False
        self.fail_with: Optional[int] = None

    def client(self) -> SupabaseAuthClient:
        return SupabaseAuthClient(
            base_url="http://supabase.test/auth/v1",
            api_key="test-anon-key",
            transport=httpx.MockTransport(self.handler),
        )

    def _session(self, user: dict) -> dict:
        refresh_token = uuid.uuid4().hex
        self.refresh_tokens[refresh_token] = user["email"]
        return {
            "access_token": make_access_token(
                uuid.UUID(user["id"]),
                user["email"],
                user["user_metadata"].get("full_name", ""),
                user["user_metadata"].get("role", "buyer"),
            ),
            "refresh_token": refresh_token,
            "expires_in": 3600,
            "token_type": "bearer",
            "user": self._public(user),
        }

    @staticmethod
    def _public(user: dict) -> dict:
        return {"id": user["id"], "email": user["email"], "user_metadata": user["user_metadata"]}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with:
            return httpx.Response(self.fail_with, json={"message": "upstream failure"})

        path = request.url.path
        body = json.loads(request.content) if request.content else {}

        if path.endswith("/signup"):
            if body["email"] in self.users:
                return httpx.Response(
                    422, json={"code": 422, "error_code": "user_already_exists", "msg": "User already registered"}
                )
            if len(body["password"]) < 6:
                return httpx.Response(
                    422, json={"code": 422, "error_code": "weak_password", "msg": "Password should be at least 6 characters"}
                )
            user = {
                "id": str(uuid.uuid4()),
                "email": body["email"],
                "password": body["password"],
                "user_metadata": body.get("data") or {},
            }
            self.users[body["email"]] = user
            if self.confirm_email:
                return httpx.Response(200, json=self._public(user))
            return httpx.Response(200, json=self._session(user))

        if path.endswith("/token"):
            grant_type = request.url.params.get("grant_type")
            if grant_type == "password":
                user = self.users.get(body.get("email"))
                if user is None or user["password"] != body.get("password"):
                    return httpx.Response(
                        400, json={"error": "invalid_grant", "error_description": "Invalid login credentials"}
                    )
                return httpx.Response(200, json=self._session(user))
            if grant_type == "refresh_token":
                email = self.refresh_tokens.pop(body.get("refresh_token"), None)
                if email is None:
                    return httpx.Response(
                        400, json={"error": "invalid_grant", "error_description": "Invalid Refresh Token"}
                    )
                return httpx.Response(200, json=self._session(self.users[email]))

        if path.endswith("/logout"):
            return httpx.Response(204)

        return httpx.Response(404, json={"message": "not found"})


@pytest.fixture
def gotrue() -> FakeGoTrue:
    return FakeGoTrue()


@pytest.fixture
async def client(session_factory, storage, gotrue) -> AsyncGenerator[AsyncClient, None]:
    """Async test client; each request gets its own session on the test database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_auth_client] = gotrue.client

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# Test data factories
class ProfileFactory:
    """Factory for creating test profiles."""

    @staticmethod
    async def create_profile(
        db_session: AsyncSession,
        email: Optional[str] = None,
        full_name: str = "Test Member",
        role: ProfileRole = ProfileRole.BUYER,
        **extra,
    ) -> Profile:
        return await ProfileRepository(db_session).create({
            "id": uuid.uuid4(),
            "email": email or f"member{uuid.uuid4().hex[:8]}@example.com",
            "full_name": full_name,
            "role": role,
            **extra,
        })


class PropertyFactory:
    """Factory for creating test listings."""

    @staticmethod
    def listing_payload(**overrides) -> dict:
        """Complete listing form as JSON."""
        payload = {
            "title": "Charming 3BR Starter Home",
            "description": "Updated kitchen and a large backyard",
            "address": "1847 E 12th Street",
            "city": "Austin",
            "state": "TX",
            "zip_code": "78702",
            "property_type": "single_family",
            "bedrooms": 3,
            "bathrooms": 2,
            "square_feet": 1250,
            "current_loan_balance": 145000,
            "interest_rate": 4.25,
            "monthly_payment": 1180,
            "asking_price": 185000,
            "property_value": 195000,
            "monthly_rent": 1650,
            "property_taxes": 300,
            "insurance": 100,
            "hoa_fees": 0,
            "loan_type": "Conventional 30-year",
            "lender": "Wells Fargo",
            "years_remaining": 22,
            "due_on_sale_clause": True,
        }
        payload.update(overrides)
        return payload

    @staticmethod
    async def create_property(
        db_session: AsyncSession,
        owner: Profile,
        status: PropertyStatus = PropertyStatus.ACTIVE,
        featured: bool = False,
        **overrides,
    ) -> Property:
        data = PropertyFactory.listing_payload(**overrides)
        for field in (
            "bathrooms", "current_loan_balance", "interest_rate", "monthly_payment", "asking_price",
            "property_value", "monthly_rent", "property_taxes", "insurance", "hoa_fees",
        ):
            if data.get(field) is not None:
                data[field] = Decimal(str(data[field]))
        data["property_type"] = PropertyType(data["property_type"])
        data.update({"user_id": owner.id, "status": status, "featured": featured, "view_count": 0})
        return await PropertyRepository(db_session).create(data)


def make_image_bytes(fmt: str = "JPEG", size=(200, 150), color=(200, 80, 40)) -> bytes:
    """Encode a solid-color image with Pillow."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


# Common test fixtures
@pytest.fixture
async def seller(db_session: AsyncSession) -> Profile:
    return await ProfileFactory.create_profile(
        db_session, email="seller@test.com", full_name="Sam Seller", role=ProfileRole.SELLER,
        phone="512-555-0100", bio="Motivated seller",
    )


@pytest.fixture
async def buyer(db_session: AsyncSession) -> Profile:
    return await ProfileFactory.create_profile(
        db_session, email="buyer@test.com", full_name="Bea Buyer", role=ProfileRole.BUYER,
    )


@pytest.fixture
async def listing(db_session: AsyncSession, seller: Profile) -> Property:
    return await PropertyFactory.create_property(db_session, seller)
