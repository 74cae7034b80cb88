"""
Tests for the service layer.
Covers ownership rules, listing validation, image uploads, favorites, messages,
the dashboard aggregate, profiles and authentication against a fake Supabase auth server.
"""

import asyncio
import io
import uuid
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from starlette.datastructures import Headers

from subto.models.profile import ProfileRole
from subto.models.property import PropertyStatus
from subto.repositories.property import PropertySearchFilters
from subto.schemas.auth import SignupRequest
from subto.schemas.message import MessageCreate
from subto.schemas.profile import ProfileUpdate
from subto.schemas.property import PropertyCreate, PropertyUpdate
from subto.services.auth import AuthService
from subto.services.dashboard import DashboardService
from subto.services.favorite import FavoriteService
from subto.services.image import ImageService
from subto.services.message import MessageService
from subto.services.profile import ProfileService
from subto.services.property import PropertyService
from subto.utils.exceptions import (
    BadRequestError,
    DuplicateResourceError,
    FileUploadError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    PropertyNotFoundError,
    PropertyOwnershipError,
    TokenExpiredError,
    UnauthorizedError,
    UpstreamServiceError,
    ValidationError,
)
from tests.conftest import (
    PropertyFactory,
    make_access_token,
    make_image_bytes,
)


def make_upload(filename: str, content: bytes, content_type: str = "image/jpeg") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class TestPropertyService:
    """Test listing business rules."""

    @pytest.mark.asyncio
    async def test_create_property(self, db_session, seller):
        """New listings start active, not featured and unseen."""
        service = PropertyService(db_session)
        data = PropertyCreate(**PropertyFactory.listing_payload(status="sold", featured=True))

        created = await service.create_property(data, seller)

        assert created.user_id == seller.id
        assert created.status == PropertyStatus.ACTIVE
        assert created.featured is False
        assert created.view_count == 0
        assert created.asking_price == Decimal("185000")

    @pytest.mark.asyncio
    async def test_create_incomplete_listing(self, db_session, seller):
        """Every incomplete field is reported, not just the first."""
        service = PropertyService(db_session)
        data = PropertyCreate(**PropertyFactory.listing_payload(description="", lender="", asking_price=None))

        with pytest.raises(ValidationError) as exc_info:
            await service.create_property(data, seller)

        fields = {error["field"]: error["message"] for error in exc_info.value.field_errors}
        assert fields == {
            "description": "Property description is required",
            "asking_price": "Asking price is required",
            "lender": "Lender is required",
        }
        assert exc_info.value.status_code == 422

    @pytest.mark.asyncio
    async def test_get_property_not_found(self, db_session):
        with pytest.raises(PropertyNotFoundError):
            await PropertyService(db_session).get_property(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_get_properties_with_filters(self, db_session, seller):
        service = PropertyService(db_session)
        await PropertyFactory.create_property(db_session, seller)
        denver = await PropertyFactory.create_property(db_session, seller, city="Denver", state="CO")

        results = await service.get_properties(PropertySearchFilters(city="denver"))

        assert [p.id for p in results] == [denver.id]

    @pytest.mark.asyncio
    async def test_update_property(self, db_session, seller, listing):
        service = PropertyService(db_session)

        updated = await service.update_property(
            listing.id,
            PropertyUpdate(asking_price=Decimal("179000"), status=PropertyStatus.PENDING),
            seller,
        )

        assert updated.asking_price == Decimal("179000")
        assert updated.status == PropertyStatus.PENDING
        assert updated.title == listing.title

    @pytest.mark.asyncio
    async def test_update_ignores_null_required_fields(self, db_session, seller, listing):
        """Explicit nulls clear optional columns but never required ones."""
        service = PropertyService(db_session)

        updated = await service.update_property(
            listing.id, PropertyUpdate(title=None, hoa_fees=None), seller
        )

        assert updated.title == "Charming 3BR Starter Home"
        assert updated.hoa_fees is None

    @pytest.mark.asyncio
    async def test_update_by_non_owner(self, db_session, buyer, listing):
        with pytest.raises(PropertyOwnershipError):
            await PropertyService(db_session).update_property(listing.id, PropertyUpdate(title="Mine now"), buyer)

    @pytest.mark.asyncio
    async def test_delete_by_non_owner(self, db_session, buyer, listing):
        with pytest.raises(PropertyOwnershipError):
            await PropertyService(db_session).delete_property(listing.id, buyer)

    @pytest.mark.asyncio
    async def test_delete_removes_stored_images(self, db_session, seller, listing, storage):
        listing_id = listing.id
        image_service = ImageService(db_session, storage)
        await image_service.upload_property_images(
            listing_id, [make_upload("front.jpg", make_image_bytes())], seller
        )
        stored = list((storage.base_dir / storage.bucket / str(listing_id)).iterdir())
        assert len(stored) == 1

        await PropertyService(db_session, storage).delete_property(listing_id, seller)

        assert not stored[0].exists()
        with pytest.raises(PropertyNotFoundError):
            await PropertyService(db_session).get_property(listing_id)

    @pytest.mark.asyncio
    async def test_delete_survives_storage_failure(self, db_session, seller, listing, storage):
        """A storage outage is logged; the listing is still deleted."""
        listing_id = listing.id
        await ImageService(db_session, storage).upload_property_images(
            listing_id, [make_upload("front.jpg", make_image_bytes())], seller
        )

        class BrokenStorage:
            async def remove(self, paths):
                raise UpstreamServiceError("Supabase storage", "status 503")

        await PropertyService(db_session, BrokenStorage()).delete_property(listing_id, seller)

        with pytest.raises(PropertyNotFoundError):
            await PropertyService(db_session).get_property(listing_id)

    @pytest.mark.asyncio
    async def test_increment_view_count(self, db_session, listing):
        service = PropertyService(db_session)

        assert await service.increment_view_count(listing.id) == 1
        with pytest.raises(PropertyNotFoundError):
            await service.increment_view_count(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_featured_and_search(self, db_session, seller):
        service = PropertyService(db_session)
        featured = await PropertyFactory.create_property(db_session, seller, featured=True, title="Lakefront")
        await PropertyFactory.create_property(db_session, seller)

        assert [p.id for p in await service.get_featured_properties()] == [featured.id]
        assert [p.id for p in await service.search_properties("lakefront")] == [featured.id]

    @pytest.mark.asyncio
    async def test_get_user_properties(self, db_session, seller, buyer, listing):
        service = PropertyService(db_session)

        assert [p.id for p in await service.get_user_properties(seller)] == [listing.id]
        assert await service.get_user_properties(buyer) == []


class TestImageService:
    """Test listing photo uploads and primary image handling."""

    @pytest.mark.asyncio
    async def test_upload_images(self, db_session, seller, listing, storage):
        service = ImageService(db_session, storage)
        files = [
            make_upload("front.jpg", make_image_bytes()),
            make_upload("yard.png", make_image_bytes("PNG"), "image/png"),
        ]

        outcome = await service.upload_property_images(listing.id, files, seller)

        assert len(outcome.uploaded) == 2
        assert outcome.skipped == []
        first, second = outcome.uploaded
        assert first.is_primary is True
        assert second.is_primary is False
        assert [first.order_index, second.order_index] == [0, 1]
        assert first.storage_path.startswith(f"{listing.id}/")
        assert first.storage_path.endswith("-0.jpg")
        assert second.storage_path.endswith("-1.png")
        assert first.image_url == f"http://test/uploads/property-images/{first.storage_path}"
        assert Path(storage.base_dir, storage.bucket, first.storage_path).exists()

    @pytest.mark.asyncio
    async def test_upload_with_primary_index(self, db_session, seller, listing, storage):
        service = ImageService(db_session, storage)
        files = [make_upload(f"{i}.jpg", make_image_bytes()) for i in range(3)]

        outcome = await service.upload_property_images(listing.id, files, seller, primary_index=2)

        assert [image.is_primary for image in outcome.uploaded] == [False, False, True]

    @pytest.mark.asyncio
    async def test_failed_record_removes_stored_object(self, db_session, seller, listing, storage, monkeypatch):
        """A photo whose row can't be saved is deleted from storage and skipped."""
        service = ImageService(db_session, storage)
        add_image = service.image_repo.add_image

        async def failing_add_image(image_data):
            if image_data["order_index"] == 1:
                raise IntegrityError("INSERT INTO property_images", {}, Exception("constraint failed"))
            return await add_image(image_data)

        monkeypatch.setattr(service.image_repo, "add_image", failing_add_image)
        files = [make_upload(f"{i}.jpg", make_image_bytes()) for i in range(3)]

        outcome = await service.upload_property_images(listing.id, files, seller)

        assert [image.order_index for image in outcome.uploaded] == [0, 2]
        assert outcome.skipped == [{"filename": "1.jpg", "index": 1, "reason": "Failed to save image record"}]
        stored = sorted(p.name for p in Path(storage.base_dir, storage.bucket, str(listing.id)).iterdir())
        assert len(stored) == 2
        assert stored[0].endswith("-0.jpg")
        assert stored[1].endswith("-2.jpg")

    @pytest.mark.asyncio
    async def test_new_primary_replaces_existing_primary(self, db_session, seller, listing, storage):
        service = ImageService(db_session, storage)
        await service.upload_property_images(listing.id, [make_upload("a.jpg", make_image_bytes())], seller)
        # storage paths are keyed by the millisecond
        await asyncio.sleep(0.01)
        await service.upload_property_images(listing.id, [make_upload("b.jpg", make_image_bytes())], seller)

        images = await service.get_property_images(listing.id)

        assert sum(image.is_primary for image in images) == 1

    @pytest.mark.asyncio
    async def test_invalid_files_are_skipped(self, db_session, seller, listing, storage):
        service = ImageService(db_session, storage)
        files = [
            make_upload("notes.txt", b"hello", "text/plain"),
            make_upload("tiny.jpg", make_image_bytes(size=(40, 40))),
            make_upload("good.jpg", make_image_bytes()),
        ]

        outcome = await service.upload_property_images(listing.id, files, seller)

        assert len(outcome.uploaded) == 1
        assert outcome.uploaded[0].order_index == 2
        assert [s["index"] for s in outcome.skipped] == [0, 1]
        assert "below minimum" in outcome.skipped[1]["reason"]

    @pytest.mark.asyncio
    async def test_mismatched_content_is_skipped(self, db_session, seller, listing, storage):
        """PNG bytes declared as JPEG are rejected."""
        service = ImageService(db_session, storage)
        files = [
            make_upload("fake.jpg", make_image_bytes("PNG")),
            make_upload("real.jpg", make_image_bytes()),
        ]

        outcome = await service.upload_property_images(listing.id, files, seller)

        assert len(outcome.uploaded) == 1
        assert outcome.skipped[0]["filename"] == "fake.jpg"

    @pytest.mark.asyncio
    async def test_all_files_failing(self, db_session, seller, listing, storage):
        service = ImageService(db_session, storage)

        with pytest.raises(FileUploadError, match="No images were uploaded"):
            await service.upload_property_images(
                listing.id, [make_upload("doc.gif", b"GIF89a", "image/gif")], seller
            )

    @pytest.mark.asyncio
    async def test_no_files(self, db_session, seller, listing, storage):
        with pytest.raises(FileUploadError, match="No files provided"):
            await ImageService(db_session, storage).upload_property_images(listing.id, [], seller)

    @pytest.mark.asyncio
    async def test_upload_to_someone_elses_listing(self, db_session, buyer, listing, storage):
        with pytest.raises(PropertyOwnershipError):
            await ImageService(db_session, storage).upload_property_images(
                listing.id, [make_upload("a.jpg", make_image_bytes())], buyer
            )

    @pytest.mark.asyncio
    async def test_set_primary_image(self, db_session, seller, listing, storage):
        service = ImageService(db_session, storage)
        outcome = await service.upload_property_images(
            listing.id, [make_upload(f"{i}.jpg", make_image_bytes()) for i in range(2)], seller
        )
        second = outcome.uploaded[1]

        updated = await service.set_primary_image(second.id, seller)
        images = await service.get_property_images(listing.id)

        assert updated.is_primary is True
        assert images[0].id == second.id
        assert sum(image.is_primary for image in images) == 1

    @pytest.mark.asyncio
    async def test_set_primary_missing_image(self, db_session, seller, storage):
        with pytest.raises(NotFoundError):
            await ImageService(db_session, storage).set_primary_image(uuid.uuid4(), seller)

    @pytest.mark.asyncio
    async def test_delete_primary_promotes_next(self, db_session, seller, listing, storage):
        service = ImageService(db_session, storage)
        outcome = await service.upload_property_images(
            listing.id, [make_upload(f"{i}.jpg", make_image_bytes()) for i in range(3)], seller
        )
        primary = outcome.uploaded[0]
        stored_file = Path(storage.base_dir, storage.bucket, primary.storage_path)

        await service.delete_image(primary.id, seller)
        images = await service.get_property_images(listing.id)

        assert not stored_file.exists()
        assert len(images) == 2
        assert images[0].id == outcome.uploaded[1].id
        assert images[0].is_primary is True

    @pytest.mark.asyncio
    async def test_delete_image_by_non_owner(self, db_session, seller, buyer, listing, storage):
        service = ImageService(db_session, storage)
        outcome = await service.upload_property_images(
            listing.id, [make_upload("a.jpg", make_image_bytes())], seller
        )

        with pytest.raises(PropertyOwnershipError):
            await service.delete_image(outcome.uploaded[0].id, buyer)

    @pytest.mark.asyncio
    async def test_images_of_missing_listing(self, db_session, storage):
        with pytest.raises(PropertyNotFoundError):
            await ImageService(db_session, storage).get_property_images(uuid.uuid4())


class TestFavoriteService:

    @pytest.mark.asyncio
    async def test_add_and_list(self, db_session, buyer, listing):
        service = FavoriteService(db_session)

        favorite = await service.add_favorite(listing.id, buyer)
        favorites = await service.get_user_favorites(buyer)

        assert favorite.property_rel.id == listing.id
        assert [f.id for f in favorites] == [favorite.id]
        assert await service.is_favorite(listing.id, buyer)

    @pytest.mark.asyncio
    async def test_add_twice(self, db_session, buyer, listing):
        service = FavoriteService(db_session)
        await service.add_favorite(listing.id, buyer)

        with pytest.raises(DuplicateResourceError):
            await service.add_favorite(listing.id, buyer)

    @pytest.mark.asyncio
    async def test_add_missing_listing(self, db_session, buyer):
        with pytest.raises(PropertyNotFoundError):
            await FavoriteService(db_session).add_favorite(uuid.uuid4(), buyer)

    @pytest.mark.asyncio
    async def test_remove_is_idempotent(self, db_session, buyer, listing):
        service = FavoriteService(db_session)
        await service.add_favorite(listing.id, buyer)

        assert await service.remove_favorite(listing.id, buyer) is True
        assert await service.remove_favorite(listing.id, buyer) is False
        assert not await service.is_favorite(listing.id, buyer)

    @pytest.mark.asyncio
    async def test_anonymous_is_never_favorite(self, db_session, listing):
        assert await FavoriteService(db_session).is_favorite(listing.id, None) is False


class TestMessageService:
    """Test messaging between members."""

    @pytest.mark.asyncio
    async def test_send_message(self, db_session, seller, buyer, listing):
        service = MessageService(db_session)
        data = MessageCreate(
            property_id=listing.id, recipient_id=seller.id, subject="  ", content="  Still available?  "
        )

        message = await service.send_message(data, buyer)

        assert message.sender_id == buyer.id
        assert message.recipient_id == seller.id
        assert message.subject is None
        assert message.content == "Still available?"
        assert message.read is False

    @pytest.mark.asyncio
    async def test_send_to_self(self, db_session, seller, listing):
        data = MessageCreate(property_id=listing.id, recipient_id=seller.id, content="Note to self")

        with pytest.raises(BadRequestError):
            await MessageService(db_session).send_message(data, seller)

    @pytest.mark.asyncio
    async def test_send_about_missing_listing(self, db_session, seller, buyer):
        data = MessageCreate(property_id=uuid.uuid4(), recipient_id=seller.id, content="Hi")

        with pytest.raises(PropertyNotFoundError):
            await MessageService(db_session).send_message(data, buyer)

    @pytest.mark.asyncio
    async def test_send_to_missing_recipient(self, db_session, buyer, listing):
        data = MessageCreate(property_id=listing.id, recipient_id=uuid.uuid4(), content="Hi")

        with pytest.raises(NotFoundError, match="Recipient"):
            await MessageService(db_session).send_message(data, buyer)

    @pytest.mark.asyncio
    async def test_inbox_outbox_and_unread(self, db_session, seller, buyer, listing):
        service = MessageService(db_session)
        sent = await service.send_message(
            MessageCreate(property_id=listing.id, recipient_id=seller.id, content="Hi"), buyer
        )

        assert [m.id for m in await service.get_received_messages(seller)] == [sent.id]
        assert [m.id for m in await service.get_sent_messages(buyer)] == [sent.id]
        assert await service.get_unread_count(seller) == 1

        await service.mark_as_read(sent.id, seller)
        assert await service.get_unread_count(seller) == 0

    @pytest.mark.asyncio
    async def test_mark_someone_elses_message(self, db_session, seller, buyer, listing):
        service = MessageService(db_session)
        sent = await service.send_message(
            MessageCreate(property_id=listing.id, recipient_id=seller.id, content="Hi"), buyer
        )

        with pytest.raises(NotFoundError):
            await service.mark_as_read(sent.id, buyer)

    @pytest.mark.asyncio
    async def test_conversation(self, db_session, seller, buyer, listing):
        service = MessageService(db_session)
        await service.send_message(
            MessageCreate(property_id=listing.id, recipient_id=seller.id, content="Offer?"), buyer
        )
        await service.send_message(
            MessageCreate(property_id=listing.id, recipient_id=buyer.id, content="Make one"), seller
        )

        thread = await service.get_property_conversation(listing.id, buyer.id, seller)

        assert [m.content for m in thread] == ["Offer?", "Make one"]


class TestDashboardService:

    @pytest.mark.asyncio
    async def test_dashboard(self, db_session, seller, buyer, listing):
        await PropertyFactory.create_property(db_session, seller, status=PropertyStatus.SOLD)
        await PropertyService(db_session).increment_view_count(listing.id)
        await MessageService(db_session).send_message(
            MessageCreate(property_id=listing.id, recipient_id=seller.id, content="Hi"), buyer
        )
        other = await PropertyFactory.create_property(db_session, buyer, title="Buyer's own place")
        await FavoriteService(db_session).add_favorite(other.id, seller)

        dashboard = await DashboardService(db_session).get_dashboard(seller)

        assert dashboard["profile"].id == seller.id
        assert len(dashboard["listings"]) == 2
        assert len(dashboard["favorites"]) == 1
        assert len(dashboard["messages"]) == 1
        assert dashboard["unread_count"] == 1
        assert dashboard["stats"] == {
            "total_listings": 2,
            "active_listings": 1,
            "total_views": 1,
            "total_favorites": 1,
            "unread_messages": 1,
        }

    @pytest.mark.asyncio
    async def test_empty_dashboard(self, db_session, buyer):
        dashboard = await DashboardService(db_session).get_dashboard(buyer)

        assert dashboard["listings"] == []
        assert dashboard["stats"]["total_listings"] == 0
        assert dashboard["stats"]["unread_messages"] == 0


class TestProfileService:

    @pytest.mark.asyncio
    async def test_update_profile(self, db_session, buyer):
        service = ProfileService(db_session)

        updated = await service.update_profile(
            buyer, ProfileUpdate(full_name="  Bea B.  ", role=ProfileRole.BOTH, location="Austin, TX")
        )

        assert updated.full_name == "Bea B."
        assert updated.role == ProfileRole.BOTH
        assert updated.location == "Austin, TX"
        assert updated.email == "buyer@test.com"

    @pytest.mark.asyncio
    async def test_update_ignores_null_name(self, db_session, seller):
        updated = await ProfileService(db_session).update_profile(seller, ProfileUpdate(full_name=None, bio=None))

        assert updated.full_name == "Sam Seller"
        assert updated.bio is None

    @pytest.mark.asyncio
    async def test_public_profile_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await ProfileService(db_session).get_public_profile(uuid.uuid4())


class TestAuthService:
    """Test authentication through the fake Supabase auth server."""

    @pytest.mark.asyncio
    async def test_signup_creates_profile(self, db_session, gotrue):
        service = AuthService(db_session, gotrue.client())
        data = SignupRequest(email="New@Example.com", password="secret123", full_name="New Seller", role="seller")

        profile, session = await service.signup(data)

        assert profile.email == "new@example.com"
        assert profile.full_name == "New Seller"
        assert profile.role == ProfileRole.SELLER
        assert str(profile.id) == gotrue.users["new@example.com"]["id"]
        assert session.access_token
        assert session.expires_in == 3600

    @pytest.mark.asyncio
    async def test_signup_pending_confirmation(self, db_session, gotrue):
        gotrue.confirm_email = True
        service = AuthService(db_session, gotrue.client())

        profile, session = await service.signup(
            SignupRequest(email="wait@example.com", password="secret123", full_name="Waiting")
        )

        assert session is None
        assert profile.role == ProfileRole.BUYER

    @pytest.mark.asyncio
    async def test_signup_duplicate_email(self, db_session, gotrue):
        service = AuthService(db_session, gotrue.client())
        data = SignupRequest(email="dup@example.com", password="secret123", full_name="Dup")
        await service.signup(data)

        with pytest.raises(DuplicateResourceError):
            await service.signup(data)

    @pytest.mark.asyncio
    async def test_login(self, db_session, gotrue):
        service = AuthService(db_session, gotrue.client())
        await service.signup(SignupRequest(email="log@example.com", password="secret123", full_name="Logan"))

        profile, session = await service.login("log@example.com", "secret123")

        assert profile.email == "log@example.com"
        assert session.refresh_token in gotrue.refresh_tokens

    @pytest.mark.asyncio
    async def test_login_provisions_missing_profile(self, db_session, gotrue):
        """Users created outside the API get a profile on first login."""
        gotrue.users["outside@example.com"] = {
            "id": str(uuid.uuid4()),
            "email": "outside@example.com",
            "password": "secret123",
            "user_metadata": {"full_name": "Outside", "role": "both"},
        }

        profile, _ = await AuthService(db_session, gotrue.client()).login("outside@example.com", "secret123")

        assert profile.full_name == "Outside"
        assert profile.role == ProfileRole.BOTH

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, db_session, gotrue):
        service = AuthService(db_session, gotrue.client())
        await service.signup(SignupRequest(email="log@example.com", password="secret123", full_name="Logan"))

        with pytest.raises(InvalidCredentialsError):
            await service.login("log@example.com", "wrong-password")

    @pytest.mark.asyncio
    async def test_refresh(self, db_session, gotrue):
        service = AuthService(db_session, gotrue.client())
        _, session = await service.signup(
            SignupRequest(email="ref@example.com", password="secret123", full_name="Ref")
        )

        refreshed = await service.refresh(session.refresh_token)

        assert refreshed.refresh_token != session.refresh_token
        with pytest.raises(InvalidTokenError):
            await service.refresh(session.refresh_token)

    @pytest.mark.asyncio
    async def test_upstream_failure(self, db_session, gotrue):
        gotrue.fail_with = 500

        with pytest.raises(UpstreamServiceError):
            await AuthService(db_session, gotrue.client()).login("a@example.com", "secret123")

    @pytest.mark.asyncio
    async def test_get_current_user(self, db_session, gotrue, seller):
        token = make_access_token(seller.id, seller.email)

        profile = await AuthService(db_session, gotrue.client()).get_current_user(token)

        assert profile.id == seller.id

    @pytest.mark.asyncio
    async def test_get_current_user_provisions_from_claims(self, db_session, gotrue):
        profile_id = uuid.uuid4()
        token = make_access_token(profile_id, "claims@example.com", "Claire Claims", "seller")

        profile = await AuthService(db_session, gotrue.client()).get_current_user(token)

        assert profile.id == profile_id
        assert profile.full_name == "Claire Claims"
        assert profile.role == ProfileRole.SELLER

    @pytest.mark.asyncio
    async def test_get_current_user_expired_token(self, db_session, gotrue, seller):
        token = make_access_token(seller.id, seller.email, expires_in=-60)

        with pytest.raises(TokenExpiredError):
            await AuthService(db_session, gotrue.client()).get_current_user(token)

    @pytest.mark.asyncio
    async def test_get_current_user_garbage_token(self, db_session, gotrue):
        with pytest.raises(UnauthorizedError):
            await AuthService(db_session, gotrue.client()).get_current_user("not-a-jwt")
