from __future__ import annotations

import pytest

from tests.factories.content import VideoFactory
from tests.factories.relation import SubscriptionFactory
from tests.factories.user import UserFactory
from vidshare.models import User
from vidshare.services._shared.errors import ConflictError, NotFoundError, ServiceError, UpstreamError
from vidshare.services.identity.dto import UserPasswordChangeIn, UserRegisterIn, UserUpdateIn
from vidshare.services.identity.service import DUPLICATE_USER_MSG, IdentityService
from vidshare.services.videos.service import VideoService


@pytest.fixture()
def service(media_store) -> IdentityService:
    return IdentityService(media_store=media_store)


def _register_in(stage, **overrides) -> UserRegisterIn:
    data = {
        "username": "Morpheus",
        "email": "Morpheus@Example.com",
        "full_name": "Morpheus",
        "password": "redpill",
        "avatar": stage("avatar.png"),
    }
    data.update(overrides)
    return UserRegisterIn(**data)


class TestRegister:
    def test_register_uploads_and_normalizes(self, service, stage, media_store):
        out = service.register(_register_in(stage, cover_image=stage("cover.jpg")))

        assert out.username == "morpheus"
        assert out.email == "morpheus@example.com"
        assert out.avatar == media_store.uploads[0].url
        assert out.cover_image == media_store.uploads[1].url

    def test_cover_image_is_optional(self, service, stage):
        out = service.register(_register_in(stage))
        assert out.cover_image == ""

    def test_password_is_hashed(self, service, stage, session):
        out = service.register(_register_in(stage))
        user = session.get(User, out.id)
        assert user.password_hash != "redpill"
        assert user.verify_password("redpill")

    @pytest.mark.parametrize("field", ["username", "email", "full_name", "password"])
    def test_blank_field_rejected(self, service, stage, field):
        with pytest.raises(ServiceError, match="All fields are required"):
            service.register(_register_in(stage, **{field: "  "}))

    def test_missing_avatar(self, service, stage, media_store):
        with pytest.raises(ServiceError, match="Avatar is required"):
            service.register(_register_in(stage, avatar=None))
        assert media_store.uploads == []

    def test_duplicate_rejected_before_upload(self, service, stage, media_store):
        UserFactory(username="morpheus")

        with pytest.raises(ConflictError) as exc_info:
            service.register(_register_in(stage, email="other@example.com"))

        assert str(exc_info.value) == DUPLICATE_USER_MSG
        assert media_store.uploads == []

    def test_duplicate_email_rejected(self, service, stage):
        UserFactory(email="morpheus@example.com")
        with pytest.raises(ConflictError):
            service.register(_register_in(stage, username="someone"))

    def test_media_host_failure(self, service, stage, media_store, session):
        media_store.fail_uploads = True

        with pytest.raises(UpstreamError, match="Failed to upload avatar"):
            service.register(_register_in(stage))

        assert session.query(User).filter_by(username="morpheus").first() is None


class TestAccount:
    def test_change_password(self, service):
        user = UserFactory()
        service.change_password(
            UserPasswordChangeIn(user_id=user.id, old_password="Passw0rd!", new_password="n3w!")
        )
        service.change_password(
            UserPasswordChangeIn(user_id=user.id, old_password="n3w!", new_password="again")
        )

    def test_change_password_wrong_old(self, service):
        user = UserFactory()
        with pytest.raises(ServiceError, match="Invalid old password"):
            service.change_password(
                UserPasswordChangeIn(user_id=user.id, old_password="bad", new_password="n3w!")
            )

    def test_update_account(self, service):
        user = UserFactory()
        out = service.update_account(user.id, UserUpdateIn(full_name="  The One ", email="NEO@x.io"))
        assert out.full_name == "The One"
        assert out.email == "neo@x.io"

    def test_update_account_requires_a_field(self, service):
        user = UserFactory()
        with pytest.raises(ServiceError):
            service.update_account(user.id, UserUpdateIn())

    def test_update_account_email_taken(self, service):
        UserFactory(email="taken@example.com")
        user = UserFactory()
        with pytest.raises(ConflictError, match="already in use"):
            service.update_account(user.id, UserUpdateIn(email="taken@example.com"))

    def test_update_avatar_and_cover(self, service, stage, media_store):
        user = UserFactory()

        out = service.update_avatar(user.id, stage("new.png"))
        assert out.avatar == media_store.uploads[-1].url

        out = service.update_cover_image(user.id, stage("banner.png"))
        assert out.cover_image == media_store.uploads[-1].url

    def test_update_avatar_requires_file(self, service):
        user = UserFactory()
        with pytest.raises(ServiceError, match="Avatar file is missing"):
            service.update_avatar(user.id, None)

    def test_failed_avatar_upload_keeps_old_url(self, service, stage, media_store, session):
        user = UserFactory()
        user_id, old_avatar = user.id, user.avatar
        media_store.fail_uploads = True

        with pytest.raises(UpstreamError):
            service.update_avatar(user_id, stage())

        assert session.get(User, user_id).avatar == old_avatar


class TestChannelProfile:
    def test_counts_and_viewer_flag(self, service):
        channel, fan, other = UserFactory(), UserFactory(), UserFactory()
        SubscriptionFactory(subscriber=fan, channel=channel)
        SubscriptionFactory(subscriber=other, channel=channel)
        SubscriptionFactory(subscriber=channel, channel=other)

        seen_by_fan = service.channel_profile(channel.username.upper(), viewer_id=fan.id)
        assert seen_by_fan.subscribers_count == 2
        assert seen_by_fan.subscribed_to_count == 1
        assert seen_by_fan.is_subscribed is True

        anonymous = service.channel_profile(channel.username, viewer_id=None)
        assert anonymous.is_subscribed is False

    def test_missing_channel(self, service):
        with pytest.raises(NotFoundError, match="Channel does not exist"):
            service.channel_profile("nobody", viewer_id=None)

    def test_blank_username(self, service):
        with pytest.raises(ServiceError, match="Username is missing"):
            service.channel_profile(" ", viewer_id=None)


def test_watch_history_in_view_order(service, media_store):
    viewer = UserFactory()
    first, second = VideoFactory(), VideoFactory()
    videos = VideoService(media_store=media_store)

    videos.register_view(viewer.id, second.id)
    videos.register_view(viewer.id, first.id)
    videos.register_view(viewer.id, second.id)

    history = service.watch_history(viewer.id)
    assert [v.id for v in history] == [second.id, first.id]
    assert history[0].owner.id == second.owner_id
