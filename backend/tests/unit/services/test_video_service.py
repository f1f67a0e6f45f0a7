"""Unit tests for VideoService."""

from __future__ import annotations

import pytest

from tests.factories.content import CommentFactory, VideoFactory
from tests.factories.relation import VideoLikeFactory
from tests.factories.user import UserFactory
from vidshare.models import Comment, Like, Video
from vidshare.services._shared.errors import (
    AuthorizationError,
    InvalidIdentifierError,
    NotFoundError,
    ServiceError,
    UpstreamError,
)
from vidshare.services.videos.dto import VideoListIn, VideoPublishIn, VideoUpdateIn
from vidshare.services.videos.service import VideoService


@pytest.fixture()
def service(media_store) -> VideoService:
    return VideoService(media_store=media_store)


class TestPublish:
    def test_publish_uses_uploaded_media(self, service, stage, media_store):
        owner = UserFactory()
        media_store.video_duration = 61.5

        out = service.publish(
            owner.id,
            VideoPublishIn(
                title=" Intro ",
                description="First upload",
                video_file=stage("clip.mp4"),
                thumbnail=stage("thumb.png"),
            ),
        )

        assert out.title == "Intro"
        assert out.duration == 61.5
        assert out.is_published is True
        assert out.views == 0
        assert out.video_file == media_store.uploads[0].url
        assert out.thumbnail == media_store.uploads[1].url
        assert out.owner.id == owner.id

    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"title": " "}, "Title and description are required"),
            ({"description": ""}, "Title and description are required"),
            ({"video_file": None}, "Video file is required"),
            ({"thumbnail": None}, "Thumbnail is required"),
        ],
    )
    def test_publish_validation(self, service, stage, media_store, overrides, message):
        data = {
            "title": "t",
            "description": "d",
            "video_file": stage("clip.mp4"),
            "thumbnail": stage("thumb.png"),
        }
        data.update(overrides)

        with pytest.raises(ServiceError, match=message):
            service.publish(UserFactory().id, VideoPublishIn(**data))
        assert media_store.uploads == []

    def test_publish_upload_failure(self, service, stage, media_store, session):
        owner = UserFactory()
        media_store.fail_uploads = True

        with pytest.raises(UpstreamError, match="Failed to upload video"):
            service.publish(
                owner.id,
                VideoPublishIn("t", "d", video_file=stage("a.mp4"), thumbnail=stage("b.png")),
            )
        assert session.query(Video).count() == 0


class TestReads:
    def test_list_hides_drafts_and_builds_meta(self, service):
        owner = UserFactory()
        for _ in range(3):
            VideoFactory(owner=owner)
        VideoFactory(owner=owner, is_published=False)

        page = service.list_videos(VideoListIn(page=1, limit=2))

        assert len(page.items) == 2
        assert page.meta.total == 3
        assert page.meta.has_next is True
        assert page.meta.has_prev is False

    def test_list_clamps_limit(self, service):
        VideoFactory()
        page = service.list_videos(VideoListIn(page=0, limit=10_000))
        assert page.meta.page == 1
        assert page.meta.limit == 100

    def test_get_video_with_like_stats(self, service):
        video = VideoFactory()
        fan = UserFactory()
        VideoLikeFactory(video=video, liked_by=fan)

        out = service.get_video(str(video.id), viewer_id=fan.id)
        assert out.likes_count == 1
        assert out.is_liked is True

        out = service.get_video(video.id, viewer_id=None)
        assert out.is_liked is False

    def test_draft_visible_only_to_owner(self, service):
        draft = VideoFactory(is_published=False)

        assert service.get_video(draft.id, viewer_id=draft.owner_id).id == draft.id
        with pytest.raises(NotFoundError, match="Video not found"):
            service.get_video(draft.id, viewer_id=UserFactory().id)

    @pytest.mark.parametrize("raw", ["abc", "0", "-4", "", None, "1.5"])
    def test_invalid_id(self, service, raw):
        with pytest.raises(InvalidIdentifierError, match="Invalid video ID"):
            service.get_video(raw, viewer_id=None)


class TestOwnerCommands:
    def test_update_fields_and_thumbnail(self, service, stage, media_store):
        video = VideoFactory()

        out = service.update(
            video.owner_id,
            video.id,
            VideoUpdateIn(title="New title", thumbnail=stage("t.png")),
        )

        assert out.title == "New title"
        assert out.thumbnail == media_store.uploads[-1].url

    def test_update_nothing(self, service):
        video = VideoFactory()
        with pytest.raises(ServiceError, match="Nothing to update"):
            service.update(video.owner_id, video.id, VideoUpdateIn())

    def test_non_owner_cannot_update_and_nothing_is_uploaded(self, service, stage, media_store):
        video = VideoFactory()

        with pytest.raises(AuthorizationError):
            service.update(UserFactory().id, video.id, VideoUpdateIn(thumbnail=stage()))
        assert media_store.uploads == []

    def test_toggle_publish(self, service):
        video = VideoFactory()
        assert service.toggle_publish(video.owner_id, video.id).is_published is False
        assert service.toggle_publish(video.owner_id, video.id).is_published is True

    def test_toggle_publish_non_owner(self, service):
        video = VideoFactory()
        with pytest.raises(AuthorizationError):
            service.toggle_publish(UserFactory().id, video.id)

    def test_delete_cascades(self, service, session):
        video = VideoFactory()
        video_id, owner_id = video.id, video.owner_id
        CommentFactory(video=video)
        VideoLikeFactory(video=video)

        service.delete(owner_id, video_id)

        assert session.get(Video, video_id) is None
        assert session.query(Comment).filter_by(video_id=video_id).count() == 0
        assert session.query(Like).filter_by(video_id=video_id).count() == 0

    def test_delete_missing(self, service):
        with pytest.raises(NotFoundError):
            service.delete(UserFactory().id, 424_242)


def test_register_view_counts_every_view(service):
    video = VideoFactory(views=0)
    viewer = UserFactory()

    service.register_view(viewer.id, video.id)
    out = service.register_view(viewer.id, video.id)

    assert out.views == 2
