"""Unit tests for TweetService and CommentService."""

from __future__ import annotations

import pytest

from tests.factories.content import CommentFactory, TweetFactory, VideoFactory
from tests.factories.user import UserFactory
from vidshare.models import Tweet
from vidshare.services._shared.errors import (
    AuthorizationError,
    InvalidIdentifierError,
    NotFoundError,
    ServiceError,
)
from vidshare.services.comments.service import CommentService
from vidshare.services.tweets.service import TweetService


class TestTweetService:
    @pytest.fixture()
    def service(self) -> TweetService:
        return TweetService()

    def test_create_and_list(self, service):
        author = UserFactory()
        first = service.create(author.id, "  hello world ")
        second = service.create(author.id, "second")
        TweetFactory()  # someone else

        assert first.content == "hello world"
        assert first.owner.username == author.username
        assert {t.id for t in service.list_for_user(str(author.id))} == {first.id, second.id}

    def test_create_requires_content(self, service):
        with pytest.raises(ServiceError, match="Content is required"):
            service.create(UserFactory().id, "   ")

    def test_list_for_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.list_for_user(999_999)

    def test_list_for_bad_id(self, service):
        with pytest.raises(InvalidIdentifierError, match="Invalid user ID"):
            service.list_for_user("me")

    def test_only_owner_mutates(self, service, session):
        tweet = TweetFactory()
        tweet_id, owner_id = tweet.id, tweet.owner_id
        stranger = UserFactory().id

        with pytest.raises(AuthorizationError):
            service.update(stranger, tweet_id, "hijack")
        with pytest.raises(AuthorizationError):
            service.delete(stranger, tweet_id)

        assert service.update(owner_id, tweet_id, "edited").content == "edited"
        service.delete(owner_id, tweet_id)
        assert session.get(Tweet, tweet_id) is None

    def test_update_missing(self, service):
        with pytest.raises(NotFoundError, match="Tweet not found"):
            service.update(UserFactory().id, 31_337, "x")


class TestCommentService:
    @pytest.fixture()
    def service(self) -> CommentService:
        return CommentService()

    def test_add_and_page(self, service):
        video = VideoFactory()
        author = UserFactory()
        for n in range(3):
            service.add(author.id, video.id, f"comment {n}")

        page = service.list_for_video(video.id, viewer_id=None, page=1, limit=2)

        assert page.meta.total == 3
        assert len(page.items) == 2
        assert page.meta.has_next is True
        assert all(c.video_id == video.id for c in page.items)
        assert page.items[0].owner.id == author.id

    def test_cannot_comment_on_others_draft(self, service):
        draft = VideoFactory(is_published=False)

        with pytest.raises(NotFoundError, match="Video not found"):
            service.add(UserFactory().id, draft.id, "hi")
        assert service.add(draft.owner_id, draft.id, "note to self").content == "note to self"

    def test_list_for_missing_video(self, service):
        with pytest.raises(NotFoundError):
            service.list_for_video(777_777, viewer_id=None)

    def test_empty_content(self, service):
        video = VideoFactory()
        with pytest.raises(ServiceError):
            service.add(video.owner_id, video.id, "")

    def test_only_author_edits_or_deletes(self, service):
        comment = CommentFactory()
        comment_id, author_id = comment.id, comment.owner_id
        # The video owner is not the comment author.
        video_owner = comment.video.owner_id

        with pytest.raises(AuthorizationError):
            service.update(video_owner, comment_id, "moderated")
        with pytest.raises(AuthorizationError):
            service.delete(video_owner, comment_id)

        assert service.update(author_id, comment_id, "fixed typo").content == "fixed typo"
        service.delete(author_id, comment_id)
        with pytest.raises(NotFoundError, match="Comment not found"):
            service.delete(author_id, comment_id)
