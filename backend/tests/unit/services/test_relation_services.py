"""Unit tests for the toggle-relation engine and the like/subscription services."""

from __future__ import annotations

import pytest

from tests.factories.content import CommentFactory, TweetFactory, VideoFactory
from tests.factories.relation import SubscriptionFactory, VideoLikeFactory
from tests.factories.user import UserFactory
from vidshare.models import Like, Subscription
from vidshare.repositories import LikeRepository, SubscriptionRepository
from vidshare.services._shared.dto import OwnerOut
from vidshare.services._shared.errors import (
    ConflictError,
    InvalidIdentifierError,
    NotFoundError,
    ServiceError,
)
from vidshare.services.comments.dto import CommentOut
from vidshare.services.relations.service import LikeService, SubscriptionService
from vidshare.services.tweets.dto import TweetOut
from vidshare.services.videos.dto import VideoOut


@pytest.fixture()
def likes() -> LikeService:
    return LikeService()


@pytest.fixture()
def subscriptions() -> SubscriptionService:
    return SubscriptionService()


def _like_count(session, **filters) -> int:
    return session.query(Like).filter_by(**filters).count()


class TestLikes:
    def test_video_like_toggles(self, likes, session):
        video = VideoFactory()
        fan = UserFactory()
        video_id, fan_id = video.id, fan.id

        liked = likes.toggle_video_like(fan_id, str(video_id))
        assert liked.active is True
        assert liked.relation.actor_id == fan_id
        assert liked.relation.target_id == video_id
        assert isinstance(liked.relation.target, VideoOut)
        assert liked.relation.target.owner.id == video.owner_id
        assert _like_count(session, liked_by_id=fan_id, video_id=video_id) == 1

        unliked = likes.toggle_video_like(fan_id, video_id)
        assert unliked.active is False
        assert unliked.relation is None
        assert _like_count(session, liked_by_id=fan_id, video_id=video_id) == 0

    def test_comment_and_tweet_likes_are_independent(self, likes, session):
        fan = UserFactory()
        comment, tweet = CommentFactory(), TweetFactory()

        on_comment = likes.toggle_comment_like(fan.id, comment.id)
        on_tweet = likes.toggle_tweet_like(fan.id, tweet.id)

        assert isinstance(on_comment.relation.target, CommentOut)
        assert isinstance(on_tweet.relation.target, TweetOut)
        assert _like_count(session, liked_by_id=fan.id) == 2

    def test_own_video_can_be_liked(self, likes):
        video = VideoFactory()
        assert likes.toggle_video_like(video.owner_id, video.id).active is True

    def test_hidden_draft_reported_missing(self, likes):
        draft = VideoFactory(is_published=False)
        with pytest.raises(NotFoundError, match="Video not found"):
            likes.toggle_video_like(UserFactory().id, draft.id)

    @pytest.mark.parametrize(
        ("method", "message"),
        [
            ("toggle_video_like", "Video not found"),
            ("toggle_comment_like", "Comment not found"),
            ("toggle_tweet_like", "Tweet not found"),
        ],
    )
    def test_missing_target(self, likes, method, message):
        with pytest.raises(NotFoundError, match=message):
            getattr(likes, method)(UserFactory().id, 404_404)

    def test_comment_on_hidden_draft_reported_missing(self, likes):
        comment = CommentFactory(video=VideoFactory(is_published=False))
        with pytest.raises(NotFoundError, match="Comment not found"):
            likes.toggle_comment_like(UserFactory().id, comment.id)

    def test_draft_owner_can_like_its_comments(self, likes):
        draft = VideoFactory(is_published=False)
        comment = CommentFactory(video=draft)
        assert likes.toggle_comment_like(draft.owner_id, comment.id).active is True

    def test_concurrent_like_reports_conflict(self, likes, session, monkeypatch):
        existing = VideoLikeFactory()
        fan_id, video_id = existing.liked_by_id, existing.video_id
        # The other request inserted its row after this one looked.
        monkeypatch.setattr(LikeRepository, "find_one", lambda self, **filters: None)

        with pytest.raises(ConflictError):
            likes.toggle_video_like(fan_id, video_id)

        assert _like_count(session, liked_by_id=fan_id, video_id=video_id) == 1

    def test_invalid_target_id(self, likes):
        with pytest.raises(InvalidIdentifierError, match="Invalid comment ID"):
            likes.toggle_comment_like(UserFactory().id, "x1")

    def test_liked_videos(self, likes):
        fan = UserFactory()
        v1, v2 = VideoFactory(), VideoFactory()
        VideoLikeFactory(liked_by=fan, video=v1)
        VideoLikeFactory(liked_by=fan, video=v2)
        VideoLikeFactory(video=VideoFactory())

        liked = likes.liked_videos(fan.id)
        assert [v.id for v in liked] == [v1.id, v2.id]
        assert liked[0].owner.username == v1.owner.username


class TestSubscriptions:
    def test_toggle_on_and_off(self, subscriptions, session):
        fan, channel = UserFactory(), UserFactory()
        fan_id, channel_id = fan.id, channel.id

        on = subscriptions.toggle(fan_id, channel_id)
        assert on.active is True
        assert isinstance(on.relation.target, OwnerOut)
        assert on.relation.target.username == channel.username

        off = subscriptions.toggle(fan_id, channel_id)
        assert off.active is False
        assert session.query(Subscription).filter_by(subscriber_id=fan_id).count() == 0

    def test_self_subscription_rejected(self, subscriptions):
        user = UserFactory()
        with pytest.raises(ServiceError, match="own channel"):
            subscriptions.toggle(user.id, user.id)

    def test_concurrent_subscribe_reports_conflict(self, subscriptions, session, monkeypatch):
        existing = SubscriptionFactory()
        fan_id, channel_id = existing.subscriber_id, existing.channel_id
        monkeypatch.setattr(SubscriptionRepository, "find_one", lambda self, **filters: None)

        with pytest.raises(ConflictError):
            subscriptions.toggle(fan_id, channel_id)

        assert session.query(Subscription).filter_by(subscriber_id=fan_id).count() == 1

    def test_unknown_channel(self, subscriptions):
        with pytest.raises(NotFoundError, match="Channel not found"):
            subscriptions.toggle(UserFactory().id, 555_555)

    def test_listings(self, subscriptions):
        alice, bob, carol = UserFactory(), UserFactory(), UserFactory()
        SubscriptionFactory(subscriber=alice, channel=bob)
        SubscriptionFactory(subscriber=carol, channel=bob)

        assert [c.id for c in subscriptions.subscribed_channels(alice.id)] == [bob.id]
        assert [s.id for s in subscriptions.channel_subscribers(str(bob.id))] == [alice.id, carol.id]
        assert subscriptions.channel_subscribers(alice.id) == []

    def test_listings_for_unknown_user(self, subscriptions):
        with pytest.raises(NotFoundError):
            subscriptions.subscribed_channels(888_888)
        with pytest.raises(NotFoundError):
            subscriptions.channel_subscribers(888_888)
