"""Like and subscription use cases built on :class:`ToggleRelationEngine`."""

from __future__ import annotations

from vidshare.services._shared.base import BaseService, ServiceContext
from vidshare.services._shared.dto import OwnerOut, owner_out
from vidshare.services._shared.errors import NotFoundError
from vidshare.services.relations.engine import ToggleOut, ToggleRelationEngine
from vidshare.services.relations.specs import COMMENT_LIKE, SUBSCRIPTION, TWEET_LIKE, VIDEO_LIKE
from vidshare.services.videos.dto import VideoOut


class LikeService(BaseService):
    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.engine = ToggleRelationEngine(ctx=self.ctx)

    def toggle_video_like(self, actor_id: int, raw_video_id: object) -> ToggleOut:
        return self.engine.toggle(VIDEO_LIKE, actor_id, raw_video_id)

    def toggle_comment_like(self, actor_id: int, raw_comment_id: object) -> ToggleOut:
        return self.engine.toggle(COMMENT_LIKE, actor_id, raw_comment_id)

    def toggle_tweet_like(self, actor_id: int, raw_tweet_id: object) -> ToggleOut:
        return self.engine.toggle(TWEET_LIKE, actor_id, raw_tweet_id)

    def liked_videos(self, actor_id: int) -> list[VideoOut]:
        with self.ro_uow() as uow:
            return [VideoOut.from_model(v) for v in uow.likes.liked_videos(actor_id)]


class SubscriptionService(BaseService):
    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.engine = ToggleRelationEngine(ctx=self.ctx)

    def toggle(self, actor_id: int, raw_channel_id: object) -> ToggleOut:
        return self.engine.toggle(SUBSCRIPTION, actor_id, raw_channel_id)

    def subscribed_channels(self, raw_subscriber_id: object) -> list[OwnerOut]:
        """Channels followed by the given user."""
        subscriber_id = self.parse_identifier(raw_subscriber_id, kind="subscriber")
        with self.ro_uow() as uow:
            if uow.users.get(subscriber_id) is None:
                raise NotFoundError("User", subscriber_id, "User does not exist")
            return [owner_out(u) for u in uow.subscriptions.channels_of(subscriber_id)]

    def channel_subscribers(self, raw_channel_id: object) -> list[OwnerOut]:
        """Users following the given channel."""
        channel_id = self.parse_identifier(raw_channel_id, kind="channel")
        with self.ro_uow() as uow:
            if uow.users.get(channel_id) is None:
                raise NotFoundError("Channel", channel_id, "Channel not found")
            return [owner_out(u) for u in uow.subscriptions.subscribers_of(channel_id)]
