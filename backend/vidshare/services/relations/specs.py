"""The concrete relations served by :class:`ToggleRelationEngine`."""

from __future__ import annotations

from vidshare.models.like import Like
from vidshare.models.subscription import Subscription
from vidshare.services._shared.dto import owner_out
from vidshare.services.comments.dto import CommentOut
from vidshare.services.relations.engine import RelationSpec
from vidshare.services.tweets.dto import TweetOut
from vidshare.services.videos.dto import VideoOut


def _video_visible(video, actor_id: int) -> bool:
    return video.is_published or video.owner_id == actor_id


VIDEO_LIKE = RelationSpec(
    name="video_like",
    kind="video",
    relation_repo=lambda uow: uow.likes,
    target_repo=lambda uow: uow.videos,
    model=Like,
    actor_field="liked_by_id",
    target_field="video_id",
    snapshot=VideoOut.from_model,
    visible=_video_visible,
)

COMMENT_LIKE = RelationSpec(
    name="comment_like",
    kind="comment",
    relation_repo=lambda uow: uow.likes,
    target_repo=lambda uow: uow.comments,
    model=Like,
    actor_field="liked_by_id",
    target_field="comment_id",
    snapshot=CommentOut.from_model,
    # Comments on a draft are as hidden as the draft itself.
    visible=lambda comment, actor_id: _video_visible(comment.video, actor_id),
)

TWEET_LIKE = RelationSpec(
    name="tweet_like",
    kind="tweet",
    relation_repo=lambda uow: uow.likes,
    target_repo=lambda uow: uow.tweets,
    model=Like,
    actor_field="liked_by_id",
    target_field="tweet_id",
    snapshot=TweetOut.from_model,
)

SUBSCRIPTION = RelationSpec(
    name="subscription",
    kind="channel",
    relation_repo=lambda uow: uow.subscriptions,
    target_repo=lambda uow: uow.users,
    model=Subscription,
    actor_field="subscriber_id",
    target_field="channel_id",
    snapshot=owner_out,
    self_message="You cannot subscribe to your own channel",
)
