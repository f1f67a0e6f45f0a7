"""TweetService: short text posts owned by a channel."""

from __future__ import annotations

import logging

from vidshare.models.tweet import Tweet
from vidshare.services._shared.base import BaseService
from vidshare.services._shared.errors import NotFoundError, ServiceError
from vidshare.services.tweets.dto import TweetOut

logger = logging.getLogger(__name__)


def _clean(content: str | None) -> str:
    text = (content or "").strip()
    if not text:
        raise ServiceError("Content is required")
    return text


class TweetService(BaseService):
    """Create, list, edit and delete tweets. Only the owner may mutate a tweet."""

    def create(self, actor_id: int, content: str) -> TweetOut:
        text = _clean(content)
        with self.rw_uow() as uow:
            tweet = uow.tweets.add(Tweet(owner_id=actor_id, content=text))
            out = TweetOut.from_model(tweet)
        logger.info("Tweet created", extra={"user_id": actor_id, "resource_id": out.id})
        return out

    def list_for_user(self, raw_user_id: object) -> list[TweetOut]:
        user_id = self.parse_identifier(raw_user_id, kind="user")
        with self.ro_uow() as uow:
            if uow.users.get(user_id) is None:
                raise NotFoundError("User", user_id, "User does not exist")
            return [TweetOut.from_model(t) for t in uow.tweets.list_by_owner(user_id)]

    def update(self, actor_id: int, raw_tweet_id: object, content: str) -> TweetOut:
        tweet_id = self.parse_identifier(raw_tweet_id, kind="tweet")
        text = _clean(content)
        with self.rw_uow() as uow:
            tweet = self._get_owned(uow, actor_id, tweet_id)
            uow.tweets.assign_updates(tweet, {"content": text})
            return TweetOut.from_model(tweet)

    def delete(self, actor_id: int, raw_tweet_id: object) -> None:
        tweet_id = self.parse_identifier(raw_tweet_id, kind="tweet")
        with self.rw_uow() as uow:
            tweet = self._get_owned(uow, actor_id, tweet_id)
            uow.tweets.delete(tweet)
        logger.info("Tweet deleted", extra={"user_id": actor_id, "resource_id": tweet_id})

    def _get_owned(self, uow, actor_id: int, tweet_id: int) -> Tweet:
        tweet = uow.tweets.get(tweet_id)
        if tweet is None:
            raise NotFoundError("Tweet", tweet_id, "Tweet not found")
        self.ensure_owner(actor_id, tweet.owner_id, msg="You can only modify your own tweets")
        return tweet
