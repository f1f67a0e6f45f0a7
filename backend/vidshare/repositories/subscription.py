"""Subscription repository: who follows whom."""

from __future__ import annotations

from sqlalchemy import select

from vidshare.models.subscription import Subscription
from vidshare.models.user import User
from vidshare.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    model = Subscription

    def channels_of(self, subscriber_id: int) -> list[User]:
        """Channels ``subscriber_id`` follows, oldest subscription first."""
        stmt = (
            select(User)
            .join(Subscription, Subscription.channel_id == User.id)
            .where(Subscription.subscriber_id == subscriber_id)
            .order_by(Subscription.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def subscribers_of(self, channel_id: int) -> list[User]:
        """Users following ``channel_id``, oldest subscription first."""
        stmt = (
            select(User)
            .join(Subscription, Subscription.subscriber_id == User.id)
            .where(Subscription.channel_id == channel_id)
            .order_by(Subscription.id.asc())
        )
        return list(self.session.execute(stmt).scalars().all())
