"""Tweet repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from vidshare.models.tweet import Tweet
from vidshare.repositories.base import BaseRepository


class TweetRepository(BaseRepository[Tweet]):
    model = Tweet

    def _default_eagerload(self, stmt):
        return stmt.options(joinedload(Tweet.owner))

    def _updatable_fields(self):
        return {"content"}

    def list_by_owner(self, owner_id: int) -> list[Tweet]:
        """All tweets of one user, newest first."""
        stmt = self._default_eagerload(
            select(Tweet)
            .where(Tweet.owner_id == owner_id)
            .order_by(Tweet.created_at.desc(), Tweet.id.desc())
        )
        return list(self.session.execute(stmt).scalars().unique().all())
