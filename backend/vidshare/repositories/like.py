"""Like repository: relation records between users and liked targets."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from vidshare.models.like import Like
from vidshare.models.video import Video
from vidshare.repositories.base import BaseRepository


class LikeRepository(BaseRepository[Like]):
    model = Like

    def liked_videos(self, user_id: int) -> list[Video]:
        """Videos liked by ``user_id`` in like order, owners eagerly loaded."""
        stmt = (
            select(Video)
            .join(Like, Like.video_id == Video.id)
            .where(Like.liked_by_id == user_id)
            .options(joinedload(Video.owner))
            .order_by(Like.id.asc())
        )
        return list(self.session.execute(stmt).scalars().unique().all())
