"""Video repository: catalogue listing, per-viewer stats and view counting."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Row, func, or_, select, update
from sqlalchemy.orm import joinedload

from vidshare.models.like import Like
from vidshare.models.video import Video
from vidshare.repositories.base import BaseRepository, Page, Pagination


class VideoRepository(BaseRepository[Video]):
    """Persistence-only repository for :class:`Video`."""

    model = Video

    def _default_eagerload(self, stmt):
        return stmt.options(joinedload(Video.owner))

    def _sortable_fields(self):
        return {
            "createdAt": Video.created_at,
            "views": Video.views,
            "duration": Video.duration,
            "title": Video.title,
        }

    def _default_sort(self):
        return (Video.created_at.desc(), Video.id.desc())

    def _updatable_fields(self):
        return {"title", "description", "thumbnail", "is_published"}

    def list_published(
        self,
        pagination: Pagination,
        *,
        query: str | None = None,
        owner_id: int | None = None,
    ) -> Page[Video]:
        """Page through published videos.

        :param query: Case-insensitive substring matched against title or
            description.
        :param owner_id: Restrict to one channel.
        """
        stmt = self._default_eagerload(select(Video).where(Video.is_published.is_(True)))
        if query and query.strip():
            needle = f"%{query.strip().lower()}%"
            stmt = stmt.where(
                or_(func.lower(Video.title).like(needle), func.lower(Video.description).like(needle))
            )
        if owner_id is not None:
            stmt = stmt.where(Video.owner_id == owner_id)
        return self._page(stmt, pagination)

    def get_with_stats(self, video_id: int, *, viewer_id: int | None) -> Row[Any] | None:
        """Return ``(video, likes_count, is_liked)`` or ``None``."""
        likes_count = (
            select(func.count(Like.id))
            .where(Like.video_id == Video.id)
            .correlate(Video)
            .scalar_subquery()
        )
        is_liked = (
            select(Like.id)
            .where(Like.video_id == Video.id, Like.liked_by_id == viewer_id)
            .correlate(Video)
            .exists()
        )
        stmt = self._default_eagerload(
            select(Video, likes_count.label("likes_count"), is_liked.label("is_liked")).where(
                Video.id == video_id
            )
        )
        return self.session.execute(stmt).first()

    def increment_views(self, video: Video) -> int:
        """Atomically bump ``views`` by one and return the new value."""
        self.session.execute(
            update(Video)
            .where(Video.id == video.id)
            .values(views=Video.views + 1)
            .execution_options(synchronize_session=False)
        )
        self.session.refresh(video, attribute_names=["views"])
        return video.views
