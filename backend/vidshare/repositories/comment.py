"""Comment repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from vidshare.models.comment import Comment
from vidshare.repositories.base import BaseRepository, Page, Pagination


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    def _default_eagerload(self, stmt):
        return stmt.options(joinedload(Comment.owner))

    def _sortable_fields(self):
        return {"createdAt": Comment.created_at}

    def _default_sort(self):
        return (Comment.created_at.desc(), Comment.id.desc())

    def _updatable_fields(self):
        return {"content"}

    def list_for_video(self, video_id: int, pagination: Pagination) -> Page[Comment]:
        """Comments on ``video_id``; newest first unless a sort token says otherwise."""
        stmt = self._default_eagerload(select(Comment).where(Comment.video_id == video_id))
        return self._page(stmt, pagination)
