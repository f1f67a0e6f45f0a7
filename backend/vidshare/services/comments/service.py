"""CommentService: discussion threads under videos."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from vidshare.models.comment import Comment
from vidshare.services._shared.base import BaseService
from vidshare.services._shared.dto import PageMeta, PageOut
from vidshare.services._shared.errors import NotFoundError, ServiceError
from vidshare.services.comments.dto import CommentOut

logger = logging.getLogger(__name__)


class CommentService(BaseService):
    """List, add, edit and delete comments; only the author may edit or delete."""

    def list_for_video(
        self,
        raw_video_id: object,
        *,
        viewer_id: int | None,
        page: int = 1,
        limit: int = 10,
        sort: Iterable[str] | None = None,
    ) -> PageOut[CommentOut]:
        video_id = self.parse_identifier(raw_video_id, kind="video")
        pagination = self.ensure_pagination(page=page, limit=limit, sort=sort)
        with self.ro_uow() as uow:
            self._get_visible_video(uow, video_id, viewer_id)
            result = uow.comments.list_for_video(video_id, pagination)
            return PageOut(
                items=[CommentOut.from_model(c) for c in result.items],
                meta=PageMeta.build(total=result.total, page=result.page, limit=result.limit),
            )

    def add(self, actor_id: int, raw_video_id: object, content: str) -> CommentOut:
        video_id = self.parse_identifier(raw_video_id, kind="video")
        text = (content or "").strip()
        if not text:
            raise ServiceError("Content is required")
        with self.rw_uow() as uow:
            self._get_visible_video(uow, video_id, actor_id)
            comment = uow.comments.add(Comment(video_id=video_id, owner_id=actor_id, content=text))
            out = CommentOut.from_model(comment)
        logger.info("Comment added", extra={"user_id": actor_id, "resource_id": out.id})
        return out

    def update(self, actor_id: int, raw_comment_id: object, content: str) -> CommentOut:
        comment_id = self.parse_identifier(raw_comment_id, kind="comment")
        text = (content or "").strip()
        if not text:
            raise ServiceError("Content is required")
        with self.rw_uow() as uow:
            comment = self._get_owned(uow, actor_id, comment_id)
            uow.comments.assign_updates(comment, {"content": text})
            return CommentOut.from_model(comment)

    def delete(self, actor_id: int, raw_comment_id: object) -> None:
        comment_id = self.parse_identifier(raw_comment_id, kind="comment")
        with self.rw_uow() as uow:
            comment = self._get_owned(uow, actor_id, comment_id)
            uow.comments.delete(comment)
        logger.info("Comment deleted", extra={"user_id": actor_id, "resource_id": comment_id})

    @staticmethod
    def _get_visible_video(uow, video_id: int, viewer_id: int | None):
        video = uow.videos.get(video_id)
        if video is None or (not video.is_published and video.owner_id != viewer_id):
            raise NotFoundError("Video", video_id, "Video not found")
        return video

    def _get_owned(self, uow, actor_id: int, comment_id: int) -> Comment:
        comment = uow.comments.get(comment_id)
        if comment is None:
            raise NotFoundError("Comment", comment_id, "Comment not found")
        self.ensure_owner(actor_id, comment.owner_id, msg="You can only modify your own comments")
        return comment
