"""
VideoService
============

Catalogue reads and owner-only mutations for the ``Video`` aggregate.

Unpublished videos behave as missing for everyone but their owner.
"""

from __future__ import annotations

import logging

from vidshare.models.video import Video
from vidshare.services._shared.base import BaseService, ServiceContext
from vidshare.services._shared.dto import PageMeta, PageOut
from vidshare.services._shared.errors import NotFoundError, ServiceError
from vidshare.services._shared.media import upload_or_fail
from vidshare.services._shared.ports.media_store import MediaStore
from vidshare.services.videos.dto import VideoListIn, VideoOut, VideoPublishIn, VideoUpdateIn

logger = logging.getLogger(__name__)


class VideoService(BaseService):
    """
    :param media_store: Host receiving video files and thumbnails.
    """

    def __init__(self, *, media_store: MediaStore, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.media = media_store

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def list_videos(self, dto: VideoListIn) -> PageOut[VideoOut]:
        """Page through published videos, optionally filtered by text or channel."""
        pagination = self.ensure_pagination(page=dto.page, limit=dto.limit, sort=dto.sort)
        with self.ro_uow() as uow:
            result = uow.videos.list_published(pagination, query=dto.query, owner_id=dto.user_id)
            return PageOut(
                items=[VideoOut.from_model(v) for v in result.items],
                meta=PageMeta.build(total=result.total, page=result.page, limit=result.limit),
            )

    def get_video(self, raw_video_id: object, *, viewer_id: int | None) -> VideoOut:
        """Return one video with ``likes_count`` and the viewer's ``is_liked``."""
        video_id = self.parse_identifier(raw_video_id, kind="video")
        with self.ro_uow() as uow:
            row = uow.videos.get_with_stats(video_id, viewer_id=viewer_id)
            if row is None:
                raise NotFoundError("Video", video_id, "Video not found")
            video, likes_count, is_liked = row
            if not video.is_published and video.owner_id != viewer_id:
                raise NotFoundError("Video", video_id, "Video not found")
            return VideoOut.from_model(
                video, likes_count=int(likes_count or 0), is_liked=bool(is_liked)
            )

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def publish(self, actor_id: int, dto: VideoPublishIn) -> VideoOut:
        """
        Upload the video file and thumbnail, then create the row.

        :raises ServiceError: Missing title, description, video file or thumbnail.
        :raises UpstreamError: The media host failed.
        """
        title = (dto.title or "").strip()
        description = (dto.description or "").strip()
        if not title or not description:
            raise ServiceError("Title and description are required")
        if dto.video_file is None:
            raise ServiceError("Video file is required")
        if dto.thumbnail is None:
            raise ServiceError("Thumbnail is required")

        video_media = upload_or_fail(self.media, dto.video_file, message="Failed to upload video")
        thumb_media = upload_or_fail(
            self.media, dto.thumbnail, message="Failed to upload thumbnail"
        )

        with self.rw_uow() as uow:
            video = uow.videos.add(
                Video(
                    owner_id=actor_id,
                    video_file=video_media.url,
                    thumbnail=thumb_media.url,
                    title=title,
                    description=description,
                    duration=float(video_media.duration or 0),
                    is_published=True,
                )
            )
            out = VideoOut.from_model(video)
        logger.info("Video published", extra={"user_id": actor_id, "resource_id": out.id})
        return out

    def update(self, actor_id: int, raw_video_id: object, dto: VideoUpdateIn) -> VideoOut:
        video_id = self.parse_identifier(raw_video_id, kind="video")
        changes: dict[str, object] = {}
        if dto.title is not None:
            if not dto.title.strip():
                raise ServiceError("Title cannot be empty")
            changes["title"] = dto.title
        if dto.description is not None:
            changes["description"] = dto.description.strip()
        if not changes and dto.thumbnail is None:
            raise ServiceError("Nothing to update")

        # Ownership is checked before anything is uploaded.
        with self.ro_uow() as uow:
            self._get_owned(uow, actor_id, video_id)

        if dto.thumbnail is not None:
            media = upload_or_fail(self.media, dto.thumbnail, message="Failed to upload thumbnail")
            changes["thumbnail"] = media.url

        with self.rw_uow() as uow:
            video = self._get_owned(uow, actor_id, video_id)
            uow.videos.assign_updates(video, changes)
            return VideoOut.from_model(video)

    def delete(self, actor_id: int, raw_video_id: object) -> None:
        """Delete the video together with its comments, likes and history entries."""
        video_id = self.parse_identifier(raw_video_id, kind="video")
        with self.rw_uow() as uow:
            video = self._get_owned(uow, actor_id, video_id)
            uow.videos.delete(video)
        logger.info("Video deleted", extra={"user_id": actor_id, "resource_id": video_id})

    def toggle_publish(self, actor_id: int, raw_video_id: object) -> VideoOut:
        video_id = self.parse_identifier(raw_video_id, kind="video")
        with self.rw_uow() as uow:
            video = self._get_owned(uow, actor_id, video_id)
            uow.videos.assign_updates(video, {"is_published": not video.is_published})
            return VideoOut.from_model(video)

    def register_view(self, viewer_id: int, raw_video_id: object) -> VideoOut:
        """Count one view and append the video to the viewer's history (once)."""
        video_id = self.parse_identifier(raw_video_id, kind="video")
        with self.rw_uow() as uow:
            video = uow.videos.get(video_id)
            if video is None or (not video.is_published and video.owner_id != viewer_id):
                raise NotFoundError("Video", video_id, "Video not found")
            uow.videos.increment_views(video)
            uow.users.add_to_history(viewer_id, video_id)
            return VideoOut.from_model(video)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _get_owned(self, uow, actor_id: int, video_id: int) -> Video:
        video = uow.videos.get(video_id)
        if video is None:
            raise NotFoundError("Video", video_id, "Video not found")
        self.ensure_owner(actor_id, video.owner_id, msg="You can only modify your own videos")
        return video
