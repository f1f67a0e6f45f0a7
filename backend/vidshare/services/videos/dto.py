"""DTOs for VideoService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from vidshare.services._shared.dto import OwnerOut, StagedFile, owner_out


@dataclass(frozen=True, slots=True)
class VideoPublishIn:
    title: str
    description: str
    video_file: StagedFile | None = None
    thumbnail: StagedFile | None = None


@dataclass(frozen=True, slots=True)
class VideoUpdateIn:
    """``None`` leaves a field unchanged; ``thumbnail`` replaces the image."""

    title: str | None = None
    description: str | None = None
    thumbnail: StagedFile | None = None


@dataclass(frozen=True, slots=True)
class VideoListIn:
    page: int = 1
    limit: int = 10
    sort: tuple[str, ...] = ()
    query: str | None = None
    user_id: int | None = None


@dataclass(frozen=True, slots=True)
class VideoOut:
    """
    A video with its owner snapshot.

    ``likes_count`` and ``is_liked`` are filled only by single-video reads.
    """

    id: int
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    owner: OwnerOut
    created_at: datetime | None = None
    updated_at: datetime | None = None
    likes_count: int | None = None
    is_liked: bool | None = None

    @classmethod
    def from_model(
        cls, video: Any, *, likes_count: int | None = None, is_liked: bool | None = None
    ) -> VideoOut:
        return cls(
            id=video.id,
            video_file=video.video_file,
            thumbnail=video.thumbnail,
            title=video.title,
            description=video.description,
            duration=float(video.duration or 0),
            views=int(video.views or 0),
            is_published=bool(video.is_published),
            owner=owner_out(video.owner),
            created_at=video.created_at,
            updated_at=video.updated_at,
            likes_count=likes_count,
            is_liked=is_liked,
        )
