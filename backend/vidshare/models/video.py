"""Video model: uploaded media owned by a channel."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Float, ForeignKey, Index, Integer, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from vidshare.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .like import Like
    from .user import User, WatchHistoryEntry


class Video(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Published (or hidden) video.

    ``is_published`` governs visibility: hidden videos are only served to
    their owner. Removing a video removes its comments, likes and
    watch-history entries through ORM cascades.
    """

    __tablename__ = "videos"
    __repr_fields__ = ("title",)

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    video_file: Mapped[str] = mapped_column(String(500), nullable=False)
    thumbnail: Mapped[str] = mapped_column(String(500), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    duration: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    __table_args__ = (
        Index("ix_videos_owner", "owner_id"),
        Index("ix_videos_published_created", "is_published", "created_at"),
    )

    owner: Mapped[User] = relationship("User", back_populates="videos", lazy="joined")
    comments: Mapped[list[Comment]] = relationship(
        "Comment", back_populates="video", cascade="all, delete-orphan", lazy="select"
    )
    likes: Mapped[list[Like]] = relationship(
        "Like", back_populates="video", cascade="all, delete-orphan", lazy="select"
    )
    history_entries: Mapped[list[WatchHistoryEntry]] = relationship(
        "WatchHistoryEntry", back_populates="video", cascade="all, delete-orphan", lazy="select"
    )

    @validates("title")
    def _normalize_title(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Title is required.")
        return value.strip()

    @validates("views")
    def _validate_views(self, key: str, value: int) -> int:
        if value is not None and value < 0:
            raise ValueError("Views cannot be negative.")
        return value

