"""Comment model: text attached to a video."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from vidshare.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .like import Like
    from .user import User
    from .video import Video


class Comment(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Comment left by ``owner`` on ``video``."""

    __tablename__ = "comments"
    __repr_fields__ = ("video_id",)

    content: Mapped[str] = mapped_column(Text, nullable=False)
    video_id: Mapped[int] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        Index("ix_comments_video_created", "video_id", "created_at"),
        Index("ix_comments_owner", "owner_id"),
    )

    video: Mapped[Video] = relationship("Video", back_populates="comments")
    owner: Mapped[User] = relationship("User", lazy="joined")
    likes: Mapped[list[Like]] = relationship(
        "Like", back_populates="comment", cascade="all, delete-orphan", lazy="select"
    )

    @validates("content")
    def _normalize_content(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Content is required.")
        return value.strip()
