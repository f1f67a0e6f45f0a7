"""Like model: existence-as-state link between a user and one liked target."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .tweet import Tweet
    from .user import User
    from .video import Video

_ONE_TARGET = (
    "(CASE WHEN video_id IS NOT NULL THEN 1 ELSE 0 END)"
    " + (CASE WHEN comment_id IS NOT NULL THEN 1 ELSE 0 END)"
    " + (CASE WHEN tweet_id IS NOT NULL THEN 1 ELSE 0 END) = 1"
)


class Like(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A like on exactly one of ``video``, ``comment`` or ``tweet``.

    The row existing *is* the liked state; unliking deletes it. Unique
    constraints allow at most one like per (user, target) pair, so a racing
    duplicate insert fails at the store instead of producing a second row.
    NULL target columns never collide because SQL treats NULLs as distinct.
    """

    __tablename__ = "likes"
    __repr_fields__ = ("liked_by_id", "video_id", "comment_id", "tweet_id")

    liked_by_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    video_id: Mapped[int | None] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=True
    )
    comment_id: Mapped[int | None] = mapped_column(
        ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    )
    tweet_id: Mapped[int | None] = mapped_column(
        ForeignKey("tweets.id", ondelete="CASCADE"), nullable=True
    )

    __table_args__ = (
        CheckConstraint(_ONE_TARGET, name="exactly_one_target"),
        UniqueConstraint("liked_by_id", "video_id", name="uq_likes_user_video"),
        UniqueConstraint("liked_by_id", "comment_id", name="uq_likes_user_comment"),
        UniqueConstraint("liked_by_id", "tweet_id", name="uq_likes_user_tweet"),
        Index("ix_likes_video", "video_id"),
        Index("ix_likes_comment", "comment_id"),
        Index("ix_likes_tweet", "tweet_id"),
    )

    liked_by: Mapped[User] = relationship("User")
    video: Mapped[Video | None] = relationship("Video", back_populates="likes")
    comment: Mapped[Comment | None] = relationship("Comment", back_populates="likes")
    tweet: Mapped[Tweet | None] = relationship("Tweet", back_populates="likes")
