"""Tweet model: short text posts on a channel."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from vidshare.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .like import Like
    from .user import User


class Tweet(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Text post created and mutated only by its owner."""

    __tablename__ = "tweets"

    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (Index("ix_tweets_owner", "owner_id"),)

    owner: Mapped[User] = relationship("User", lazy="joined")
    likes: Mapped[list[Like]] = relationship(
        "Like", back_populates="tweet", cascade="all, delete-orphan", lazy="select"
    )

    @validates("content")
    def _normalize_content(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Content is required.")
        return value.strip()
