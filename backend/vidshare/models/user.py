"""User model: the authenticated identity behind every channel."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, NoReturn

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from vidshare.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .video import Video


def _required_text(value: object, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{label} is required.")
    return value.strip()


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Channel owner and login identity.

    ``username`` and ``email`` are stored trimmed and lowercased and are each
    unique. ``cover_image`` is ``""`` until a banner is uploaded. ``password``
    is write-only; only its Werkzeug hash is kept. ``refresh_token`` holds the
    one rotation token currently honoured for the user: issuing a new pair
    replaces it and logout clears it.
    """

    __tablename__ = "users"
    __repr_fields__ = ("username",)

    username: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    avatar: Mapped[str] = mapped_column(String(500), nullable=False)
    cover_image: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
        Index("ix_users_email", "email"),
        Index("ix_users_username", "username"),
    )

    videos: Mapped[list[Video]] = relationship(
        "Video", back_populates="owner", cascade="all, delete-orphan", lazy="select"
    )
    history_entries: Mapped[list[WatchHistoryEntry]] = relationship(
        "WatchHistoryEntry",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="WatchHistoryEntry.id",
        lazy="select",
    )

    @property
    def password(self) -> NoReturn:
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        return bool(self.password_hash) and check_password_hash(self.password_hash, raw)

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        return _required_text(value, "Username").lower()

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        email = _required_text(value, "Email").lower()
        _, at, domain = email.partition("@")
        # Shape check only; the API layer validates properly.
        if not at or "." not in domain:
            raise ValueError("Email format looks invalid.")
        return email

    @validates("full_name")
    def _normalize_full_name(self, key: str, value: str) -> str:
        return _required_text(value, "Full name")


class WatchHistoryEntry(PKMixin, ReprMixin, db.Model):
    """One video in a user's watch history; the primary key keeps insertion order."""

    __tablename__ = "watch_history"
    __repr_fields__ = ("user_id", "video_id")

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    video_id: Mapped[int] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=False
    )
    watched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint("user_id", "video_id", name="uq_watch_history_user_video"),
        Index("ix_watch_history_user", "user_id"),
    )

    user: Mapped[User] = relationship("User", back_populates="history_entries")
    video: Mapped[Video] = relationship("Video", back_populates="history_entries")
