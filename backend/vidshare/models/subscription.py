"""Subscription model: a user following a channel."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidshare.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Subscription(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """``subscriber`` follows ``channel``; both are users. One row per pair."""

    __tablename__ = "subscriptions"
    __repr_fields__ = ("subscriber_id", "channel_id")

    subscriber_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    channel_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
        CheckConstraint("subscriber_id <> channel_id", name="not_self"),
        Index("ix_subscriptions_channel", "channel_id"),
    )

    subscriber: Mapped[User] = relationship("User", foreign_keys=[subscriber_id])
    channel: Mapped[User] = relationship("User", foreign_keys=[channel_id])
