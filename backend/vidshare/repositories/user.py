"""User repository: identity lookups, channel profile and watch history."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import Row, func, or_, select
from sqlalchemy.orm import joinedload

from vidshare.models.subscription import Subscription
from vidshare.models.user import User, WatchHistoryEntry
from vidshare.models.video import Video
from vidshare.repositories.base import BaseRepository


def _norm(value: str | None) -> str:
    return (value or "").strip().lower()


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Token signing and password policy live in services; this class only reads
    and writes rows.
    """

    model = User

    def _sortable_fields(self):
        return {
            "username": User.username,
            "createdAt": User.created_at,
        }

    def _updatable_fields(self):
        return {"email", "full_name", "avatar", "cover_image"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username_or_email(
        self, *, username: str | None = None, email: str | None = None
    ) -> User | None:
        """Return the user whose username **or** email matches.

        Blank inputs are ignored; ``None`` is returned when both are blank.
        """
        clauses = []
        if _norm(username):
            clauses.append(User.username == _norm(username))
        if _norm(email):
            clauses.append(User.email == _norm(email))
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses)).order_by(User.id)
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_username_or_email(self, *, username: str, email: str) -> bool:
        return self.get_by_username_or_email(username=username, email=email) is not None

    def email_taken_by_other(self, email: str, *, user_id: int) -> bool:
        stmt = select(User.id).where(User.email == _norm(email), User.id != user_id).limit(1)
        return self.session.execute(stmt).first() is not None

    # ---------------------------- Session state ----------------------------

    def set_refresh_token(self, user: User, token: str | None) -> None:
        """Overwrite the stored rotation token (``None`` clears it)."""
        user.refresh_token = token
        self.flush()

    # ---------------------------- Channel profile ----------------------------

    def channel_profile(self, username: str, *, viewer_id: int | None) -> Row[Any] | None:
        """Return ``(user, subscribers_count, subscribed_to_count, is_subscribed)``.

        Counts come from correlated sub-selects so the whole profile is one
        round trip.
        """
        subscribers = (
            select(func.count(Subscription.id))
            .where(Subscription.channel_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        subscribed_to = (
            select(func.count(Subscription.id))
            .where(Subscription.subscriber_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        is_subscribed = (
            select(Subscription.id)
            .where(Subscription.channel_id == User.id, Subscription.subscriber_id == viewer_id)
            .correlate(User)
            .exists()
        )
        stmt = select(
            User,
            subscribers.label("subscribers_count"),
            subscribed_to.label("subscribed_to_count"),
            is_subscribed.label("is_subscribed"),
        ).where(User.username == _norm(username))
        return self.session.execute(stmt).first()

    # ---------------------------- Watch history ----------------------------

    def watch_history(self, user_id: int) -> list[Video]:
        """Videos the user watched, oldest entry first, owners eagerly loaded."""
        stmt = (
            select(Video)
            .join(WatchHistoryEntry, WatchHistoryEntry.video_id == Video.id)
            .where(WatchHistoryEntry.user_id == user_id)
            .options(joinedload(Video.owner))
            .order_by(WatchHistoryEntry.id.asc())
        )
        return list(self.session.execute(stmt).scalars().unique().all())

    def add_to_history(self, user_id: int, video_id: int) -> bool:
        """Append ``video_id`` to the user's history once. Returns ``True`` if added."""
        stmt = select(WatchHistoryEntry.id).where(
            WatchHistoryEntry.user_id == user_id, WatchHistoryEntry.video_id == video_id
        )
        if self.session.execute(stmt).first() is not None:
            return False
        self.session.add(WatchHistoryEntry(user_id=user_id, video_id=video_id))
        self.flush()
        return True
