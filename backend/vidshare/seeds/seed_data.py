"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from vidshare.models.comment import Comment
from vidshare.models.like import Like
from vidshare.models.subscription import Subscription
from vidshare.models.tweet import Tweet
from vidshare.models.user import User
from vidshare.models.video import Video

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

PLACEHOLDER_MEDIA = "https://res.cloudinary.com/demo/image/upload"

USER_FIXTURES: list[dict[str, str]] = [
    {
        "username": "alexm",
        "email": "alex.martinez@example.com",
        "full_name": "Alex Martinez",
        "password": "devPass123!",
    },
    {
        "username": "jamielee",
        "email": "jamie.lee@example.com",
        "full_name": "Jamie Lee",
        "password": "strongPass123",
    },
    {
        "username": "sarak",
        "email": "sara.kim@example.com",
        "full_name": "Sara Kim",
        "password": "filmMore2024",
    },
]

VIDEO_FIXTURES: list[dict[str, Any]] = [
    {
        "owner": "alexm",
        "title": "Sourdough in ten minutes",
        "description": "A very fast, very wrong guide to bread.",
        "duration": 612.0,
        "views": 128,
    },
    {
        "owner": "alexm",
        "title": "Fixing a bike chain",
        "description": "Tools, patience and a lot of grease.",
        "duration": 305.5,
        "views": 42,
    },
    {
        "owner": "jamielee",
        "title": "Night sky timelapse",
        "description": "Four hours of stars squeezed into ninety seconds.",
        "duration": 90.0,
        "views": 977,
    },
    {
        "owner": "sarak",
        "title": "Draft: studio tour",
        "description": "Not ready yet.",
        "duration": 240.0,
        "views": 0,
        "is_published": False,
    },
]

TWEET_FIXTURES: list[dict[str, str]] = [
    {"owner": "alexm", "content": "New bread video is up. Do not try this at home."},
    {"owner": "jamielee", "content": "Clear skies tonight, camera is rolling."},
    {"owner": "sarak", "content": "Studio almost finished!"},
]

COMMENT_FIXTURES: list[dict[str, str]] = [
    {"owner": "jamielee", "video": "Sourdough in ten minutes", "content": "This cannot work."},
    {"owner": "sarak", "video": "Sourdough in ten minutes", "content": "It worked for me!"},
    {"owner": "alexm", "video": "Night sky timelapse", "content": "Beautiful shot."},
]

SUBSCRIPTION_FIXTURES: list[tuple[str, str]] = [
    ("jamielee", "alexm"),
    ("sarak", "alexm"),
    ("alexm", "jamielee"),
]

VIDEO_LIKE_FIXTURES: list[tuple[str, str]] = [
    ("jamielee", "Sourdough in ten minutes"),
    ("sarak", "Night sky timelapse"),
    ("alexm", "Night sky timelapse"),
]


def _session(database: SQLAlchemy) -> Session:
    """Return the current SQLAlchemy session."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalar_one_or_none()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    return instance, True


def seed_users(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create demo channels with placeholder avatars."""
    if verbose:
        LOGGER.info("Seeding users...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    for fixture in USER_FIXTURES:
        username = fixture["username"]
        user = session.execute(select(User).filter_by(username=username)).scalar_one_or_none()
        created = user is None
        if user is None:
            user = User(
                username=username,
                email=fixture["email"],
                full_name=fixture["full_name"],
                avatar=f"{PLACEHOLDER_MEDIA}/{username}-avatar.png",
                cover_image="",
            )
            user.password = fixture["password"]
            session.add(user)
        else:
            user.full_name = fixture["full_name"]
        session.flush()
        _touch(summary, "users", created)
    session.commit()

    return summary


def seed_content(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create videos, tweets, comments, subscriptions and likes between the demo users."""
    if verbose:
        LOGGER.info("Seeding videos, tweets and relations...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}

    users = {
        u.username: u
        for u in session.execute(
            select(User).where(User.username.in_([f["username"] for f in USER_FIXTURES]))
        ).scalars()
    }
    videos: dict[str, Video] = {}

    for fixture in VIDEO_FIXTURES:
        owner = users[fixture["owner"]]
        slug = fixture["title"].lower().replace(" ", "-").replace(":", "")
        video, created = _get_or_create(
            session,
            Video,
            owner_id=owner.id,
            title=fixture["title"],
            defaults={
                "description": fixture["description"],
                "video_file": f"{PLACEHOLDER_MEDIA}/{slug}.mp4",
                "thumbnail": f"{PLACEHOLDER_MEDIA}/{slug}.jpg",
                "duration": fixture["duration"],
                "views": fixture["views"],
                "is_published": fixture.get("is_published", True),
            },
        )
        session.flush()
        videos[video.title] = video
        _touch(summary, "videos", created)

    for fixture in TWEET_FIXTURES:
        _, created = _get_or_create(
            session, Tweet, owner_id=users[fixture["owner"]].id, content=fixture["content"]
        )
        _touch(summary, "tweets", created)

    for fixture in COMMENT_FIXTURES:
        _, created = _get_or_create(
            session,
            Comment,
            owner_id=users[fixture["owner"]].id,
            video_id=videos[fixture["video"]].id,
            content=fixture["content"],
        )
        _touch(summary, "comments", created)

    for subscriber, channel in SUBSCRIPTION_FIXTURES:
        _, created = _get_or_create(
            session,
            Subscription,
            subscriber_id=users[subscriber].id,
            channel_id=users[channel].id,
        )
        _touch(summary, "subscriptions", created)

    for liker, title in VIDEO_LIKE_FIXTURES:
        _, created = _get_or_create(
            session, Like, liked_by_id=users[liker].id, video_id=videos[title].id
        )
        _touch(summary, "likes", created)
    session.commit()

    return summary


__all__ = ["seed_users", "seed_content"]
