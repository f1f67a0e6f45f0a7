"""
DTOs for IdentityService.

Data Transfer Objects isolate the service layer from ORM models: password
hashes and rotation tokens never leave the service through them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from vidshare.services._shared.dto import StagedFile

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRegisterIn:
    """
    Input DTO for user registration.

    :param username: Public handle (normalized to lowercase).
    :param email: Login email (normalized to lowercase).
    :param full_name: Display name.
    :param password: Raw password to be hashed by the model.
    :param avatar: Staged avatar image; required.
    :param cover_image: Staged banner image; optional.
    """

    username: str
    email: str
    full_name: str
    password: str
    avatar: StagedFile | None = None
    cover_image: StagedFile | None = None


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Input DTO for updating account details. ``None`` leaves a field unchanged.
    """

    full_name: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class UserPasswordChangeIn:
    user_id: int
    old_password: str
    new_password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe user data (no password hash, no rotation token).
    """

    id: int
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, user: Any) -> UserPublicOut:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            avatar=user.avatar,
            cover_image=user.cover_image or "",
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """
    A channel as seen by one viewer.

    :param subscribers_count: Users following this channel.
    :param subscribed_to_count: Channels this user follows.
    :param is_subscribed: Whether the viewer follows this channel.
    """

    id: int
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str
    subscribers_count: int
    subscribed_to_count: int
    is_subscribed: bool
