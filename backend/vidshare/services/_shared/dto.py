"""DTOs shared by several services."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class StagedFile:
    """
    An uploaded file already written to local disk.

    The delivery layer owns the file and deletes it once the service call
    returns; services only read ``path``.

    :param path: Absolute or working-directory relative path.
    :param filename: Client-supplied name (sanitized).
    """

    path: str
    filename: str


@dataclass(frozen=True, slots=True)
class PageMeta:
    """
    Output pagination metadata.

    :param page: Current page (1-based).
    :param limit: Page size.
    :param total: Total rows available.
    :param has_prev: Whether a previous page exists.
    :param has_next: Whether a next page exists.
    """

    page: int
    limit: int
    total: int
    has_prev: bool
    has_next: bool

    @classmethod
    def build(cls, *, total: int, page: int, limit: int) -> PageMeta:
        return cls(
            page=page,
            limit=limit,
            total=total,
            has_prev=page > 1,
            has_next=page * limit < total,
        )


@dataclass(frozen=True, slots=True)
class PageOut(Generic[T]):
    items: Sequence[T]
    meta: PageMeta


@dataclass(frozen=True, slots=True)
class OwnerOut:
    """Public snapshot of the user who owns a video, tweet or comment."""

    id: int
    username: str
    full_name: str
    avatar: str


def owner_out(user: Any) -> OwnerOut:
    return OwnerOut(
        id=user.id,
        username=user.username,
        full_name=user.full_name,
        avatar=user.avatar,
    )
