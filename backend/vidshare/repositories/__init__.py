"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from vidshare.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    paginate_select,
    parse_sort_tokens,
)
from vidshare.repositories.comment import CommentRepository
from vidshare.repositories.like import LikeRepository
from vidshare.repositories.subscription import SubscriptionRepository
from vidshare.repositories.tweet import TweetRepository
from vidshare.repositories.user import UserRepository
from vidshare.repositories.video import VideoRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "paginate_select",
    "parse_sort_tokens",
    # Domain
    "CommentRepository",
    "LikeRepository",
    "SubscriptionRepository",
    "TweetRepository",
    "UserRepository",
    "VideoRepository",
]
