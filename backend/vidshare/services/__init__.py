"""Service layer public API.

Callers import from :mod:`vidshare.services` without knowing the internal
layout.

Re-exports
----------
- Base primitives: :class:`BaseService`, :class:`ServiceContext`
- :class:`AuthService` (Token Service) and :class:`IdentityService`
- Resource services: :class:`VideoService`, :class:`TweetService`,
  :class:`CommentService`, :class:`LikeService`, :class:`SubscriptionService`
- :class:`ToggleRelationEngine` and its :class:`RelationSpec`
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from .auth.service import AuthService
from .comments.service import CommentService
from .identity.service import IdentityService
from .relations.engine import RelationSpec, ToggleOut, ToggleRelationEngine
from .relations.service import LikeService, SubscriptionService
from .tweets.service import TweetService
from .videos.service import VideoService

__all__ = [
    "AuthService",
    "BaseService",
    "CommentService",
    "IdentityService",
    "LikeService",
    "RelationSpec",
    "ServiceContext",
    "SubscriptionService",
    "ToggleOut",
    "ToggleRelationEngine",
    "TweetService",
    "VideoService",
]
