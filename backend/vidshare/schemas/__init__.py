"""Convenience exports for application schemas."""

from __future__ import annotations

from .common import (
    BaseSchema,
    InputSchema,
    OwnerSchema,
    PageMetaSchema,
    PaginationQuerySchema,
    SortQuerySchema,
    camelcase,
    page_payload,
)
from .post import CommentSchema, ContentSchema, TweetSchema
from .relation import RelationSchema, toggle_payload
from .user import (
    ChangePasswordSchema,
    ChannelProfileSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
    UpdateAccountSchema,
    UserPublicSchema,
)
from .video import VideoListQuerySchema, VideoPublishSchema, VideoSchema, VideoUpdateSchema

__all__ = [
    "BaseSchema",
    "InputSchema",
    "SortQuerySchema",
    "PaginationQuerySchema",
    "PageMetaSchema",
    "OwnerSchema",
    "camelcase",
    "page_payload",
    "RegisterSchema",
    "LoginSchema",
    "RefreshTokenSchema",
    "ChangePasswordSchema",
    "UpdateAccountSchema",
    "UserPublicSchema",
    "ChannelProfileSchema",
    "TokenPairSchema",
    "LoginResponseSchema",
    "VideoPublishSchema",
    "VideoUpdateSchema",
    "VideoListQuerySchema",
    "VideoSchema",
    "ContentSchema",
    "TweetSchema",
    "CommentSchema",
    "RelationSchema",
    "toggle_payload",
]
