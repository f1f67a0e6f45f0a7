"""Like and subscription payloads."""

from __future__ import annotations

from typing import Any

from marshmallow import fields

from vidshare.services._shared.dto import OwnerOut
from vidshare.services.comments.dto import CommentOut
from vidshare.services.tweets.dto import TweetOut
from vidshare.services.videos.dto import VideoOut

from .common import BaseSchema, OwnerSchema
from .post import CommentSchema, TweetSchema
from .video import VideoSchema

_TARGET_SCHEMAS: dict[type, BaseSchema] = {
    VideoOut: VideoSchema(),
    CommentOut: CommentSchema(),
    TweetOut: TweetSchema(),
    OwnerOut: OwnerSchema(),
}


class RelationSchema(BaseSchema):
    """A freshly created like or subscription with its target snapshot."""

    id = fields.Integer(dump_only=True)
    kind = fields.String(dump_only=True)
    actor_id = fields.Integer(dump_only=True)
    target_id = fields.Integer(dump_only=True)
    target = fields.Method("dump_target", dump_only=True)
    created_at = fields.DateTime(dump_only=True)

    def dump_target(self, relation: Any) -> Any:
        schema = _TARGET_SCHEMAS.get(type(relation.target))
        if schema is None:
            raise TypeError(f"No schema for relation target {type(relation.target).__name__}")
        return schema.dump(relation.target)


def toggle_payload(out: Any) -> dict[str, Any] | None:
    """The relation after a toggle, or ``None`` when it was removed."""
    if not out.active or out.relation is None:
        return None
    return RelationSchema().dump(out.relation)
