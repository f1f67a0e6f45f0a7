"""Tweet and comment schemas: short text posts owned by a user."""

from __future__ import annotations

from marshmallow import fields, validate

from .common import BaseSchema, InputSchema, OwnerSchema


class ContentSchema(InputSchema):
    """Body of create/update calls for tweets and comments."""

    content = fields.String(required=True, validate=validate.Length(min=1, max=5000))


class TweetSchema(BaseSchema):
    id = fields.Integer(dump_only=True)
    content = fields.String(dump_only=True)
    owner = fields.Nested(OwnerSchema, dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


class CommentSchema(BaseSchema):
    id = fields.Integer(dump_only=True)
    content = fields.String(dump_only=True)
    video_id = fields.Integer(dump_only=True)
    owner = fields.Nested(OwnerSchema, dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)
