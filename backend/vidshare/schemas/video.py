"""Video resource schemas."""

from __future__ import annotations

from marshmallow import fields, validate

from .common import BaseSchema, InputSchema, OwnerSchema, PaginationQuerySchema


class VideoPublishSchema(InputSchema):
    title = fields.String(required=True, validate=validate.Length(min=1, max=200))
    description = fields.String(required=True, validate=validate.Length(min=1))


class VideoUpdateSchema(InputSchema):
    title = fields.String(load_default=None, validate=validate.Length(min=1, max=200))
    description = fields.String(load_default=None)


class VideoListQuerySchema(PaginationQuerySchema):
    """``GET /videos`` filters on top of paging and sorting."""

    query = fields.String(load_default=None, validate=validate.Length(max=200))
    user_id = fields.Integer(load_default=None, validate=validate.Range(min=1))


class VideoSchema(BaseSchema):
    id = fields.Integer(dump_only=True)
    video_file = fields.String(dump_only=True)
    thumbnail = fields.String(dump_only=True)
    title = fields.String(dump_only=True)
    description = fields.String(dump_only=True)
    duration = fields.Float(dump_only=True)
    views = fields.Integer(dump_only=True)
    is_published = fields.Boolean(dump_only=True)
    owner = fields.Nested(OwnerSchema, dump_only=True)
    likes_count = fields.Integer(dump_only=True, allow_none=True)
    is_liked = fields.Boolean(dump_only=True, allow_none=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)
