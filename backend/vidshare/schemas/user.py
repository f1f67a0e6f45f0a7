"""User, session and channel schemas."""

from __future__ import annotations

from marshmallow import fields, validate

from .common import BaseSchema, InputSchema


class RegisterSchema(InputSchema):
    """Multipart text fields of the registration form; files travel separately."""

    username = fields.String(required=True, validate=validate.Length(min=1, max=50))
    email = fields.String(required=True, validate=validate.Length(min=1, max=254))
    full_name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1, max=128))


class LoginSchema(InputSchema):
    """Either ``username`` or ``email`` plus the password."""

    username = fields.String(load_default=None, validate=validate.Length(max=50))
    email = fields.String(load_default=None, validate=validate.Length(max=254))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1, max=128))


class RefreshTokenSchema(InputSchema):
    refresh_token = fields.String(load_default=None)


class ChangePasswordSchema(InputSchema):
    old_password = fields.String(required=True, load_only=True, validate=validate.Length(min=1, max=128))
    new_password = fields.String(required=True, load_only=True, validate=validate.Length(min=1, max=128))


class UpdateAccountSchema(InputSchema):
    full_name = fields.String(load_default=None, validate=validate.Length(min=1, max=100))
    email = fields.String(load_default=None, validate=validate.Length(min=1, max=254))


class UserPublicSchema(BaseSchema):
    """Public representation of a user; secrets are not part of the DTO."""

    id = fields.Integer(dump_only=True)
    username = fields.String(dump_only=True)
    email = fields.String(dump_only=True)
    full_name = fields.String(dump_only=True)
    avatar = fields.String(dump_only=True)
    cover_image = fields.String(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


class ChannelProfileSchema(BaseSchema):
    id = fields.Integer(dump_only=True)
    username = fields.String(dump_only=True)
    email = fields.String(dump_only=True)
    full_name = fields.String(dump_only=True)
    avatar = fields.String(dump_only=True)
    cover_image = fields.String(dump_only=True)
    subscribers_count = fields.Integer(dump_only=True)
    subscribed_to_count = fields.Integer(dump_only=True)
    is_subscribed = fields.Boolean(dump_only=True)


class TokenPairSchema(BaseSchema):
    access_token = fields.String(dump_only=True)
    refresh_token = fields.String(dump_only=True)


class LoginResponseSchema(BaseSchema):
    """``{"user": {...}, "accessToken": ..., "refreshToken": ...}``."""

    user = fields.Nested(UserPublicSchema, dump_only=True)
    access_token = fields.Function(lambda out: out.tokens.access_token, dump_only=True)
    refresh_token = fields.Function(lambda out: out.tokens.refresh_token, dump_only=True)
