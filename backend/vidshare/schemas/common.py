"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, RAISE, Schema, fields, post_load, validate


def camelcase(name: str) -> str:
    """``full_name`` -> ``fullName``."""
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


class BaseSchema(Schema):
    """camelCase keys on the wire."""

    def on_bind_field(self, field_name: str, field_obj: fields.Field) -> None:
        field_obj.data_key = camelcase(field_obj.data_key or field_name)


class InputSchema(BaseSchema):
    """Request bodies: unknown keys are a validation error."""

    class Meta:
        unknown = RAISE


class SortQuerySchema(BaseSchema):
    """
    Parse sorting query parameters into ``-field`` tokens.

    Accepts ``sort=-createdAt,title`` or the ``sortBy``/``sortType`` pair
    (``sortType`` is ``asc`` or ``desc``).
    """

    class Meta:
        unknown = EXCLUDE

    sort = fields.String(load_default="")
    sort_by = fields.String(load_default=None, validate=validate.Length(min=1, max=40))
    sort_type = fields.String(load_default="desc", validate=validate.OneOf(["asc", "desc"]))

    @post_load
    def build_tokens(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        raw = data.pop("sort", "") or ""
        tokens = [segment.strip() for segment in raw.split(",") if segment.strip()]
        sort_by = data.pop("sort_by", None)
        sort_type = data.pop("sort_type", "desc")
        if sort_by:
            tokens.insert(0, f"-{sort_by}" if sort_type == "desc" else sort_by)
        data["sort"] = tokens
        return data


class PaginationQuerySchema(SortQuerySchema):
    """Validate pagination parameters with configurable defaults."""

    def __init__(self, *, default_limit: int = 10, max_limit: int = 100, **kwargs: Any) -> None:
        self._default_limit = default_limit
        self._max_limit = max_limit
        super().__init__(**kwargs)

    page = fields.Integer(load_default=1, validate=validate.Range(min=1))
    limit = fields.Integer(validate=validate.Range(min=1))

    @post_load
    def apply_defaults(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        limit = data.get("limit", self._default_limit)
        data["limit"] = min(max(limit, 1), self._max_limit)
        data.setdefault("page", 1)
        return data


class PageMetaSchema(BaseSchema):
    """Metadata block for paginated responses."""

    page = fields.Integer(required=True)
    limit = fields.Integer(required=True)
    total = fields.Integer(required=True)
    has_prev = fields.Boolean(required=True)
    has_next = fields.Boolean(required=True)


class OwnerSchema(BaseSchema):
    """Public snapshot of a user embedded in other resources."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    full_name = fields.String(required=True)
    avatar = fields.String(required=True)


def page_payload(page: Any, item_schema: Schema) -> dict[str, Any]:
    """Dump a ``PageOut`` as ``{"items": [...], "meta": {...}}``."""
    return {
        "items": item_schema.dump(page.items, many=True),
        "meta": PageMetaSchema().dump(page.meta),
    }
