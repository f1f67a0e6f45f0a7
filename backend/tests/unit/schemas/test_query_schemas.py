"""Unit tests for the camelCase schemas and the query parsers."""

import pytest
from marshmallow import ValidationError

from vidshare.schemas import PaginationQuerySchema, RegisterSchema, VideoListQuerySchema
from vidshare.schemas.common import camelcase


@pytest.mark.parametrize(
    ("name", "expected"),
    [("full_name", "fullName"), ("id", "id"), ("subscribed_to_count", "subscribedToCount")],
)
def test_camelcase(name, expected):
    assert camelcase(name) == expected


def test_input_schema_uses_camel_keys_and_rejects_unknown():
    data = RegisterSchema().load(
        {"username": "a", "email": "a@b.co", "fullName": "A", "password": "p"}
    )
    assert data["full_name"] == "A"

    with pytest.raises(ValidationError) as exc_info:
        RegisterSchema().load(
            {"username": "a", "email": "a@b.co", "fullName": "A", "password": "p", "admin": True}
        )
    assert "admin" in exc_info.value.messages


def test_pagination_defaults_and_clamp():
    schema = PaginationQuerySchema(default_limit=10, max_limit=50)
    assert schema.load({}) == {"page": 1, "limit": 10, "sort": []}
    assert schema.load({"limit": "500"})["limit"] == 50


def test_sort_tokens():
    schema = PaginationQuerySchema()
    assert schema.load({"sort": "-createdAt, title,"})["sort"] == ["-createdAt", "title"]
    assert schema.load({"sortBy": "views", "sortType": "asc"})["sort"] == ["views"]
    assert schema.load({"sortBy": "views", "sort": "title"})["sort"] == ["-views", "title"]


def test_unknown_query_params_are_ignored():
    data = VideoListQuerySchema().load({"query": "cats", "userId": "3", "utm_source": "x"})
    assert data["query"] == "cats"
    assert data["user_id"] == 3
