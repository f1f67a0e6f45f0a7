"""Channel subscription endpoints."""

from __future__ import annotations

from flask import Blueprint

from vidshare.api.deps import (
    api_response,
    authenticate_request,
    current_user,
    subscription_service,
    timing,
)
from vidshare.schemas import OwnerSchema, toggle_payload

bp = Blueprint("subscriptions", __name__)
bp.before_request(authenticate_request)

owner_list_schema = OwnerSchema(many=True)


@bp.post("/c/sub/<channel_id>")
@timing
def toggle_subscription(channel_id: str):
    out = subscription_service().toggle(current_user().id, channel_id)
    message = "Subscribed" if out.active else "Unsubscribed"
    return api_response(toggle_payload(out), message)


@bp.get("/u/<subscriber_id>")
@timing
def subscribed_channels(subscriber_id: str):
    channels = subscription_service().subscribed_channels(subscriber_id)
    return api_response(owner_list_schema.dump(channels), "Subscribed channels fetched successfully")


@bp.get("/c/<channel_id>")
@timing
def channel_subscribers(channel_id: str):
    subscribers = subscription_service().channel_subscribers(channel_id)
    return api_response(owner_list_schema.dump(subscribers), "Subscribers fetched successfully")
