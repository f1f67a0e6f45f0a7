"""Like toggles for videos, comments and tweets."""

from __future__ import annotations

from flask import Blueprint

from vidshare.api.deps import api_response, authenticate_request, current_user, like_service, timing
from vidshare.schemas import VideoSchema, toggle_payload

bp = Blueprint("likes", __name__)
bp.before_request(authenticate_request)

video_list_schema = VideoSchema(many=True)


def _toggled(out, noun: str):
    message = f"{noun} liked" if out.active else f"{noun} unliked"
    return api_response(toggle_payload(out), message)


@bp.post("/toggle/v/<video_id>")
@timing
def toggle_video_like(video_id: str):
    return _toggled(like_service().toggle_video_like(current_user().id, video_id), "Video")


@bp.post("/toggle/c/<comment_id>")
@timing
def toggle_comment_like(comment_id: str):
    return _toggled(like_service().toggle_comment_like(current_user().id, comment_id), "Comment")


@bp.post("/toggle/t/<tweet_id>")
@timing
def toggle_tweet_like(tweet_id: str):
    return _toggled(like_service().toggle_tweet_like(current_user().id, tweet_id), "Tweet")


@bp.get("/videos")
@timing
def liked_videos():
    videos = like_service().liked_videos(current_user().id)
    return api_response(video_list_schema.dump(videos), "Liked videos fetched successfully")
