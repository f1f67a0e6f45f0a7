"""Comment endpoints nested under videos."""

from __future__ import annotations

from flask import Blueprint, request

from vidshare.api.deps import (
    api_response,
    authenticate_request,
    comment_service,
    current_user,
    parse_pagination,
    timing,
)
from vidshare.schemas import CommentSchema, ContentSchema, page_payload

bp = Blueprint("comments", __name__)
bp.before_request(authenticate_request)

content_schema = ContentSchema()
comment_schema = CommentSchema()


@bp.get("/<video_id>")
@timing
def list_comments(video_id: str):
    """Comments of one video, newest first unless ``sort`` says otherwise."""

    args = parse_pagination()
    page = comment_service().list_for_video(
        video_id,
        viewer_id=current_user().id,
        page=args["page"],
        limit=args["limit"],
        sort=args["sort"],
    )
    return api_response(page_payload(page, comment_schema), "Comments fetched successfully")


@bp.post("/<video_id>")
@timing
def add_comment(video_id: str):
    data = content_schema.load(request.get_json(silent=True) or {})
    comment = comment_service().add(current_user().id, video_id, data["content"])
    return api_response(comment_schema.dump(comment), "Comment added successfully", status=201)


@bp.patch("/c/<comment_id>")
@timing
def update_comment(comment_id: str):
    data = content_schema.load(request.get_json(silent=True) or {})
    comment = comment_service().update(current_user().id, comment_id, data["content"])
    return api_response(comment_schema.dump(comment), "Comment updated successfully")


@bp.delete("/c/<comment_id>")
@timing
def delete_comment(comment_id: str):
    comment_service().delete(current_user().id, comment_id)
    return api_response({}, "Comment deleted successfully")
