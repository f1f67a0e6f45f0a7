"""Video endpoints. Every route requires an authenticated caller."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from vidshare.api.deps import api_response, authenticate_request, current_user, timing, video_service
from vidshare.infra.media.staging import staged_upload
from vidshare.schemas import (
    VideoListQuerySchema,
    VideoPublishSchema,
    VideoSchema,
    VideoUpdateSchema,
    page_payload,
)
from vidshare.services.videos.dto import VideoListIn, VideoPublishIn, VideoUpdateIn

bp = Blueprint("videos", __name__)
bp.before_request(authenticate_request)

video_schema = VideoSchema()
publish_schema = VideoPublishSchema()
update_schema = VideoUpdateSchema()
list_query_schema = VideoListQuerySchema()


def _tmp_dir() -> str:
    return str(current_app.config["UPLOAD_TMP_DIR"])


@bp.get("/", strict_slashes=False)
@timing
def list_videos():
    """Page through published videos; ``query`` and ``userId`` narrow the result."""

    args = list_query_schema.load(request.args)
    page = video_service().list_videos(
        VideoListIn(
            page=args["page"],
            limit=args["limit"],
            sort=tuple(args["sort"]),
            query=args["query"],
            user_id=args["user_id"],
        )
    )
    return api_response(page_payload(page, video_schema), "Videos fetched successfully")


@bp.post("/publishAVideo")
@timing
def publish_video():
    data = publish_schema.load(request.form)
    with (
        staged_upload(request.files.get("videoFile"), _tmp_dir()) as video_file,
        staged_upload(request.files.get("thumbnail"), _tmp_dir()) as thumbnail,
    ):
        video = video_service().publish(
            current_user().id,
            VideoPublishIn(
                title=data["title"],
                description=data["description"],
                video_file=video_file,
                thumbnail=thumbnail,
            ),
        )
    return api_response(video_schema.dump(video), "Video published successfully", status=201)


@bp.get("/getVideoById/<video_id>")
@timing
def get_video(video_id: str):
    video = video_service().get_video(video_id, viewer_id=current_user().id)
    return api_response(video_schema.dump(video), "Video fetched successfully")


@bp.patch("/updateVideo/<video_id>")
@timing
def update_video(video_id: str):
    data = update_schema.load(request.form)
    with staged_upload(request.files.get("thumbnail"), _tmp_dir()) as thumbnail:
        video = video_service().update(
            current_user().id,
            video_id,
            VideoUpdateIn(
                title=data["title"],
                description=data["description"],
                thumbnail=thumbnail,
            ),
        )
    return api_response(video_schema.dump(video), "Video updated successfully")


@bp.post("/deleteVideo/<video_id>")
@timing
def delete_video(video_id: str):
    video_service().delete(current_user().id, video_id)
    return api_response({}, "Video deleted successfully")


@bp.post("/togglePublishStatus/<video_id>")
@timing
def toggle_publish_status(video_id: str):
    video = video_service().toggle_publish(current_user().id, video_id)
    return api_response(video_schema.dump(video), "Publish status toggled successfully")


@bp.post("/viewUpdate/<video_id>")
@timing
def register_view(video_id: str):
    video = video_service().register_view(current_user().id, video_id)
    return api_response(video_schema.dump(video), "View recorded")
