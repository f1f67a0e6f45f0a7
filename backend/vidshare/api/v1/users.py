"""User endpoints: registration, session lifecycle, profile and channel views."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from vidshare.api.deps import (
    REFRESH_COOKIE,
    api_response,
    auth_service,
    clear_auth_cookies,
    current_user,
    identity_service,
    require_auth,
    set_auth_cookies,
    timing,
)
from vidshare.core.extensions import limiter
from vidshare.infra.media.staging import staged_upload
from vidshare.schemas import (
    ChangePasswordSchema,
    ChannelProfileSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
    UpdateAccountSchema,
    UserPublicSchema,
    VideoSchema,
)
from vidshare.services.auth.dto import LoginIn
from vidshare.services.identity.dto import UserPasswordChangeIn, UserRegisterIn, UserUpdateIn

bp = Blueprint("users", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshTokenSchema()
change_password_schema = ChangePasswordSchema()
update_account_schema = UpdateAccountSchema()
user_schema = UserPublicSchema()
channel_schema = ChannelProfileSchema()
login_response_schema = LoginResponseSchema()
token_schema = TokenPairSchema()
video_list_schema = VideoSchema(many=True)


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


def _tmp_dir() -> str:
    return str(current_app.config["UPLOAD_TMP_DIR"])


# --------------------------------------------------------------------------- #
# Registration and session
# --------------------------------------------------------------------------- #


@bp.post("/register")
@timing
def register():
    """Create an account from a multipart form carrying the avatar image."""

    data = register_schema.load(request.form)
    with (
        staged_upload(request.files.get("avatar"), _tmp_dir()) as avatar,
        staged_upload(request.files.get("coverImage"), _tmp_dir()) as cover,
    ):
        user = identity_service().register(
            UserRegisterIn(
                username=data["username"],
                email=data["email"],
                full_name=data["full_name"],
                password=data["password"],
                avatar=avatar,
                cover_image=cover,
            )
        )
    return api_response(user_schema.dump(user), "User registered successfully", status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Check credentials; the token pair is returned and set as cookies."""

    data = login_schema.load(request.get_json(silent=True) or {})
    out = auth_service().login(
        LoginIn(password=data["password"], username=data["username"], email=data["email"])
    )
    response = api_response(login_response_schema.dump(out), "User logged in successfully")
    return set_auth_cookies(response, out.tokens)


@bp.post("/logout")
@require_auth
@timing
def logout():
    auth_service().logout(current_user().id)
    response = api_response({}, "User logged out")
    return clear_auth_cookies(response)


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Exchange the rotation token (cookie or body) for a new pair."""

    body = refresh_schema.load(request.get_json(silent=True) or {})
    token = request.cookies.get(REFRESH_COOKIE) or body["refresh_token"]
    tokens = auth_service().rotate(token)
    response = api_response(token_schema.dump(tokens), "Access token refreshed")
    return set_auth_cookies(response, tokens)


# --------------------------------------------------------------------------- #
# Account
# --------------------------------------------------------------------------- #


@bp.get("/current-user")
@require_auth
@timing
def get_current_user():
    return api_response(user_schema.dump(current_user()), "User fetched successfully")


@bp.post("/change-password")
@require_auth
@timing
def change_password():
    data = change_password_schema.load(request.get_json(silent=True) or {})
    identity_service().change_password(
        UserPasswordChangeIn(
            user_id=current_user().id,
            old_password=data["old_password"],
            new_password=data["new_password"],
        )
    )
    return api_response({}, "Password changed successfully")


@bp.patch("/update-account")
@require_auth
@timing
def update_account():
    data = update_account_schema.load(request.get_json(silent=True) or {})
    user = identity_service().update_account(
        current_user().id, UserUpdateIn(full_name=data["full_name"], email=data["email"])
    )
    return api_response(user_schema.dump(user), "Account details updated successfully")


@bp.patch("/avatar")
@require_auth
@timing
def update_avatar():
    with staged_upload(request.files.get("avatar"), _tmp_dir()) as staged:
        user = identity_service().update_avatar(current_user().id, staged)
    return api_response(user_schema.dump(user), "Avatar updated successfully")


@bp.patch("/cover-image")
@require_auth
@timing
def update_cover_image():
    with staged_upload(request.files.get("coverImage"), _tmp_dir()) as staged:
        user = identity_service().update_cover_image(current_user().id, staged)
    return api_response(user_schema.dump(user), "Cover image updated successfully")


# --------------------------------------------------------------------------- #
# Channel and history
# --------------------------------------------------------------------------- #


@bp.get("/c/<username>")
@require_auth
@timing
def channel_profile(username: str):
    profile = identity_service().channel_profile(username, viewer_id=current_user().id)
    return api_response(channel_schema.dump(profile), "User channel fetched successfully")


@bp.get("/history")
@require_auth
@timing
def watch_history():
    videos = identity_service().watch_history(current_user().id)
    return api_response(video_list_schema.dump(videos), "Watch history fetched successfully")
