"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from vidshare.core.errors import Unauthorized
from vidshare.core.extensions import get_media_store, get_token_provider
from vidshare.core.logger import ensure_request_id
from vidshare.schemas.common import PaginationQuerySchema
from vidshare.services import (
    AuthService,
    CommentService,
    IdentityService,
    LikeService,
    ServiceContext,
    SubscriptionService,
    TweetService,
    VideoService,
)
from vidshare.services.auth.dto import TokenPairOut
from vidshare.services.identity.dto import UserPublicOut

F = TypeVar("F", bound=Callable[..., Any])

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


# --------------------------------------------------------------------------- #
# Responses
# --------------------------------------------------------------------------- #


def api_response(data: Any = None, message: str = "Success", *, status: int = 200) -> Response:
    """Wrap ``data`` in the success envelope ``{statusCode, data, message, success}``."""

    response = jsonify(
        {
            "statusCode": int(status),
            "data": data,
            "message": message,
            "success": status < 400,
        }
    )
    response.status_code = status
    return response


def _cookie_options() -> dict[str, Any]:
    return {
        "httponly": True,
        "secure": bool(current_app.config.get("COOKIE_SECURE", False)),
        "samesite": "Lax",
        "path": "/",
    }


def set_auth_cookies(response: Response, tokens: TokenPairOut) -> Response:
    """Attach the access and rotation tokens as HttpOnly cookies."""

    cfg = current_app.config
    opts = _cookie_options()
    response.set_cookie(
        ACCESS_COOKIE,
        tokens.access_token,
        max_age=int(cfg.get("ACCESS_TOKEN_EXPIRES_MINUTES", 15)) * 60,
        **opts,
    )
    response.set_cookie(
        REFRESH_COOKIE,
        tokens.refresh_token,
        max_age=int(cfg.get("REFRESH_TOKEN_EXPIRES_DAYS", 7)) * 86400,
        **opts,
    )
    return response


def clear_auth_cookies(response: Response) -> Response:
    opts = _cookie_options()
    response.delete_cookie(ACCESS_COOKIE, **opts)
    response.delete_cookie(REFRESH_COOKIE, **opts)
    return response


# --------------------------------------------------------------------------- #
# Services
# --------------------------------------------------------------------------- #


def service_context() -> ServiceContext:
    user = getattr(g, "current_user", None)
    return ServiceContext(actor_id=user.id if user else None, request_id=ensure_request_id())


def auth_service() -> AuthService:
    return AuthService(token_provider=get_token_provider(), ctx=service_context())


def identity_service() -> IdentityService:
    return IdentityService(media_store=get_media_store(), ctx=service_context())


def video_service() -> VideoService:
    return VideoService(media_store=get_media_store(), ctx=service_context())


def tweet_service() -> TweetService:
    return TweetService(ctx=service_context())


def comment_service() -> CommentService:
    return CommentService(ctx=service_context())


def like_service() -> LikeService:
    return LikeService(ctx=service_context())


def subscription_service() -> SubscriptionService:
    return SubscriptionService(ctx=service_context())


# --------------------------------------------------------------------------- #
# Authentication
# --------------------------------------------------------------------------- #


def _bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


def authenticate_request() -> None:
    """Verify the access token and expose the caller as ``g.current_user``.

    The token comes from the ``accessToken`` cookie or an
    ``Authorization: Bearer`` header. Failures raise and short-circuit the
    request with a 401 envelope. CORS preflights pass through untouched.
    """

    if request.method == "OPTIONS":
        return
    token = request.cookies.get(ACCESS_COOKIE) or _bearer_token()
    service = AuthService(token_provider=get_token_provider())
    g.current_user = service.verify_access(token)


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        authenticate_request()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user() -> UserPublicOut:
    """Return the identity resolved by :func:`authenticate_request`."""

    user = getattr(g, "current_user", None)
    if user is None:
        raise Unauthorized()
    return user


# --------------------------------------------------------------------------- #
# Request parsing
# --------------------------------------------------------------------------- #


def parse_pagination(default_limit: int = 10, max_limit: int = 100) -> dict[str, Any]:
    """Parse ``page``, ``limit`` and sort parameters from ``request.args``."""

    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    return schema.load(request.args)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
