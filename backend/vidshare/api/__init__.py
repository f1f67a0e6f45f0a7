"""HTTP delivery layer: versioned blueprints mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def _join_prefix(*segments: str) -> str:
    parts = [segment.strip("/") for segment in segments if segment.strip("/")]
    return "/" + "/".join(parts)


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Mount each ``(blueprint, relative_prefix)`` pair below ``base_prefix``.

    An empty relative prefix mounts the blueprint at ``base_prefix`` itself,
    which is where the health check lives (``/api/v1/healthcheck``).
    """
    for bp, rel_prefix in entries:
        app.register_blueprint(bp, url_prefix=_join_prefix(base_prefix, rel_prefix))


def init_app(app: Flask) -> None:
    from vidshare.api.v1 import API_VERSION, REGISTRY

    base = app.config.get("API_BASE_PREFIX", "/api")
    register_blueprint_group(app, base_prefix=_join_prefix(base, API_VERSION), entries=REGISTRY)


__all__ = ["init_app", "register_blueprint_group"]
