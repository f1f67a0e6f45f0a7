"""Flask-Cors setup for the API prefix."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def _allowed_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def init_app(app: Flask) -> None:
    # Auth cookies need credentials, which browsers refuse for "*".
    origins = _allowed_origins(app.config.get("CORS_ORIGINS", ""))
    open_to_all = origins in ([], ["*"])
    api_prefix = app.config.get("API_BASE_PREFIX", "/api").rstrip("/")
    CORS(
        app,
        resources={f"{api_prefix}/*": {"origins": "*" if open_to_all else origins}},
        supports_credentials=not open_to_all,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
