"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from typing import Any

from flask import Flask, current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData, text
from sqlalchemy.exc import SQLAlchemyError

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
limiter = Limiter(key_func=get_remote_address)

TOKEN_PROVIDER_KEY = "vidshare.token_provider"
MEDIA_STORE_KEY = "vidshare.media_store"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, rate limiting and service adapters.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`vidshare.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Raises
    ------
    RuntimeError
        When the database does not answer a trivial query. The process must
        not start serving requests without its store.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from vidshare import models as _models  # noqa: F401

    migrate.init_app(app, db)
    limiter.init_app(app)

    with app.app_context():
        try:
            db.session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            uri = app.config.get("SQLALCHEMY_DATABASE_URI")
            raise RuntimeError(f"Failed to connect to database at {uri!r}") from exc
        finally:
            db.session.remove()

    from vidshare.infra.jwt.pyjwt_token_provider import PyJWTTokenProvider
    from vidshare.infra.media.cloudinary_media_store import CloudinaryMediaStore
    from vidshare.services.auth.dto import AuthTokenConfig

    token_cfg = AuthTokenConfig.from_mapping(app.config)
    app.extensions[TOKEN_PROVIDER_KEY] = PyJWTTokenProvider(token_cfg)
    app.extensions[MEDIA_STORE_KEY] = CloudinaryMediaStore.from_mapping(app.config)


def get_token_provider() -> Any:
    """Return the token provider bound to the current application."""
    provider = current_app.extensions.get(TOKEN_PROVIDER_KEY)
    if provider is None:
        raise RuntimeError("Token provider is not initialized. Call init_app() first.")
    return provider


def get_media_store() -> Any:
    """Return the media store bound to the current application."""
    store = current_app.extensions.get(MEDIA_STORE_KEY)
    if store is None:
        raise RuntimeError("Media store is not initialized. Call init_app() first.")
    return store
