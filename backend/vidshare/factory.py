"""``create_app``: the only place where vidshare's Flask pieces are assembled."""

from __future__ import annotations

from flask import Flask

from vidshare import api, cli
from vidshare.core import cors, errors, extensions, logger, proxy
from vidshare.core.config import BaseConfig, get_config

# Order matters: ProxyFix wraps the raw WSGI app, error handlers come after
# the blueprints they cover.
_INITIALISERS = (
    proxy.init_app,
    extensions.init_app,
    logger.init_app,
    cors.init_app,
    api.init_app,
    errors.init_app,
    cli.init_app,
)


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
) -> Flask:
    """
    Build the application.

    :param config: Config class, object or import path. Defaults to the class
        selected by ``APP_ENV``.
    :param instance_relative_config: Also read ``instance/config.py`` when it
        exists.
    """
    app = Flask(__name__, instance_relative_config=instance_relative_config)
    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config:
        app.config.from_pyfile("config.py", silent=True)

    logger.configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    for init in _INITIALISERS:
        init(app)
    return app
