"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from mediahub.core.config import BaseConfig, get_config
from mediahub.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application."""

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    if app.config.get("USE_PROXYFIX", True):
        # Trust a single hop for X-Forwarded-* (secure cookies need the real scheme)
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    from mediahub.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from mediahub.core import cors

    cors.init_app(app)

    from mediahub.api import init_app as init_api

    init_api(app)

    from mediahub.core import errors

    errors.init_app(app)

    from mediahub.cli import init_app as init_cli

    init_cli(app)

    return app
