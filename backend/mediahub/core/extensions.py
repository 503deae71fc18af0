"""Process-wide collaborators and their initialization helpers.

The document store connection and the adapters behind the service ports
(token signing, password hashing, media upload) are built once per app and
stored on ``app.extensions`` so request handlers can reach them without
module-level globals leaking between test apps.
"""

from __future__ import annotations

from typing import Any, cast

import mongoengine
from flask import Flask, current_app

from mediahub.services._shared.ports import MediaUploader, PasswordHasher, TokenProvider
from mediahub.services.tokens.dto import TokenConfig

MONGO_ALIAS = mongoengine.DEFAULT_CONNECTION_NAME

_TOKEN_PROVIDER = "token_provider"
_TOKEN_CONFIG = "token_config"
_PASSWORD_HASHER = "password_hasher"
_MEDIA_UPLOADER = "media_uploader"


def connect_store(app: Flask) -> None:
    """Open the MongoEngine connection described by the app config.

    Parameters
    ----------
    app: flask.Flask
        Application providing ``MONGODB_URI``, ``MONGODB_DB`` and
        ``MONGODB_MOCK``. With ``MONGODB_MOCK`` the connection is backed by
        :class:`mongomock.MongoClient` (tests only).
    """
    mongoengine.disconnect(alias=MONGO_ALIAS)
    options: dict[str, Any] = {
        "db": app.config["MONGODB_DB"],
        "host": app.config["MONGODB_URI"],
        "alias": MONGO_ALIAS,
    }
    if app.config.get("MONGODB_MOCK"):
        import mongomock

        options["mongo_client_class"] = mongomock.MongoClient
    mongoengine.connect(**options)


def init_app(app: Flask) -> None:
    """Connect the store and wire the default port adapters.

    Parameters
    ----------
    app: flask.Flask
        Application used to read configuration. Adapters already present in
        ``app.extensions`` are kept, which lets tests inject doubles before
        the first request.

    Raises
    ------
    RuntimeError
        If the access and refresh token secrets are equal.
    """
    from mediahub.infra.hashing.werkzeug_hasher import WerkzeugPasswordHasher
    from mediahub.infra.jwt.pyjwt_token_provider import PyJWTTokenProvider

    if app.config["ACCESS_TOKEN_SECRET"] == app.config["REFRESH_TOKEN_SECRET"]:
        raise RuntimeError("ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must differ")

    connect_store(app)

    app.extensions.setdefault(_TOKEN_PROVIDER, PyJWTTokenProvider())
    app.extensions.setdefault(_PASSWORD_HASHER, WerkzeugPasswordHasher())
    app.extensions[_TOKEN_CONFIG] = TokenConfig(
        access_secret=app.config["ACCESS_TOKEN_SECRET"],
        access_expires=app.config["ACCESS_TOKEN_EXPIRES"],
        refresh_secret=app.config["REFRESH_TOKEN_SECRET"],
        refresh_expires=app.config["REFRESH_TOKEN_EXPIRES"],
    )

    endpoint = app.config.get("MEDIA_STORAGE_ENDPOINT")
    if endpoint:
        from mediahub.infra.storage.minio_uploader import MinioUploader

        app.extensions.setdefault(
            _MEDIA_UPLOADER,
            MinioUploader.from_config(app.config),
        )


def get_token_provider() -> TokenProvider:
    """Return the token signing adapter of the current app."""
    return cast(TokenProvider, current_app.extensions[_TOKEN_PROVIDER])


def get_token_config() -> TokenConfig:
    """Return the secrets and lifetimes used to sign tokens."""
    return cast(TokenConfig, current_app.extensions[_TOKEN_CONFIG])


def get_password_hasher() -> PasswordHasher:
    """Return the password hashing adapter of the current app."""
    return cast(PasswordHasher, current_app.extensions[_PASSWORD_HASHER])


def get_media_uploader() -> MediaUploader:
    """Return the media uploader.

    :raises RuntimeError: If no storage endpoint was configured and no
        uploader was injected.
    """
    uploader = current_app.extensions.get(_MEDIA_UPLOADER)
    if uploader is None:
        raise RuntimeError("Media uploader is not configured. Set MEDIA_STORAGE_ENDPOINT.")
    return cast(MediaUploader, uploader)


def set_media_uploader(app: Flask, uploader: MediaUploader) -> None:
    """Install ``uploader`` on ``app`` (used by tests and alternative wiring)."""
    app.extensions[_MEDIA_UPLOADER] = uploader
