"""Shared API helpers: auth gate, service wiring, uploads and responses."""

from __future__ import annotations

import functools
import os
import time
import uuid
from collections.abc import Callable, Iterable
from contextlib import suppress
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from marshmallow import Schema
from werkzeug.utils import secure_filename

from mediahub.core import extensions
from mediahub.repositories.user import UserRepository
from mediahub.services._shared.dto import ACCESS_COOKIE, ResponseDirective
from mediahub.services.channels.service import ChannelService
from mediahub.services.profile.service import ProfileService
from mediahub.services.sessions.service import SessionService
from mediahub.services.tokens.service import TokenService

F = TypeVar("F", bound=Callable[..., Any])

# ---------------------------- Service wiring ---------------------------- #


def token_service() -> TokenService:
    """Build a :class:`TokenService` from the current app's adapters."""

    return TokenService(
        token_provider=extensions.get_token_provider(),
        token_cfg=extensions.get_token_config(),
        users=UserRepository(),
    )


def session_service(*, with_uploader: bool = False) -> SessionService:
    """Build a :class:`SessionService`; the uploader is resolved on demand."""

    return SessionService(
        tokens=token_service(),
        hasher=extensions.get_password_hasher(),
        uploader=extensions.get_media_uploader() if with_uploader else None,
    )


def profile_service(*, with_uploader: bool = False) -> ProfileService:
    return ProfileService(
        uploader=extensions.get_media_uploader() if with_uploader else None,
    )


def channel_service() -> ChannelService:
    return ChannelService()


# ------------------------------ Auth gate ------------------------------ #


def access_token_from_request() -> str | None:
    """Return the access token from the cookie, else from the Bearer header."""

    token = request.cookies.get(ACCESS_COOKIE)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


def require_auth(func: F) -> F:
    """Verify the access token and pass the resolved ``actor`` to the view."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        actor = token_service().authenticate(access_token_from_request())
        return func(*args, actor=actor, **kwargs)

    return wrapper  # type: ignore[return-value]


# ------------------------------- Uploads ------------------------------- #


def save_upload(field: str) -> str | None:
    """Save the multipart file ``field`` under ``UPLOAD_TMP_DIR``.

    :returns: Local path of the saved file, or ``None`` if none was sent.
    """

    storage = request.files.get(field)
    if storage is None or not storage.filename:
        return None
    filename = secure_filename(storage.filename) or "upload"
    tmp_dir = current_app.config["UPLOAD_TMP_DIR"]
    os.makedirs(tmp_dir, exist_ok=True)
    path = os.path.join(tmp_dir, f"{uuid.uuid4().hex}-{filename}")
    storage.save(path)
    return path


def discard_uploads(paths: Iterable[str | None]) -> None:
    """Remove temp files the uploader never consumed (e.g. rejected requests)."""

    for path in paths:
        if path:
            with suppress(FileNotFoundError):
                os.remove(path)


# ------------------------------ Responses ------------------------------ #


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def apply_directive(directive: ResponseDirective, schema: Schema | None = None) -> Response:
    """Render a use-case result: JSON envelope plus cookie operations."""

    data = schema.dump(directive.body) if schema is not None else directive.body
    response = json_response(
        {"data": data, "message": directive.message},
        status=int(directive.status),
    )
    for op in directive.cookies:
        if op.clears:
            response.delete_cookie(
                op.name, secure=op.secure, httponly=op.http_only, samesite=op.same_site
            )
        else:
            response.set_cookie(
                op.name,
                op.value,
                secure=op.secure,
                httponly=op.http_only,
                samesite=op.same_site,
            )
    return response


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
