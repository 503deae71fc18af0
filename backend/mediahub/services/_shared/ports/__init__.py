"""
mediahub.services._shared.ports
===============================

Collection of *ports* (hexagonal interfaces) the use-cases depend on.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider`: signing and verification of self-contained tokens.

- :mod:`password_hasher`:
    :class:`~.PasswordHasher`: one-way password digests.

- :mod:`media_uploader`:
    :class:`~.MediaUploader`: pushes local files to object storage and
    returns an explicit :data:`~.UploadResult`.

Design Notes
------------
Concrete adapters (PyJWT, werkzeug, MinIO) live under ``mediahub.infra``.
The in-memory doubles exported here back the unit tests.
"""

from __future__ import annotations

from .media_uploader import (
    InMemoryUploader,
    MediaUploader,
    UploadedMedia,
    UploadFailure,
    UploadResult,
)
from .password_hasher import PasswordHasher, PlainPasswordHasher
from .token_provider import StubTokenProvider, TokenDecodeError, TokenProvider

__all__ = [
    "TokenProvider",
    "TokenDecodeError",
    "StubTokenProvider",
    "PasswordHasher",
    "PlainPasswordHasher",
    "MediaUploader",
    "UploadResult",
    "UploadedMedia",
    "UploadFailure",
    "InMemoryUploader",
]
