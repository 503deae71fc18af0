from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol


class TokenDecodeError(Exception):
    """Raised by a provider when a token is malformed, forged or expired."""


class TokenProvider(Protocol):
    """Port for signing and verifying self-contained tokens."""

    def encode(self, *, claims: dict[str, Any], secret: str, expires_delta: timedelta) -> str:
        """Sign ``claims`` with ``secret``; the token expires after ``expires_delta``."""
        ...

    def decode(self, token: str, *, secret: str) -> dict[str, Any]:
        """
        Verify ``token`` against ``secret`` and return its claims.

        :raises TokenDecodeError: On bad signature, malformed input or expiry.
        """
        ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests.

    Tokens are opaque ``<type>.<sub>.<seq>`` strings; the claims, signing
    secret and expiry are kept in memory so wrong-secret and expiry checks
    behave like a real signer.
    """

    def __init__(self) -> None:
        self._seq = 0
        self._issued: dict[str, tuple[str, dict[str, Any]]] = {}

    def encode(self, *, claims: dict[str, Any], secret: str, expires_delta: timedelta) -> str:
        self._seq += 1
        token = f"{claims.get('type', 'token')}.{claims.get('sub')}.{self._seq}"
        payload = dict(claims)
        payload["exp"] = int((datetime.now(UTC) + expires_delta).timestamp())
        self._issued[token] = (secret, payload)
        return token

    def decode(self, token: str, *, secret: str) -> dict[str, Any]:
        entry = self._issued.get(token)
        if entry is None:
            raise TokenDecodeError("Unknown token")
        signed_with, payload = entry
        if signed_with != secret:
            raise TokenDecodeError("Signature verification failed")
        if payload["exp"] <= int(datetime.now(UTC).timestamp()):
            raise TokenDecodeError("Signature has expired")
        return dict(payload)
