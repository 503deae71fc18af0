# mediahub/infra/jwt/pyjwt_token_provider.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from mediahub.services._shared.ports import TokenDecodeError, TokenProvider


@dataclass(slots=True)
class PyJWTTokenProvider(TokenProvider):
    """
    Adapter signing HS256 JWTs with PyJWT.

    The secret is passed per call, so access and refresh tokens are signed
    with different keys. Every token gets ``iat``, ``exp`` and a random
    ``jti``; two tokens minted in the same second are still distinct.
    """

    algorithm: str = "HS256"
    leeway: timedelta = timedelta(seconds=0)

    def encode(self, *, claims: dict[str, Any], secret: str, expires_delta: timedelta) -> str:
        now = datetime.now(UTC)
        payload = dict(claims)
        payload.update(
            {
                "iat": now,
                "exp": now + expires_delta,
                "jti": uuid.uuid4().hex,
            }
        )
        return jwt.encode(payload, secret, algorithm=self.algorithm)

    def decode(self, token: str, *, secret: str) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                leeway=self.leeway,
                options={"require": ["exp", "sub"]},
            )
        except jwt.PyJWTError as exc:
            # Signature, expiry and format problems are the same to callers
            raise TokenDecodeError(str(exc)) from exc
