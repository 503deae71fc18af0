# mediahub/services/tokens/service.py
from __future__ import annotations

import logging
from typing import Any

from mediahub.models.user import User
from mediahub.repositories.user import UserRepository
from mediahub.services._shared.base import BaseService
from mediahub.services._shared.dto import Actor
from mediahub.services._shared.errors import (
    InternalError,
    InvalidTokenError,
    PersistenceError,
    ServiceError,
    UnauthorizedError,
)
from mediahub.services._shared.ports.token_provider import TokenDecodeError, TokenProvider
from mediahub.services.tokens.dto import TokenConfig, TokenPairOut

log = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenService(BaseService):
    """
    Session token lifecycle: issue, verify, rotate and revoke.

    Exactly one refresh token is honoured per user: the value stored on the
    user document. :meth:`rotate` overwrites it and :meth:`revoke` removes it,
    so a presented refresh token is valid only if it verifies *and* equals the
    stored value (see :meth:`matches_stored`).
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        token_cfg: TokenConfig,
        users: UserRepository | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter for signing/verifying tokens.
        :param token_cfg: Secrets and lifetimes per token type.
        :param users: Credential store adapter.
        """
        super().__init__(users=users)
        self.tokens = token_provider
        self.cfg = token_cfg

    # ------------------------------------------------------------------ #
    # Issuing
    # ------------------------------------------------------------------ #

    def issue_pair(self, user: User) -> TokenPairOut:
        """
        Sign a fresh access/refresh pair for ``user``. No side effects.

        :param user: Stored user (needs ``id``, ``username``, ``email``).
        :returns: Access/Refresh token pair.
        """
        subject = str(user.id)
        access_claims: dict[str, Any] = {
            "sub": subject,
            "type": ACCESS_TOKEN_TYPE,
            "username": user.username,
            "email": user.email,
        }
        refresh_claims: dict[str, Any] = {"sub": subject, "type": REFRESH_TOKEN_TYPE}

        access = self.tokens.encode(
            claims=access_claims,
            secret=self.cfg.access_secret,
            expires_delta=self.cfg.access_expires,
        )
        refresh = self.tokens.encode(
            claims=refresh_claims,
            secret=self.cfg.refresh_secret,
            expires_delta=self.cfg.refresh_expires,
        )
        return TokenPairOut(access_token=access, refresh_token=refresh)

    def persist_refresh_token(self, user_id: str, refresh_token: str) -> None:
        """
        Store ``refresh_token`` as the single valid one for the user.

        Only the ``refresh_token`` field is written; the rest of the document
        is not re-validated.

        :raises PersistenceError: If the user no longer exists.
        """
        if not self.users.store_refresh_token(user_id, refresh_token):
            raise PersistenceError(f"User {user_id} vanished while storing refresh token")

    def rotate(self, user_id: str) -> TokenPairOut:
        """
        Issue a new pair and make its refresh token the only valid one.

        :param user_id: Target user.
        :returns: The new pair.
        :raises PersistenceError: If the user does not exist.
        :raises InternalError: On any unexpected signing/store failure.
        """
        try:
            user = self.users.get(user_id)
            if user is None:
                raise PersistenceError(f"User {user_id} not found while rotating tokens")
            pair = self.issue_pair(user)
            self.persist_refresh_token(user_id, pair.refresh_token)
        except ServiceError:
            raise
        except Exception as exc:
            log.error("tokens.rotate_failed", extra={"user_id": user_id}, exc_info=True)
            raise InternalError("Something went wrong while generating tokens") from exc
        log.info("tokens.rotated", extra={"user_id": user_id})
        return pair

    def revoke(self, user_id: str) -> None:
        """Forget the stored refresh token; every issued refresh token dies."""
        if not self.users.clear_refresh_token(user_id):
            log.warning("tokens.revoke_unknown_user", extra={"user_id": user_id})
            return
        log.info("tokens.revoked", extra={"user_id": user_id})

    # ------------------------------------------------------------------ #
    # Verification
    # ------------------------------------------------------------------ #

    def _verify(self, token: str, *, secret: str, expected_type: str) -> dict[str, Any]:
        try:
            claims = self.tokens.decode(token, secret=secret)
        except TokenDecodeError as exc:
            raise InvalidTokenError("invalid or expired") from exc
        if claims.get("type") != expected_type or not claims.get("sub"):
            raise InvalidTokenError("invalid or expired")
        return claims

    def verify_access_token(self, token: str) -> dict[str, Any]:
        """
        Verify signature, expiry and type against the access secret.

        :raises InvalidTokenError: On any verification failure.
        """
        return self._verify(token, secret=self.cfg.access_secret, expected_type=ACCESS_TOKEN_TYPE)

    def verify_refresh_token(self, token: str) -> dict[str, Any]:
        """
        Verify signature, expiry and type against the refresh secret.

        :raises InvalidTokenError: On any verification failure.
        """
        return self._verify(
            token, secret=self.cfg.refresh_secret, expected_type=REFRESH_TOKEN_TYPE
        )

    @staticmethod
    def matches_stored(user: User, presented: str) -> bool:
        """Exact-match check of a presented refresh token with the stored one."""
        stored = user.refresh_token
        return bool(stored) and stored == presented

    # ------------------------------------------------------------------ #
    # Authentication gate
    # ------------------------------------------------------------------ #

    def authenticate(self, token: str | None) -> Actor:
        """
        Resolve the actor behind an access token.

        :param token: Raw access token, or ``None`` when the request had none.
        :returns: The authenticated actor.
        :raises UnauthorizedError: If no token was supplied.
        :raises InvalidTokenError: If the token fails verification or its
            user no longer exists.
        """
        if not token:
            raise UnauthorizedError("Unauthorized request")
        claims = self.verify_access_token(token)
        user = self.users.get_public(claims["sub"])
        if user is None:
            raise InvalidTokenError("Invalid access token")
        return Actor(id=str(user.id), username=user.username, email=user.email)
