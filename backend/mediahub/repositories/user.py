"""User repository: the credential store adapter."""

from __future__ import annotations

from typing import Any

from mediahub.models.user import PRIVATE_FIELDS, User
from mediahub.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never signs tokens or hashes passwords; callers pass digests and token
    strings in, and get sanitized projections out via :meth:`get_public`.
    """

    model = User

    def _updatable_fields(self) -> set[str]:
        return {"username", "email", "password", "avatar", "picture", "refresh_token"}

    # ---------------------------- Lookup helpers ----------------------------

    @staticmethod
    def _identity_filter(username: str | None, email: str | None) -> dict[str, Any] | None:
        clauses: list[dict[str, Any]] = []
        if username:
            clauses.append({"username": username.strip().lower()})
        if email:
            clauses.append({"email": email.strip().lower()})
        if not clauses:
            return None
        return {"$or": clauses}

    def get_by_username_or_email(self, username: str | None, email: str | None) -> User | None:
        """Fetch the user matching the username OR the email.

        :param username: Username (case-insensitive), may be ``None``.
        :param email: Email (case-insensitive), may be ``None``.
        :returns: Matching user, or ``None`` (also when both are empty).
        """
        raw_filter = self._identity_filter(username, email)
        if raw_filter is None:
            return None
        return self.find_one(raw_filter)

    def exists_by_username_or_email(self, username: str | None, email: str | None) -> bool:
        """Return ``True`` if either the username or the email is taken."""
        raw_filter = self._identity_filter(username, email)
        return raw_filter is not None and self.exists(raw_filter)

    def get_public(self, user_id: Any) -> User | None:
        """Fetch a user without the password digest and refresh token."""
        return self.get(user_id, exclude=PRIVATE_FIELDS)

    # ---------------------------- Field updates ----------------------------

    def set_public_fields(self, user_id: Any, **values: Any) -> User | None:
        """Atomically set fields and return the sanitized record."""
        return self.set_fields(user_id, values=values, exclude=PRIVATE_FIELDS)

    def store_refresh_token(self, user_id: Any, token: str) -> bool:
        """Overwrite the single stored refresh token. ``False`` if no such user."""
        return self.set_fields(user_id, values={"refresh_token": token}) is not None

    def clear_refresh_token(self, user_id: Any) -> bool:
        """Remove the stored refresh token. ``False`` if no such user."""
        return self.set_fields(user_id, unset=["refresh_token"]) is not None

    def update_password(self, user_id: Any, digest: str) -> bool:
        """Replace the password digest. ``False`` if no such user."""
        return self.set_fields(user_id, values={"password": digest}) is not None
