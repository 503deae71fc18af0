# mediahub/services/sessions/dto.py
from __future__ import annotations

from dataclasses import dataclass

from mediahub.services._shared.dto import UserPublicOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param username: Desired handle (stored lowercase).
    :type username: str
    :param email: Email address.
    :type email: str
    :param password: Raw password (hashed before storage).
    :type password: str
    :param avatar_path: Local temp file of the required avatar.
    :type avatar_path: str | None
    :param picture_path: Local temp file of the optional profile picture.
    :type picture_path: str | None
    """

    username: str
    email: str
    password: str
    avatar_path: str | None = None
    picture_path: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login. At least one of ``username``/``email`` is required.

    :param password: Raw password (to be verified).
    :type password: str
    :param username: Username, optional.
    :type username: str | None
    :param email: Email, optional.
    :type email: str | None
    """

    password: str
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class RenewIn:
    """
    Input DTO for session renewal. The cookie value wins over the body value.

    :param cookie_token: Refresh token read from the ``refreshToken`` cookie.
    :type cookie_token: str | None
    :param body_token: Refresh token sent in the request body.
    :type body_token: str | None
    """

    cookie_token: str | None = None
    body_token: str | None = None

    @property
    def presented(self) -> str | None:
        return self.cookie_token or self.body_token or None


@dataclass(frozen=True, slots=True)
class ChangePasswordIn:
    """
    Input DTO for password change.

    :param old_password: Current raw password.
    :type old_password: str
    :param new_password: Replacement raw password.
    :type new_password: str
    """

    old_password: str
    new_password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Login payload: sanitized user plus both tokens (for header-based clients).
    """

    user: UserPublicOut
    access_token: str
    refresh_token: str
