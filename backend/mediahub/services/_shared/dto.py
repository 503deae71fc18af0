# comments in English; reST docstrings strict
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


@dataclass(frozen=True, slots=True)
class Actor:
    """
    Authenticated identity handed explicitly to every authenticated use-case.

    :param id: User identifier (hex ObjectId).
    :type id: str
    :param username: Username embedded in the access token.
    :type username: str | None
    :param email: Email embedded in the access token.
    :type email: str | None
    """

    id: str
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Sanitized user record: never carries the password digest or refresh token.

    :param id: User identifier.
    :type id: str
    :param username: Lowercase username.
    :type username: str
    :param email: Email address.
    :type email: str
    :param avatar: Avatar URL.
    :type avatar: str
    :param picture: Profile picture URL (``""`` when absent).
    :type picture: str
    :param watch_history: Ordered video ids.
    :type watch_history: list[str]
    :param created_at: Creation timestamp.
    :type created_at: datetime | None
    :param updated_at: Last update timestamp.
    :type updated_at: datetime | None
    """

    id: str
    username: str
    email: str
    avatar: str
    picture: str = ""
    watch_history: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class CookieOp:
    """
    Instruction for the transport to set (``value`` given) or clear a cookie.

    :param name: Cookie name.
    :type name: str
    :param value: Cookie value, ``None`` to clear it.
    :type value: str | None
    :param http_only: Hide the cookie from scripts.
    :type http_only: bool
    :param secure: Only send over HTTPS.
    :type secure: bool
    :param same_site: SameSite policy.
    :type same_site: str
    """

    name: str
    value: str | None
    http_only: bool = True
    secure: bool = True
    same_site: str = "Strict"

    @property
    def clears(self) -> bool:
        return self.value is None


@dataclass(frozen=True, slots=True)
class ResponseDirective:
    """
    Result of a use-case, consumed by the transport layer.

    :param status: HTTP-like status code for the success case.
    :type status: int
    :param body: Payload (DTO, mapping or ``None``).
    :type body: Any
    :param message: Short human-readable outcome.
    :type message: str
    :param cookies: Cookie operations to apply, in order.
    :type cookies: tuple[CookieOp, ...]
    """

    status: int
    body: Any
    message: str = ""
    cookies: tuple[CookieOp, ...] = ()


def session_cookies(access_token: str, refresh_token: str) -> tuple[CookieOp, ...]:
    """Return the two set-cookie operations for a freshly issued token pair."""
    return (CookieOp(ACCESS_COOKIE, access_token), CookieOp(REFRESH_COOKIE, refresh_token))


def cleared_session_cookies() -> tuple[CookieOp, ...]:
    """Return the two clear-cookie operations used on logout."""
    return (CookieOp(ACCESS_COOKIE, None), CookieOp(REFRESH_COOKIE, None))
