"""HTTP helper utilities for tests."""

from __future__ import annotations

from collections.abc import Iterable


def json_headers(auth_token: str | None = None) -> dict[str, str]:
    """Return standard JSON headers, with a Bearer token when given."""

    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"
    return headers


def set_cookies(response) -> dict[str, str]:
    """Map cookie name → raw ``Set-Cookie`` header for ``response``."""

    cookies: dict[str, str] = {}
    for header in response.headers.getlist("Set-Cookie"):
        name = header.split("=", 1)[0]
        cookies[name] = header
    return cookies


def cookie_value(header: str) -> str:
    """Return the value part of a raw ``Set-Cookie`` header."""

    return header.split(";", 1)[0].split("=", 1)[1]


def has_flags(header: str, flags: Iterable[str]) -> bool:
    """Return ``True`` if every attribute in ``flags`` appears in ``header``."""

    attrs = {part.strip().lower() for part in header.split(";")[1:]}
    return all(flag.lower() in attrs for flag in flags)
