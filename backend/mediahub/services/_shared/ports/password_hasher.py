from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for one-way password digests."""

    def hash(self, raw: str) -> str: ...

    def verify(self, raw: str, digest: str) -> bool: ...


class PlainPasswordHasher(PasswordHasher):
    """Reversible, prefix-only "hasher" for unit tests. Never use in production."""

    prefix = "plain$"

    def hash(self, raw: str) -> str:
        return f"{self.prefix}{raw}"

    def verify(self, raw: str, digest: str) -> bool:
        return bool(digest) and digest == self.hash(raw)
