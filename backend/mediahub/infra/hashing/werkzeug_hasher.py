# mediahub/infra/hashing/werkzeug_hasher.py
from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from mediahub.services._shared.ports import PasswordHasher


@dataclass(slots=True)
class WerkzeugPasswordHasher(PasswordHasher):
    """Password hashing backed by :mod:`werkzeug.security`."""

    method: str = "scrypt"

    def hash(self, raw: str) -> str:
        return generate_password_hash(raw, method=self.method)

    def verify(self, raw: str, digest: str) -> bool:
        if not digest:
            return False
        return check_password_hash(digest, raw)
