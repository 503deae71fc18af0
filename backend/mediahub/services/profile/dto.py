# mediahub/services/profile/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UpdateDetailsIn:
    """
    Input DTO for account detail updates. Both fields are required.

    :param username: New username (stored lowercase).
    :type username: str | None
    :param email: New email.
    :type email: str | None
    """

    username: str | None = None
    email: str | None = None
