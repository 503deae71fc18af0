"""Service layer public API.

Callers import the use-case services from :mod:`mediahub.services` without
knowing the internal package structure.

Re-exports
----------
- :class:`BaseService` (``mediahub.services._shared.base``)
- :class:`TokenService` (``mediahub.services.tokens``)
- :class:`SessionService` (``mediahub.services.sessions``)
- :class:`ProfileService` (``mediahub.services.profile``)
- :class:`ChannelService` (``mediahub.services.channels``)
"""

from __future__ import annotations

from mediahub.services._shared.base import BaseService
from mediahub.services.channels.service import ChannelService
from mediahub.services.profile.service import ProfileService
from mediahub.services.sessions.service import SessionService
from mediahub.services.tokens.service import TokenService

__all__ = [
    "BaseService",
    "ChannelService",
    "ProfileService",
    "SessionService",
    "TokenService",
]
