# mediahub/services/tokens/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access token.
    :type access_token: str
    :param refresh_token: Encoded refresh token.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """
    Signing configuration. The two secrets must differ; the app factory refuses
    to start otherwise.

    :param access_secret: Secret for access tokens.
    :type access_secret: str
    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_secret: Secret for refresh tokens.
    :type refresh_secret: str
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    """

    access_secret: str
    access_expires: timedelta
    refresh_secret: str
    refresh_expires: timedelta
