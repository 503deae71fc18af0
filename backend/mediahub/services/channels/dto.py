# mediahub/services/channels/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ChannelProfileOut:
    """
    Public view of a user seen as a channel.

    :param id: Channel user id.
    :param username: Channel username.
    :param email: Channel email.
    :param subscribers_count: Number of users subscribed to the channel.
    :param subscribed_to_count: Number of channels the user subscribes to.
    :param is_subscribed: Whether the requesting actor is a subscriber.
    :param avatar: Avatar URL.
    :param picture: Profile picture URL.
    """

    id: str
    username: str
    email: str
    subscribers_count: int = 0
    subscribed_to_count: int = 0
    is_subscribed: bool = False
    avatar: str = ""
    picture: str = ""


@dataclass(frozen=True, slots=True)
class OwnerSummaryOut:
    """Minimal public subset of a video owner."""

    id: str
    username: str | None = None
    avatar: str | None = None


@dataclass(frozen=True, slots=True)
class WatchHistoryEntryOut:
    """
    One watched video with its owner summary.

    ``owner`` is ``None`` when the owner account no longer exists.
    """

    id: str
    title: str | None = None
    description: str | None = None
    thumbnail: str | None = None
    video_file: str | None = None
    duration: float | None = None
    views: int = 0
    is_published: bool = True
    owner: OwnerSummaryOut | None = None
    created_at: datetime | None = None
