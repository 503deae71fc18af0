# mediahub/services/channels/service.py
from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from mediahub.repositories.base import to_object_id
from mediahub.services._shared.base import BaseService
from mediahub.services._shared.dto import Actor, ResponseDirective
from mediahub.services._shared.errors import NotFoundError
from mediahub.services.channels.dto import (
    ChannelProfileOut,
    OwnerSummaryOut,
    WatchHistoryEntryOut,
)
from mediahub.services.channels.pipelines import (
    channel_profile_pipeline,
    watch_history_pipeline,
)

log = logging.getLogger(__name__)


class ChannelService(BaseService):
    """
    Read-only social-graph queries: channel profile and watch history.

    Each query runs one aggregation pipeline through the user repository and
    maps the raw rows to DTOs.
    """

    def get_channel_detail(self, username: str | None, actor: Actor | None = None) -> ResponseDirective:
        """
        Return the channel profile of ``username``.

        :param username: Channel username (case-insensitive).
        :param actor: Requesting user, drives ``is_subscribed``.
        :raises NotFoundError: Blank username or no such channel.
        """
        if not username or not username.strip():
            raise NotFoundError("Channel", "username is missing")

        actor_oid = to_object_id(actor.id) if actor else None
        rows = self.users.aggregate(channel_profile_pipeline(username, actor_oid))
        if not rows:
            raise NotFoundError("Channel", username.strip().lower())

        return ResponseDirective(
            status=HTTPStatus.OK,
            body=self._to_channel(rows[0]),
            message="User channel fetched successfully",
        )

    def get_watch_history(self, actor: Actor) -> ResponseDirective:
        """
        Return the actor's watched videos in stored order.

        An unknown actor or an empty history yields an empty list.
        """
        user_oid = to_object_id(actor.id)
        rows = self.users.aggregate(watch_history_pipeline(user_oid)) if user_oid else []
        entries = (rows[0].get("watch_history") or []) if rows else []

        log.debug("channels.watch_history", extra={"user_id": actor.id})
        return ResponseDirective(
            status=HTTPStatus.OK,
            body=[self._to_history_entry(raw) for raw in entries],
            message="Watch history fetched successfully",
        )

    # -------------------------- Mapping helpers -----------------------------

    @staticmethod
    def _to_channel(row: dict[str, Any]) -> ChannelProfileOut:
        return ChannelProfileOut(
            id=str(row["_id"]),
            username=row.get("username", ""),
            email=row.get("email", ""),
            subscribers_count=int(row.get("subscribers_count", 0)),
            subscribed_to_count=int(row.get("subscribed_to_count", 0)),
            is_subscribed=bool(row.get("is_subscribed", False)),
            avatar=row.get("avatar") or "",
            picture=row.get("picture") or "",
        )

    @staticmethod
    def _to_history_entry(raw: dict[str, Any]) -> WatchHistoryEntryOut:
        owner_raw = raw.get("owner")
        owner = None
        if isinstance(owner_raw, dict) and owner_raw.get("_id") is not None:
            owner = OwnerSummaryOut(
                id=str(owner_raw["_id"]),
                username=owner_raw.get("username"),
                avatar=owner_raw.get("avatar"),
            )
        return WatchHistoryEntryOut(
            id=str(raw["_id"]),
            title=raw.get("title"),
            description=raw.get("description"),
            thumbnail=raw.get("thumbnail"),
            video_file=raw.get("video_file"),
            duration=raw.get("duration"),
            views=int(raw.get("views") or 0),
            is_published=bool(raw.get("is_published", True)),
            owner=owner,
            created_at=raw.get("created_at"),
        )
