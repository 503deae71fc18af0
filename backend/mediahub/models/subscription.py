"""Subscription edge between a subscriber and a channel (both users)."""

from __future__ import annotations

from mongoengine import ReferenceField

from .base import ReprMixin, TimestampedDocument


class Subscription(ReprMixin, TimestampedDocument):
    """
    ``subscriber`` follows ``channel``.

    Only read as a join target by the channel-profile aggregation.
    """

    meta = {
        "collection": "subscriptions",
        "indexes": [
            "channel",
            "subscriber",
            {"fields": ["subscriber", "channel"], "unique": True},
        ],
    }

    subscriber = ReferenceField("User", required=True)
    channel = ReferenceField("User", required=True)
