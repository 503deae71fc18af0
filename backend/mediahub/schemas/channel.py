"""Channel and watch history schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class ChannelProfileSchema(Schema):
    """A user seen as a channel, with subscription counters."""

    id = fields.String(required=True)
    username = fields.String(required=True)
    email = fields.String(required=True)
    subscribers_count = fields.Integer()
    subscribed_to_count = fields.Integer()
    is_subscribed = fields.Boolean()
    avatar = fields.String()
    picture = fields.String()


class OwnerSummarySchema(Schema):
    id = fields.String(required=True)
    username = fields.String(allow_none=True)
    avatar = fields.String(allow_none=True)


class WatchHistoryEntrySchema(Schema):
    """One watched video with a minimal owner summary."""

    id = fields.String(required=True)
    title = fields.String(allow_none=True)
    description = fields.String(allow_none=True)
    thumbnail = fields.String(allow_none=True)
    video_file = fields.String(allow_none=True)
    duration = fields.Float(allow_none=True)
    views = fields.Integer()
    is_published = fields.Boolean()
    owner = fields.Nested(OwnerSummarySchema, allow_none=True)
    created_at = fields.DateTime(allow_none=True)
