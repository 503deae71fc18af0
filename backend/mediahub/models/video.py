"""Video document, joined into watch histories."""

from __future__ import annotations

from mongoengine import BooleanField, FloatField, IntField, ReferenceField, StringField

from .base import ReprMixin, TimestampedDocument


class Video(ReprMixin, TimestampedDocument):
    """Published media item owned by a user."""

    meta = {
        "collection": "videos",
        "indexes": ["owner"],
    }

    video_file = StringField(required=True)
    thumbnail = StringField(required=True)
    title = StringField(required=True, max_length=200)
    description = StringField(default="")
    duration = FloatField(default=0.0)
    views = IntField(default=0, min_value=0)
    is_published = BooleanField(default=True)
    owner = ReferenceField("User")
