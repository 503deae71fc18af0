"""Reusable MongoEngine building blocks shared by domain documents."""

from __future__ import annotations

from datetime import UTC, datetime

from mongoengine import DateTimeField, Document


def utcnow() -> datetime:
    """Return the current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class TimestampedDocument(Document):
    """Provide ``created_at`` and ``updated_at`` fields.

    Attributes
    ----------
    created_at:
        Set once, on the first save.
    updated_at:
        Refreshed on every :meth:`save`. Atomic updates issued through the
        repositories set it explicitly.
    """

    meta = {"abstract": True}

    created_at = DateTimeField(default=utcnow)
    updated_at = DateTimeField(default=utcnow)

    def save(self, *args, **kwargs):
        self.updated_at = utcnow()
        return super().save(*args, **kwargs)


class ReprMixin:
    """Provide a concise ``__repr__`` including the class name and id."""

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        key = getattr(self, "id", None)
        return f"<{cls} id={key}>"
