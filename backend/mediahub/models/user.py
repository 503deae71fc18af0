"""User document: the identity record and, viewed from outside, a channel."""

from __future__ import annotations

from mongoengine import ListField, ObjectIdField, StringField

from .base import ReprMixin, TimestampedDocument

# Fields that must never leave the service layer.
PRIVATE_FIELDS = ("password", "refresh_token")


class User(ReprMixin, TimestampedDocument):
    """
    Account identity stored in the ``users`` collection.

    Fields
    ------
    username : str
        Public handle, unique, stored lowercase.
    email : str
        Login email, unique, stored lowercase and trimmed.
    password : str
        Password digest produced by the hashing port. Never the plain text.
    avatar : str
        URL of the primary image. Required.
    picture : str
        URL of the optional profile picture, ``""`` when absent.
    refresh_token : str | None
        The single refresh token currently honoured for this user. Unset while
        logged out; overwritten by every login and renewal.
    watch_history : list[ObjectId]
        Ordered ``Video`` ids. The order is kept verbatim by the queries.
    """

    meta = {
        "collection": "users",
        "indexes": ["created_at"],
    }

    username = StringField(required=True, unique=True, max_length=50)
    email = StringField(required=True, unique=True, max_length=254)
    password = StringField(required=True)
    avatar = StringField(required=True)
    picture = StringField(default="")
    refresh_token = StringField()
    watch_history = ListField(ObjectIdField())

    def clean(self) -> None:
        """Normalize the natural keys before validation."""
        if isinstance(self.username, str):
            self.username = self.username.strip().lower()
        if isinstance(self.email, str):
            self.email = self.email.strip().lower()
