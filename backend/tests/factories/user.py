"""Factory Boy definition for :class:`mediahub.models.user.User`."""

from __future__ import annotations

import factory

from mediahub.models.user import User
from mediahub.services._shared.ports import PlainPasswordHasher
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """
    Build persisted :class:`User` documents.

    Notes
    -----
    - ``password`` holds a :class:`PlainPasswordHasher` digest of
      :data:`DEFAULT_PASSWORD` unless overridden; unit tests use the same
      hasher. Pass a real digest for tests going through the app.
    """

    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    password = factory.LazyFunction(lambda: PlainPasswordHasher().hash(DEFAULT_PASSWORD))
    avatar = factory.Sequence(lambda n: f"https://media.test/avatar-{n}.png")
    picture = ""
    watch_history = factory.LazyFunction(list)
