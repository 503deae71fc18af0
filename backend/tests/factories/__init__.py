"""Factory Boy helpers persisting MongoEngine documents."""

from __future__ import annotations

from factory.mongoengine import MongoEngineFactory


class BaseFactory(MongoEngineFactory):
    """Base class for document factories; ``create`` calls ``save()``."""

    class Meta:
        abstract = True
