"""Pytest fixtures wiring the app, an in-memory document store and port doubles.

The app is built once per session with :class:`TestingConfig`, which backs
MongoEngine with ``mongomock``. Documents are deleted after each test; the
collections (and their unique indexes) are kept.
"""

from __future__ import annotations

import pytest

from mediahub.core.config import TestingConfig
from mediahub.core.extensions import set_media_uploader
from mediahub.factory import create_app
from mediahub.models import Subscription, User, Video
from mediahub.repositories.user import UserRepository
from mediahub.services._shared.ports import InMemoryUploader, PlainPasswordHasher, StubTokenProvider
from mediahub.services.tokens.dto import TokenConfig
from mediahub.services.tokens.service import TokenService


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application bound to a ``mongomock`` database.
    """
    app = create_app(TestingConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(autouse=True)
def clean_store(app):
    """Empty every collection after each test."""
    yield
    for model in (Subscription, Video, User):
        model.objects.delete()


@pytest.fixture()
def client(app):
    """Return a test client that never replays cookies on its own."""
    return app.test_client(use_cookies=False)


@pytest.fixture()
def uploader(app):
    """Install an :class:`InMemoryUploader` on the app and return it."""
    double = InMemoryUploader()
    set_media_uploader(app, double)
    return double


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Service-level doubles ---------------------------------------------------


@pytest.fixture()
def users() -> UserRepository:
    return UserRepository()


@pytest.fixture()
def hasher() -> PlainPasswordHasher:
    return PlainPasswordHasher()


@pytest.fixture()
def token_cfg() -> TokenConfig:
    return TokenConfig(
        access_secret=TestingConfig.ACCESS_TOKEN_SECRET,
        access_expires=TestingConfig.ACCESS_TOKEN_EXPIRES,
        refresh_secret=TestingConfig.REFRESH_TOKEN_SECRET,
        refresh_expires=TestingConfig.REFRESH_TOKEN_EXPIRES,
    )


@pytest.fixture()
def tokens(users, token_cfg) -> TokenService:
    """Token service signing with :class:`StubTokenProvider`."""
    return TokenService(token_provider=StubTokenProvider(), token_cfg=token_cfg, users=users)
