# tests/unit/services/test_profile_service.py
from __future__ import annotations

import pytest
from bson import ObjectId

from mediahub.models import User
from mediahub.services._shared.dto import Actor, UserPublicOut
from mediahub.services._shared.errors import (
    ConflictError,
    NotFoundError,
    UploadError,
    ValidationError,
)
from mediahub.services._shared.ports import InMemoryUploader
from mediahub.services.profile.dto import UpdateDetailsIn
from mediahub.services.profile.service import ProfileService
from tests.factories.user import UserFactory


@pytest.fixture()
def media() -> InMemoryUploader:
    return InMemoryUploader(fail_on={"broken.png"})


@pytest.fixture()
def service(users, media) -> ProfileService:
    return ProfileService(users=users, uploader=media)


@pytest.fixture()
def user():
    return UserFactory(refresh_token="rt", picture="https://media.test/old.png")


@pytest.fixture()
def actor(user) -> Actor:
    return Actor(id=str(user.id), username=user.username, email=user.email)


# ------------------------------ Current user ------------------------------ #
def test_current_user_is_sanitized(service, actor, user):
    body = service.current_user(actor).body
    assert isinstance(body, UserPublicOut)
    assert body.id == str(user.id)
    assert body.email == user.email


def test_current_user_missing(service):
    with pytest.raises(NotFoundError):
        service.current_user(Actor(id=str(ObjectId())))


# ------------------------------- Details ---------------------------------- #
def test_update_details_sets_both_fields(service, actor, user):
    body = service.update_details(
        actor, UpdateDetailsIn(username="Renamed", email=" Renamed@Example.com ")
    ).body

    assert body.username == "renamed"
    assert body.email == "renamed@example.com"
    stored = User.objects.get(id=user.id)
    assert stored.username == "renamed"
    # untouched fields survive the atomic update
    assert stored.refresh_token == "rt"


@pytest.mark.parametrize(
    "dto",
    [
        UpdateDetailsIn(username="only"),
        UpdateDetailsIn(email="only@example.com"),
        UpdateDetailsIn(username=" ", email="x@example.com"),
    ],
)
def test_update_details_requires_both_fields(service, actor, dto):
    with pytest.raises(ValidationError):
        service.update_details(actor, dto)


def test_update_details_duplicate_is_conflict(service, actor):
    UserFactory(username="taken", email="taken@example.com")
    with pytest.raises(ConflictError):
        service.update_details(actor, UpdateDetailsIn(username="taken", email="mine@example.com"))


# -------------------------------- Images ---------------------------------- #
def test_update_avatar(service, actor, user, media):
    body = service.update_avatar(actor, "/tmp/new-avatar.png").body

    assert body.avatar == "https://media.test/new-avatar.png"
    assert media.calls == ["/tmp/new-avatar.png"]
    assert User.objects.get(id=user.id).avatar == body.avatar


def test_update_avatar_requires_file(service, actor, media):
    with pytest.raises(ValidationError):
        service.update_avatar(actor, None)
    assert media.calls == []


def test_update_avatar_upload_failure(service, actor, user):
    before = User.objects.get(id=user.id).avatar
    with pytest.raises(UploadError):
        service.update_avatar(actor, "/tmp/broken.png")
    assert User.objects.get(id=user.id).avatar == before


def test_update_picture(service, actor):
    body = service.update_picture(actor, "/tmp/pic.png").body
    assert body.picture == "https://media.test/pic.png"


def test_update_picture_requires_file(service, actor):
    with pytest.raises(ValidationError):
        service.update_picture(actor, "")


def test_update_picture_failure_degrades_to_empty(service, actor, user):
    body = service.update_picture(actor, "/tmp/broken.png").body
    assert body.picture == ""
    assert User.objects.get(id=user.id).picture == ""
