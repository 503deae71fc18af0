# tests/unit/services/test_session_service.py
from __future__ import annotations

from http import HTTPStatus

import pytest
from bson import ObjectId

from mediahub.models import User
from mediahub.services._shared.dto import ACCESS_COOKIE, REFRESH_COOKIE, Actor, UserPublicOut
from mediahub.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    InvalidTokenError,
    NotFoundError,
    UnauthorizedError,
    UploadError,
    ValidationError,
)
from mediahub.services._shared.ports import InMemoryUploader
from mediahub.services.sessions.dto import ChangePasswordIn, LoginIn, LoginOut, RegisterIn, RenewIn
from mediahub.services.sessions.service import SessionService
from tests.factories.user import DEFAULT_PASSWORD, UserFactory


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def media() -> InMemoryUploader:
    return InMemoryUploader(fail_on={"broken.png"})


@pytest.fixture()
def service(tokens, hasher, media) -> SessionService:
    """SessionService wired to the stub signer, plain hasher and upload double."""
    return SessionService(tokens=tokens, hasher=hasher, uploader=media)


def _register_in(**overrides) -> RegisterIn:
    values = {
        "username": "NewUser",
        "email": "new@example.com",
        "password": "s3cret!",
        "avatar_path": "/tmp/avatar.png",
        "picture_path": "/tmp/picture.png",
    }
    values.update(overrides)
    return RegisterIn(**values)


def _login(service: SessionService, user) -> LoginOut:
    return service.login(LoginIn(username=user.username, password=DEFAULT_PASSWORD)).body


# ------------------------------- Register --------------------------------- #
def test_register_creates_sanitized_user(service, media):
    directive = service.register(_register_in())

    assert directive.status == HTTPStatus.CREATED
    body = directive.body
    assert isinstance(body, UserPublicOut)
    assert body.username == "newuser"
    assert body.avatar == "https://media.test/avatar.png"
    assert body.picture == "https://media.test/picture.png"
    assert not hasattr(body, "password")
    assert media.calls == ["/tmp/avatar.png", "/tmp/picture.png"]


def test_register_never_stores_plain_password(service, hasher):
    directive = service.register(_register_in())

    stored = User.objects.get(id=directive.body.id)
    assert stored.password != "s3cret!"
    assert hasher.verify("s3cret!", stored.password)
    assert stored.refresh_token is None


@pytest.mark.parametrize("field", ["username", "email", "password"])
@pytest.mark.parametrize("blank", ["", "   "])
def test_register_rejects_blank_fields(service, media, field, blank):
    with pytest.raises(ValidationError):
        service.register(_register_in(**{field: blank}))
    assert media.calls == []
    assert User.objects.count() == 0


@pytest.mark.parametrize(
    "overrides",
    [{"username": "TAKEN"}, {"email": "taken@example.com"}],
)
def test_register_duplicate_conflicts_without_writing(service, media, overrides):
    UserFactory(username="taken", email="taken@example.com")

    with pytest.raises(ConflictError):
        service.register(_register_in(**overrides))
    assert media.calls == []
    assert User.objects.count() == 1


def test_register_without_avatar_fails_before_upload(service, media):
    with pytest.raises(ValidationError):
        service.register(_register_in(avatar_path=None))
    assert media.calls == []


def test_register_avatar_upload_failure_is_upload_error(service):
    with pytest.raises(UploadError):
        service.register(_register_in(avatar_path="/tmp/broken.png"))
    assert User.objects.count() == 0


def test_register_picture_upload_failure_degrades_to_empty(service):
    directive = service.register(_register_in(picture_path="/tmp/broken.png"))
    assert directive.body.picture == ""


def test_register_without_picture(service, media):
    directive = service.register(_register_in(picture_path=None))
    assert directive.body.picture == ""
    assert media.calls == ["/tmp/avatar.png"]


# -------------------------------- Login ----------------------------------- #
def test_login_returns_tokens_user_and_cookies(service, tokens):
    user = UserFactory()

    directive = service.login(LoginIn(email=user.email, password=DEFAULT_PASSWORD))

    assert directive.status == HTTPStatus.OK
    out = directive.body
    assert isinstance(out, LoginOut)
    assert out.user.id == str(user.id)
    assert tokens.verify_access_token(out.access_token)["sub"] == str(user.id)
    assert tokens.verify_refresh_token(out.refresh_token)["sub"] == str(user.id)

    cookies = {op.name: op for op in directive.cookies}
    assert cookies[ACCESS_COOKIE].value == out.access_token
    assert cookies[REFRESH_COOKIE].value == out.refresh_token
    assert all(op.http_only and op.secure and op.same_site == "Strict" for op in directive.cookies)


def test_login_by_username_case_insensitive(service):
    user = UserFactory(username="mixed")
    directive = service.login(LoginIn(username="MIXED", password=DEFAULT_PASSWORD))
    assert directive.body.user.id == str(user.id)


def test_login_requires_username_or_email(service):
    with pytest.raises(ValidationError):
        service.login(LoginIn(password=DEFAULT_PASSWORD))
    with pytest.raises(ValidationError):
        service.login(LoginIn(username="  ", email="", password=DEFAULT_PASSWORD))


def test_login_unknown_user_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.login(LoginIn(username="ghost", password="x"))


def test_login_wrong_password_is_authentication_error(service):
    user = UserFactory()
    with pytest.raises(AuthenticationError):
        service.login(LoginIn(username=user.username, password="wrong"))
    assert User.objects.get(id=user.id).refresh_token is None


# -------------------------------- Renew ----------------------------------- #
def test_renew_rotates_the_pair(service):
    user = UserFactory()
    first = _login(service, user)

    directive = service.renew(RenewIn(body_token=first.refresh_token))

    body = directive.body
    assert body["refresh_token"] != first.refresh_token
    assert User.objects.get(id=user.id).refresh_token == body["refresh_token"]
    assert {op.name for op in directive.cookies} == {ACCESS_COOKIE, REFRESH_COOKIE}


def test_renew_cookie_takes_precedence_over_body(service):
    user = UserFactory()
    current = _login(service, user)

    directive = service.renew(RenewIn(cookie_token=current.refresh_token, body_token="garbage"))
    assert directive.status == HTTPStatus.OK


def test_renew_without_token_is_unauthorized(service):
    with pytest.raises(UnauthorizedError):
        service.renew(RenewIn())


def test_renew_with_tampered_token_issues_nothing(service):
    user = UserFactory()
    current = _login(service, user)

    with pytest.raises(InvalidTokenError):
        service.renew(RenewIn(body_token=current.refresh_token + "x"))
    assert User.objects.get(id=user.id).refresh_token == current.refresh_token


def test_renew_with_access_token_is_invalid(service):
    current = _login(service, UserFactory())
    with pytest.raises(InvalidTokenError):
        service.renew(RenewIn(body_token=current.access_token))


def test_renew_with_rotated_out_token_is_invalid(service):
    """After rotation the previous refresh token fails the exact-match check."""
    user = UserFactory()
    first = _login(service, user)
    service.renew(RenewIn(body_token=first.refresh_token))

    with pytest.raises(InvalidTokenError) as exc:
        service.renew(RenewIn(body_token=first.refresh_token))
    assert "expired" in exc.value.message


def test_renew_for_deleted_user_is_invalid(service):
    user = UserFactory()
    current = _login(service, user)
    user.delete()

    with pytest.raises(InvalidTokenError):
        service.renew(RenewIn(body_token=current.refresh_token))


# -------------------------------- Logout ---------------------------------- #
def test_logout_clears_token_and_cookies(service):
    user = UserFactory()
    _login(service, user)

    directive = service.logout(Actor(id=str(user.id)))

    assert User.objects.get(id=user.id).refresh_token is None
    assert {op.name for op in directive.cookies} == {ACCESS_COOKIE, REFRESH_COOKIE}
    assert all(op.clears for op in directive.cookies)


def test_logout_then_renew_fails(service):
    user = UserFactory()
    current = _login(service, user)
    service.logout(Actor(id=str(user.id)))

    with pytest.raises(InvalidTokenError):
        service.renew(RenewIn(body_token=current.refresh_token))


# ---------------------------- Change password ----------------------------- #
def test_change_password_replaces_digest(service, hasher):
    user = UserFactory()
    actor = Actor(id=str(user.id))

    service.change_password(actor, ChangePasswordIn(old_password=DEFAULT_PASSWORD, new_password="n3w"))

    stored = User.objects.get(id=user.id)
    assert hasher.verify("n3w", stored.password)
    service.login(LoginIn(username=user.username, password="n3w"))


def test_change_password_with_wrong_old_password(service):
    user = UserFactory()
    with pytest.raises(ValidationError) as exc:
        service.change_password(
            Actor(id=str(user.id)), ChangePasswordIn(old_password="nope", new_password="n3w")
        )
    assert exc.value.message == "Invalid old password"


def test_change_password_rejects_blank_new_password(service):
    user = UserFactory()
    with pytest.raises(ValidationError):
        service.change_password(
            Actor(id=str(user.id)), ChangePasswordIn(old_password=DEFAULT_PASSWORD, new_password=" ")
        )


def test_change_password_unknown_actor(service):
    with pytest.raises(NotFoundError):
        service.change_password(
            Actor(id=str(ObjectId())), ChangePasswordIn(old_password="a", new_password="b")
        )
