# tests/unit/repositories/test_repository_user.py
from __future__ import annotations

import pytest
from bson import ObjectId

from mediahub.models import User
from mediahub.repositories import to_object_id
from tests.factories.user import UserFactory


def test_to_object_id_coercion():
    oid = ObjectId()
    assert to_object_id(oid) is oid
    assert to_object_id(str(oid)) == oid
    assert to_object_id("not-an-id") is None
    assert to_object_id(None) is None


def test_get_returns_none_for_malformed_id(users):
    assert users.get("123") is None
    assert users.get(str(ObjectId())) is None


def test_get_by_username_or_email_matches_either(users):
    user = UserFactory(username="bob", email="bob@example.com")

    assert users.get_by_username_or_email("BOB", None).id == user.id
    assert users.get_by_username_or_email(None, "Bob@Example.com").id == user.id
    assert users.get_by_username_or_email("nobody", "bob@example.com").id == user.id
    assert users.get_by_username_or_email("nobody", "nobody@example.com") is None
    assert users.get_by_username_or_email(None, None) is None


def test_exists_by_username_or_email(users):
    UserFactory(username="carol", email="carol@example.com")
    assert users.exists_by_username_or_email("carol", "other@example.com")
    assert users.exists_by_username_or_email("other", "CAROL@example.com")
    assert not users.exists_by_username_or_email("other", "other@example.com")
    assert not users.exists_by_username_or_email("", "")


def test_get_public_excludes_private_fields(users):
    user = UserFactory(refresh_token="rt")
    public = users.get_public(user.id)
    assert public.username == user.username
    assert public.password is None
    assert public.refresh_token is None


def test_store_and_clear_refresh_token(users):
    user = UserFactory()

    assert users.store_refresh_token(user.id, "token-1") is True
    assert User.objects.get(id=user.id).refresh_token == "token-1"

    assert users.clear_refresh_token(user.id) is True
    assert User.objects.get(id=user.id).refresh_token is None

    assert users.store_refresh_token(ObjectId(), "token-2") is False


def test_set_fields_rejects_non_whitelisted_fields(users):
    user = UserFactory()
    with pytest.raises(ValueError):
        users.set_fields(user.id, values={"watch_history": []})


def test_set_fields_skips_full_document_validation(users):
    """An atomic update succeeds even if an unrelated required field is missing."""
    user = UserFactory()
    User._get_collection().update_one({"_id": user.id}, {"$unset": {"avatar": ""}})

    assert users.update_password(user.id, "plain$new") is True
    stored = User.objects.get(id=user.id)
    assert stored.password == "plain$new"
    assert stored.avatar is None


def test_set_public_fields_returns_sanitized_record(users):
    user = UserFactory(refresh_token="rt")
    updated = users.set_public_fields(user.id, picture="https://media.test/p.png")
    assert updated.picture == "https://media.test/p.png"
    assert updated.password is None
    assert updated.refresh_token is None


def test_add_inserts_new_document(users):
    created = users.add(
        username="Dave", email="dave@example.com", password="plain$x", avatar="https://a"
    )
    assert created.id is not None
    assert User.objects.get(id=created.id).username == "dave"
