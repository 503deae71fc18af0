# tests/unit/test_cli_storage.py
from __future__ import annotations

from unittest.mock import MagicMock

from mediahub.infra.storage.minio_uploader import MinioUploader


def test_ensure_bucket_creates_missing_bucket(app, monkeypatch):
    client = MagicMock()
    client.bucket_exists.return_value = False
    uploader = MinioUploader(client, bucket="avatars", public_base_url="https://cdn.test")
    monkeypatch.setitem(app.extensions, "media_uploader", uploader)

    result = app.test_cli_runner().invoke(args=["storage", "ensure-bucket"])

    assert result.exit_code == 0, result.output
    client.make_bucket.assert_called_once_with("avatars")
    assert "avatars" in result.output


def test_ensure_bucket_existing_bucket_is_left_alone(app, monkeypatch):
    client = MagicMock()
    client.bucket_exists.return_value = True
    uploader = MinioUploader(client, bucket="avatars", public_base_url="https://cdn.test")
    monkeypatch.setitem(app.extensions, "media_uploader", uploader)

    result = app.test_cli_runner().invoke(args=["storage", "ensure-bucket"])

    assert result.exit_code == 0
    client.make_bucket.assert_not_called()


def test_ensure_bucket_requires_minio_uploader(app, uploader):
    result = app.test_cli_runner().invoke(args=["storage", "ensure-bucket"])
    assert result.exit_code != 0
    assert "MinIO" in result.output
