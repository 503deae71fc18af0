"""MinIO-backed media uploader."""

from __future__ import annotations

import logging
import mimetypes
import os
import uuid
from collections.abc import Mapping
from contextlib import suppress
from pathlib import Path
from typing import Any

from minio import Minio
from minio.error import S3Error

from mediahub.services._shared.ports import MediaUploader, UploadedMedia, UploadFailure, UploadResult

log = logging.getLogger(__name__)


class MinioUploader(MediaUploader):
    """Push temporary upload files to a MinIO (S3 compatible) bucket.

    Objects get a random key that keeps the original extension. The local
    file is removed after every attempt, successful or not.
    """

    def __init__(self, client: Minio, *, bucket: str, public_base_url: str) -> None:
        self.client = client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> MinioUploader:
        """Build the uploader from ``MEDIA_STORAGE_*`` settings."""
        endpoint = config["MEDIA_STORAGE_ENDPOINT"]
        secure = bool(config.get("MEDIA_STORAGE_SECURE", False))
        client = Minio(
            endpoint,
            access_key=config.get("MEDIA_STORAGE_ACCESS_KEY"),
            secret_key=config.get("MEDIA_STORAGE_SECRET_KEY"),
            secure=secure,
        )
        bucket = config.get("MEDIA_STORAGE_BUCKET", "mediahub")
        base = config.get("MEDIA_PUBLIC_BASE_URL") or (
            f"{'https' if secure else 'http'}://{endpoint}/{bucket}"
        )
        return cls(client, bucket=bucket, public_base_url=base)

    def ensure_bucket(self) -> None:
        """Create the bucket if it does not exist yet."""
        if self.client.bucket_exists(self.bucket):  # pragma: no cover - network call
            return
        try:
            self.client.make_bucket(self.bucket)  # pragma: no cover - network call
        except S3Error as exc:  # pragma: no cover - handle race conditions
            if exc.code not in {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}:
                raise

    def upload(self, local_path: str | None) -> UploadResult:
        if not local_path:
            return UploadFailure("no local file")

        path = Path(local_path)
        object_key = f"{uuid.uuid4().hex}{path.suffix.lower()}"
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        try:
            self.client.fput_object(
                self.bucket, object_key, str(path), content_type=content_type
            )
        except (S3Error, OSError) as exc:
            log.warning("storage.upload_failed", extra={"reason": str(exc)})
            return UploadFailure(f"upload of {path.name} failed")
        finally:
            with suppress(FileNotFoundError):
                os.remove(path)

        return UploadedMedia(url=f"{self.public_base_url}/{object_key}")
