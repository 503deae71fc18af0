from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, TypeAlias


@dataclass(frozen=True, slots=True)
class UploadedMedia:
    """
    Successful upload.

    :ivar url: Public URL of the stored object.
    """

    url: str


@dataclass(frozen=True, slots=True)
class UploadFailure:
    """
    Failed upload. Call sites must handle it explicitly.

    :ivar reason: Short description, safe to log.
    """

    reason: str


UploadResult: TypeAlias = UploadedMedia | UploadFailure


class MediaUploader(Protocol):
    """Port pushing a local temporary file to remote storage."""

    def upload(self, local_path: str | None) -> UploadResult:
        """
        Upload ``local_path`` and return the outcome.

        Implementations remove the local file after the attempt, whatever the
        outcome, and never raise for storage failures.
        """
        ...


class InMemoryUploader(MediaUploader):
    """Upload double recording every path it was handed.

    Paths whose file name ends with one of ``fail_on`` are rejected.
    """

    def __init__(self, *, base_url: str = "https://media.test", fail_on: set[str] | None = None):
        self.base_url = base_url.rstrip("/")
        self.fail_on = set(fail_on or ())
        self.calls: list[str | None] = []

    def upload(self, local_path: str | None) -> UploadResult:
        self.calls.append(local_path)
        if not local_path:
            return UploadFailure("no local file")
        name = Path(local_path).name
        if local_path in self.fail_on or any(name.endswith(marker) for marker in self.fail_on):
            return UploadFailure(f"storage rejected {name}")
        return UploadedMedia(url=f"{self.base_url}/{name}")
