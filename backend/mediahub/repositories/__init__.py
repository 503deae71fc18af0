"""Repository package exposing persistence-layer access for the documents."""

from __future__ import annotations

from mediahub.repositories.base import BaseRepository, to_object_id
from mediahub.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "to_object_id",
]
