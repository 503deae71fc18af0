"""Convenience exports for request and response schemas."""

from __future__ import annotations

from .auth import (
    ChangePasswordSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
)
from .channel import ChannelProfileSchema, OwnerSummarySchema, WatchHistoryEntrySchema
from .user import UpdateAccountSchema, UserSchema

__all__ = [
    "ChangePasswordSchema",
    "LoginResponseSchema",
    "LoginSchema",
    "RefreshTokenSchema",
    "RegisterSchema",
    "TokenPairSchema",
    "ChannelProfileSchema",
    "OwnerSummarySchema",
    "WatchHistoryEntrySchema",
    "UpdateAccountSchema",
    "UserSchema",
]
