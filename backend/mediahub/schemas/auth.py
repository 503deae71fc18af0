"""Session-related Marshmallow schemas.

Input schemas only bound lengths; presence and blank checks belong to the
session use-cases so that missing fields are reported as ``400``.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .user import UserSchema


class RegisterSchema(Schema):
    """Form fields of a registration request (files travel separately)."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(load_default="", validate=validate.Length(max=50))
    email = fields.String(load_default="", validate=validate.Length(max=254))
    password = fields.String(load_default="", validate=validate.Length(max=128))


class LoginSchema(Schema):
    """Input payload for authenticating by username or email."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(load_default=None, validate=validate.Length(max=50))
    email = fields.String(load_default=None, validate=validate.Length(max=254))
    password = fields.String(load_default="", validate=validate.Length(max=128))


class RefreshTokenSchema(Schema):
    """Optional body of a renewal request (the cookie wins when both are sent)."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(load_default=None)


class ChangePasswordSchema(Schema):
    """Input payload for a password change."""

    class Meta:
        unknown = EXCLUDE

    old_password = fields.String(load_default="", validate=validate.Length(max=128))
    new_password = fields.String(load_default="", validate=validate.Length(max=128))


class TokenPairSchema(Schema):
    """Response payload carrying both session tokens."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)


class LoginResponseSchema(TokenPairSchema):
    """Response payload of a successful login."""

    user = fields.Nested(UserSchema, required=True)
