"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class UpdateAccountSchema(Schema):
    """Payload for updating username and email together."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(load_default=None, validate=validate.Length(max=50))
    email = fields.String(load_default=None, validate=validate.Length(max=254))


class UserSchema(Schema):
    """Sanitized representation of a user. Never carries secrets."""

    id = fields.String(required=True)
    username = fields.String(required=True)
    email = fields.String(required=True)
    avatar = fields.String(required=True)
    picture = fields.String()
    watch_history = fields.List(fields.String())
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)
