"""User account endpoints: session lifecycle, profile and channel queries."""

from __future__ import annotations

from flask import Blueprint, request

from mediahub.api.deps import (
    apply_directive,
    channel_service,
    discard_uploads,
    profile_service,
    require_auth,
    save_upload,
    session_service,
    timing,
)
from mediahub.schemas import (
    ChangePasswordSchema,
    ChannelProfileSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
    UpdateAccountSchema,
    UserSchema,
    WatchHistoryEntrySchema,
)
from mediahub.services._shared.dto import REFRESH_COOKIE, Actor
from mediahub.services.profile.dto import UpdateDetailsIn
from mediahub.services.sessions.dto import ChangePasswordIn, LoginIn, RegisterIn, RenewIn

bp = Blueprint("users", __name__, url_prefix="/users")

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshTokenSchema()
change_password_schema = ChangePasswordSchema()
update_account_schema = UpdateAccountSchema()
user_schema = UserSchema()
login_response_schema = LoginResponseSchema()
token_pair_schema = TokenPairSchema()
channel_schema = ChannelProfileSchema()
history_schema = WatchHistoryEntrySchema(many=True)


# ------------------------------ Sessions ------------------------------ #


@bp.post("/register")
@timing
def register():
    """Register a user from multipart form fields plus avatar/picture files."""

    data = register_schema.load(request.form.to_dict())
    avatar_path = save_upload("avatar")
    picture_path = save_upload("picture")
    try:
        directive = session_service(with_uploader=True).register(
            RegisterIn(
                username=data["username"],
                email=data["email"],
                password=data["password"],
                avatar_path=avatar_path,
                picture_path=picture_path,
            )
        )
    finally:
        discard_uploads([avatar_path, picture_path])
    return apply_directive(directive, user_schema)


@bp.post("/login")
@timing
def login():
    """Authenticate by username or email and set both session cookies."""

    data = login_schema.load(request.get_json(silent=True) or {})
    directive = session_service().login(
        LoginIn(password=data["password"], username=data["username"], email=data["email"])
    )
    return apply_directive(directive, login_response_schema)


@bp.post("/logout")
@require_auth
@timing
def logout(actor: Actor):
    """Revoke the stored refresh token and clear both session cookies."""

    return apply_directive(session_service().logout(actor))


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Exchange the refresh token (cookie first, then body) for a new pair."""

    data = refresh_schema.load(request.get_json(silent=True) or {})
    directive = session_service().renew(
        RenewIn(cookie_token=request.cookies.get(REFRESH_COOKIE), body_token=data["refresh_token"])
    )
    return apply_directive(directive, token_pair_schema)


@bp.post("/change-password")
@require_auth
@timing
def change_password(actor: Actor):
    """Replace the password of the authenticated user."""

    data = change_password_schema.load(request.get_json(silent=True) or {})
    directive = session_service().change_password(
        actor,
        ChangePasswordIn(old_password=data["old_password"], new_password=data["new_password"]),
    )
    return apply_directive(directive)


# ------------------------------- Profile ------------------------------- #


@bp.get("/current-user")
@require_auth
@timing
def current_user(actor: Actor):
    """Return the authenticated user's sanitized record."""

    return apply_directive(profile_service().current_user(actor), user_schema)


@bp.patch("/update-account")
@require_auth
@timing
def update_account(actor: Actor):
    """Update username and email (both required)."""

    data = update_account_schema.load(request.get_json(silent=True) or {})
    directive = profile_service().update_details(
        actor, UpdateDetailsIn(username=data["username"], email=data["email"])
    )
    return apply_directive(directive, user_schema)


@bp.patch("/avatar")
@require_auth
@timing
def update_avatar(actor: Actor):
    """Replace the avatar with the uploaded ``avatar`` file."""

    path = save_upload("avatar")
    try:
        directive = profile_service(with_uploader=True).update_avatar(actor, path)
    finally:
        discard_uploads([path])
    return apply_directive(directive, user_schema)


@bp.patch("/picture")
@require_auth
@timing
def update_picture(actor: Actor):
    """Replace the profile picture with the uploaded ``picture`` file."""

    path = save_upload("picture")
    try:
        directive = profile_service(with_uploader=True).update_picture(actor, path)
    finally:
        discard_uploads([path])
    return apply_directive(directive, user_schema)


# ------------------------------- Channels ------------------------------- #


@bp.get("/c/<username>")
@require_auth
@timing
def channel_profile(actor: Actor, username: str):
    """Return the channel profile of ``username`` as seen by the actor."""

    return apply_directive(channel_service().get_channel_detail(username, actor), channel_schema)


@bp.get("/history")
@require_auth
@timing
def watch_history(actor: Actor):
    """Return the authenticated user's watch history in stored order."""

    return apply_directive(channel_service().get_watch_history(actor), history_schema)
