"""
SessionService
==============

Session lifecycle use-cases: register, login, logout, renew and change
password. Each returns a :class:`ResponseDirective` carrying the status, the
payload and the cookie operations the transport has to apply.

State per session is ``Anonymous -> Authenticated -> Anonymous`` (logout) or
``Authenticated -> Authenticated`` (renew, new pair).
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from mongoengine.errors import NotUniqueError

from mediahub.services._shared.base import BaseService
from mediahub.services._shared.dto import (
    Actor,
    ResponseDirective,
    cleared_session_cookies,
    session_cookies,
)
from mediahub.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    InternalError,
    InvalidTokenError,
    NotFoundError,
    UnauthorizedError,
    UploadError,
    ValidationError,
)
from mediahub.services._shared.ports.media_uploader import MediaUploader, UploadedMedia
from mediahub.services._shared.ports.password_hasher import PasswordHasher
from mediahub.services.sessions.dto import ChangePasswordIn, LoginIn, LoginOut, RegisterIn, RenewIn
from mediahub.services.tokens.service import TokenService

log = logging.getLogger(__name__)


class SessionService(BaseService):
    """
    Orchestrates the session use-cases on top of :class:`TokenService`.
    """

    def __init__(
        self,
        *,
        tokens: TokenService,
        hasher: PasswordHasher,
        uploader: MediaUploader | None = None,
    ) -> None:
        """
        :param tokens: Token lifecycle service (shares its user repository).
        :param hasher: Password hashing port.
        :param uploader: Media upload port, only needed by :meth:`register`.
        """
        super().__init__(users=tokens.users)
        self.tokens = tokens
        self.hasher = hasher
        self.uploader = uploader

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> ResponseDirective:
        """
        Create an account with an uploaded avatar and optional picture.

        :param dto: Registration input.
        :returns: ``201`` with the sanitized user.
        :raises ValidationError: Blank username/email/password or no avatar.
        :raises ConflictError: Username or email already taken.
        :raises UploadError: Avatar upload failed.
        :raises InternalError: Record missing right after creation.
        """
        self.ensure_present(username=dto.username, email=dto.email, password=dto.password)

        username = dto.username.strip().lower()
        email = dto.email.strip().lower()

        if self.users.exists_by_username_or_email(username, email):
            raise ConflictError("User", "User with email or username already exists")

        if not dto.avatar_path:
            raise ValidationError("Avatar file is required")

        if self.uploader is None:
            raise InternalError("Media uploader is not available")

        avatar = self.uploader.upload(dto.avatar_path)
        if not isinstance(avatar, UploadedMedia):
            log.warning("session.register.avatar_upload_failed", extra={"reason": avatar.reason})
            raise UploadError("Avatar file is required")

        picture_url = ""
        if dto.picture_path:
            picture = self.uploader.upload(dto.picture_path)
            if isinstance(picture, UploadedMedia):
                picture_url = picture.url
            else:
                log.warning(
                    "session.register.picture_upload_failed", extra={"reason": picture.reason}
                )

        try:
            user = self.users.add(
                username=username,
                email=email,
                password=self.hasher.hash(dto.password),
                avatar=avatar.url,
                picture=picture_url,
            )
        except NotUniqueError as exc:
            # Lost a race with a concurrent registration
            raise ConflictError("User", "User with email or username already exists") from exc

        created = self.users.get_public(user.id)
        if created is None:
            raise InternalError("Something went wrong while registering the user")

        log.info("session.register", extra={"user_id": str(created.id)})
        return ResponseDirective(
            status=HTTPStatus.CREATED,
            body=self._to_user_public(created),
            message="User registered successfully",
        )

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> ResponseDirective:
        """
        Authenticate credentials and open a session.

        :param dto: Login input.
        :returns: ``200`` with :class:`LoginOut` and two set-cookie operations.
        :raises ValidationError: Neither username nor email supplied.
        :raises NotFoundError: No matching user.
        :raises AuthenticationError: Wrong password.
        """
        if not (dto.username and dto.username.strip()) and not (dto.email and dto.email.strip()):
            raise ValidationError("username or email is required")

        user = self.users.get_by_username_or_email(dto.username, dto.email)
        if user is None:
            raise NotFoundError("User", dto.username or dto.email or "")

        if not dto.password or not self.hasher.verify(dto.password, user.password):
            log.warning("session.login.bad_password", extra={"user_id": str(user.id)})
            raise AuthenticationError("Incorrect password")

        user_id = str(user.id)
        pair = self.tokens.rotate(user_id)

        public = self.users.get_public(user_id)
        if public is None:
            raise InternalError()

        log.info("session.login", extra={"user_id": user_id})
        return ResponseDirective(
            status=HTTPStatus.OK,
            body=LoginOut(
                user=self._to_user_public(public),
                access_token=pair.access_token,
                refresh_token=pair.refresh_token,
            ),
            message="User logged in successfully",
            cookies=session_cookies(pair.access_token, pair.refresh_token),
        )

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, actor: Actor) -> ResponseDirective:
        """Forget the stored refresh token and clear both cookies."""
        self.tokens.revoke(actor.id)
        log.info("session.logout", extra={"user_id": actor.id})
        return ResponseDirective(
            status=HTTPStatus.OK,
            body={},
            message="User logged out",
            cookies=cleared_session_cookies(),
        )

    # ------------------------------------------------------------------ #
    # Renew
    # ------------------------------------------------------------------ #

    def renew(self, dto: RenewIn) -> ResponseDirective:
        """
        Exchange the current refresh token for a fresh pair.

        The presented token must verify *and* equal the single value stored
        for its user; a token rotated out earlier never matches again.

        :param dto: Tokens read from cookie and body.
        :returns: ``200`` with the new pair and two set-cookie operations.
        :raises UnauthorizedError: No refresh token supplied.
        :raises InvalidTokenError: Bad signature, expired, unknown user or
            superseded token.
        """
        presented = dto.presented
        if not presented:
            raise UnauthorizedError("Unauthorized request")

        claims = self.tokens.verify_refresh_token(presented)

        user = self.users.get(claims["sub"])
        if user is None:
            raise InvalidTokenError("Invalid refresh token")

        if not self.tokens.matches_stored(user, presented):
            log.warning("session.renew.token_mismatch", extra={"user_id": str(user.id)})
            raise InvalidTokenError("Refresh token is expired or used")

        pair = self.tokens.rotate(str(user.id))
        log.info("session.renew", extra={"user_id": str(user.id)})
        return ResponseDirective(
            status=HTTPStatus.OK,
            body={"access_token": pair.access_token, "refresh_token": pair.refresh_token},
            message="Access token refreshed",
            cookies=session_cookies(pair.access_token, pair.refresh_token),
        )

    # ------------------------------------------------------------------ #
    # Change password
    # ------------------------------------------------------------------ #

    def change_password(self, actor: Actor, dto: ChangePasswordIn) -> ResponseDirective:
        """
        Replace the password digest after checking the old password.

        :raises ValidationError: Wrong old password or blank new password.
        :raises NotFoundError: The actor's user no longer exists.
        """
        self.ensure_present(new_password=dto.new_password)

        user = self.users.get(actor.id)
        if user is None:
            raise NotFoundError("User", actor.id)

        if not dto.old_password or not self.hasher.verify(dto.old_password, user.password):
            raise ValidationError("Invalid old password")

        if not self.users.update_password(actor.id, self.hasher.hash(dto.new_password)):
            raise NotFoundError("User", actor.id)

        log.info("session.change_password", extra={"user_id": actor.id})
        return ResponseDirective(
            status=HTTPStatus.OK,
            body={},
            message="Password changed successfully",
        )
