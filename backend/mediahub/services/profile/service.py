# mediahub/services/profile/service.py
from __future__ import annotations

import logging
from http import HTTPStatus

from mongoengine.errors import NotUniqueError

from mediahub.models.user import User
from mediahub.repositories.user import UserRepository
from mediahub.services._shared.base import BaseService
from mediahub.services._shared.dto import Actor, ResponseDirective
from mediahub.services._shared.errors import (
    ConflictError,
    InternalError,
    NotFoundError,
    UploadError,
    ValidationError,
    violates,
)
from mediahub.services._shared.ports.media_uploader import MediaUploader, UploadedMedia
from mediahub.services.profile.dto import UpdateDetailsIn

log = logging.getLogger(__name__)


class ProfileService(BaseService):
    """
    Profile use-cases of the authenticated actor: read the current record and
    update details, avatar or profile picture.

    Every update is one atomic field set; the returned body is always the
    sanitized record.
    """

    def __init__(
        self,
        *,
        users: UserRepository | None = None,
        uploader: MediaUploader | None = None,
    ) -> None:
        super().__init__(users=users)
        self.uploader = uploader

    def _sanitized(self, user: User | None, actor: Actor, message: str) -> ResponseDirective:
        if user is None:
            raise NotFoundError("User", actor.id)
        return ResponseDirective(
            status=HTTPStatus.OK, body=self._to_user_public(user), message=message
        )

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def current_user(self, actor: Actor) -> ResponseDirective:
        """Return the actor's sanitized record."""
        return self._sanitized(
            self.users.get_public(actor.id), actor, "Current user fetched successfully"
        )

    # ------------------------------------------------------------------ #
    # Updates
    # ------------------------------------------------------------------ #

    def update_details(self, actor: Actor, dto: UpdateDetailsIn) -> ResponseDirective:
        """
        Set username and email together.

        :raises ValidationError: Either field missing or blank.
        :raises ConflictError: Username or email taken by another user.
        """
        if not (dto.username and dto.username.strip()) or not (dto.email and dto.email.strip()):
            raise ValidationError("username and email are required")

        username = dto.username.strip().lower()
        email = dto.email.strip().lower()
        try:
            user = self.users.set_public_fields(actor.id, username=username, email=email)
        except NotUniqueError as exc:
            field = "username" if violates(exc, "username") else "email"
            raise ConflictError("User", f"{field} already in use") from exc

        log.info("profile.update_details", extra={"user_id": actor.id})
        return self._sanitized(user, actor, "Account details updated successfully")

    def update_avatar(self, actor: Actor, local_path: str | None) -> ResponseDirective:
        """
        Upload a new avatar and store its URL.

        :raises ValidationError: No file supplied.
        :raises UploadError: The upload failed.
        """
        if not local_path:
            raise ValidationError("Avatar file is missing")

        result = self._uploader().upload(local_path)
        if not isinstance(result, UploadedMedia):
            log.warning(
                "profile.avatar_upload_failed",
                extra={"user_id": actor.id, "reason": result.reason},
            )
            raise UploadError("Error while uploading avatar")

        user = self.users.set_public_fields(actor.id, avatar=result.url)
        log.info("profile.update_avatar", extra={"user_id": actor.id})
        return self._sanitized(user, actor, "Avatar updated successfully")

    def update_picture(self, actor: Actor, local_path: str | None) -> ResponseDirective:
        """
        Upload a new profile picture and store its URL.

        The picture is optional, so a failed upload stores ``""`` instead of
        failing the request.

        :raises ValidationError: No file supplied.
        """
        if not local_path:
            raise ValidationError("Picture file is missing")

        result = self._uploader().upload(local_path)
        if isinstance(result, UploadedMedia):
            url = result.url
        else:
            log.warning(
                "profile.picture_upload_failed",
                extra={"user_id": actor.id, "reason": result.reason},
            )
            url = ""

        user = self.users.set_public_fields(actor.id, picture=url)
        log.info("profile.update_picture", extra={"user_id": actor.id})
        return self._sanitized(user, actor, "Profile picture updated successfully")

    def _uploader(self) -> MediaUploader:
        if self.uploader is None:
            raise InternalError("Media uploader is not available")
        return self.uploader
