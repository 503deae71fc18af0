# mediahub/services/_shared/base.py
from __future__ import annotations

from http import HTTPStatus
from typing import Any

from mediahub.core import errors as api_errors
from mediahub.models.user import User
from mediahub.repositories.user import UserRepository
from mediahub.services._shared.dto import UserPublicOut
from mediahub.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    InternalError,
    InvalidTokenError,
    NotFoundError,
    ServiceError,
    UnauthorizedError,
    ValidationError,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Hold the credential store adapter shared by every use-case.
    * Centralize error translation to the HTTP edge.
    * Offer shared validation and mapping helpers.

    Notes
    -----
    - Services never import Flask; they return DTOs or
      :class:`~mediahub.services._shared.dto.ResponseDirective` values.
    - Atomic field updates go through the repository, never ``Document.save``,
      so unrelated required fields are not re-validated.
    """

    def __init__(self, *, users: UserRepository | None = None) -> None:
        """
        Initialize the base service.

        :param users: Credential store adapter. Defaults to a new
            :class:`UserRepository`.
        :type users: UserRepository | None
        """
        self.users = users or UserRepository()

    # ----------------------- Validation utilities ---------------------------

    @staticmethod
    def ensure_present(**fields: Any) -> None:
        """
        Reject missing or blank (after trimming) values.

        :raises ValidationError: Naming the first offending field.
        """
        for name, value in fields.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(f"{name} is required")

    # -------------------------- Mapping helpers -----------------------------

    @staticmethod
    def _to_user_public(user: User) -> UserPublicOut:
        """
        Map a user document to the sanitized public DTO.

        :param user: Stored user (full or projected).
        :type user: User
        :returns: Record without password digest or refresh token.
        :rtype: UserPublicOut
        """
        return UserPublicOut(
            id=str(user.id),
            username=user.username,
            email=user.email,
            avatar=user.avatar,
            picture=user.picture or "",
            watch_history=[str(v) for v in (user.watch_history or [])],
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: ServiceError) -> api_errors.APIError:
        """
        Map service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within a service.
        :type exc: ServiceError
        :returns: Translated error ready to be rendered.
        :rtype: APIError
        """
        if isinstance(exc, NotFoundError):
            # → 404 Not Found
            return api_errors.NotFound(exc.message)

        if isinstance(exc, ConflictError):
            # → 409 Conflict
            return api_errors.Conflict(exc.message)

        if isinstance(exc, (AuthenticationError, InvalidTokenError, UnauthorizedError)):
            # → 401 Unauthorized
            return api_errors.Unauthorized(exc.message, code=exc.code)

        if isinstance(exc, InternalError):
            # → 500, message is already generic
            return api_errors.APIError(
                message=exc.message,
                status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                code=exc.code,
            )

        # ValidationError, UploadError and any other ServiceError → 400
        return api_errors.APIError(
            message=exc.message,
            status_code=HTTPStatus.BAD_REQUEST,
            code=exc.code,
        )
