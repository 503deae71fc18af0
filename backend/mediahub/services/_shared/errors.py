"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the stable contract between repositories, token handling
and the use-cases; ``BaseService.translate_exceptions()`` maps them to API
errors at the transport edge.
"""

from __future__ import annotations

from dataclasses import dataclass

from mongoengine.errors import NotUniqueError


def violates(exc: NotUniqueError, field_name: str) -> bool:
    """
    Check whether a duplicate-key error comes from the unique index on a field.

    MongoDB names single-field indexes ``<field>_1`` and quotes the index name
    in the E11000 message, so a substring match is enough.

    Parameters
    ----------
    exc : NotUniqueError
        The exception raised by MongoEngine on insert or update.
    field_name : str
        Field carrying the unique index (e.g. ``"email"``).

    Returns
    -------
    bool
        True if the error names that index.
    """
    message = str(exc).lower()
    return f"{field_name.lower()}_1" in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - Every subclass carries a message that is safe to show to callers.
    - ``code`` is a stable machine-readable identifier for the error kind.
    """

    default_message = "Bad request"
    code = "bad_request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# --------------------------------------------------------------------------- #
# Input / lookup errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """Raised when required input is missing, blank or wrong."""

    default_message = "Invalid input"
    code = "validation_error"


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the store.

    :param entity: Entity name (e.g., "User", "Channel").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str
    """

    code = "not_found"

    entity: str
    key: str

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"

    @property
    def message(self) -> str:
        return str(self)


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a uniqueness rule would be violated.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    code = "conflict"

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"

    @property
    def message(self) -> str:
        return str(self)


class UploadError(ServiceError):
    """Raised when a required asset could not be uploaded."""

    default_message = "Error while uploading file"
    code = "upload_failed"


# --------------------------------------------------------------------------- #
# Authentication errors
# --------------------------------------------------------------------------- #


class AuthenticationError(ServiceError):
    """Raised when supplied credentials do not match."""

    default_message = "Incorrect password"
    code = "invalid_credentials"


class UnauthorizedError(ServiceError):
    """Raised when a request carries no token at all."""

    default_message = "Unauthorized request"
    code = "unauthorized"


class InvalidTokenError(ServiceError):
    """Raised when a token is present but invalid, expired or superseded."""

    default_message = "invalid or expired"
    code = "invalid_token"


# --------------------------------------------------------------------------- #
# Server-side errors
# --------------------------------------------------------------------------- #


class InternalError(ServiceError):
    """Raised for unexpected failures. The message never carries internals."""

    default_message = "Something went wrong"
    code = "internal_error"


class PersistenceError(InternalError):
    """Raised when the store is inconsistent with what the service expects."""

    default_message = "Something went wrong while saving"
