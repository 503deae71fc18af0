"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
import re
import tempfile
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

_DURATION_RE: Final = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_DURATION_UNITS: Final[Mapping[str, str]] = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}

# Load .env during development (no-op when the file is absent)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_duration(raw: str) -> timedelta:
    """Parse a compact duration such as ``"15m"``, ``"1d"`` or ``"3600"``.

    Parameters
    ----------
    raw: str
        Integer amount optionally followed by one unit letter
        (``s``, ``m``, ``h``, ``d``, ``w``). A bare integer means seconds.

    Returns
    -------
    datetime.timedelta
        Parsed duration.

    Raises
    ------
    ValueError
        If the value does not match the expected format.
    """
    match = _DURATION_RE.match(raw or "")
    if match is None:
        raise ValueError(f"Invalid duration: {raw!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})


def env_duration(name: str, default: str) -> timedelta:
    """Read a duration from the environment, falling back to ``default``."""
    return parse_duration(os.getenv(name, default))


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    MONGODB_URI: str
        Connection string handed to MongoEngine.
    MONGODB_DB: str
        Database name holding the ``users``, ``subscriptions`` and ``videos``
        collections.
    ACCESS_TOKEN_SECRET: str
        HMAC secret for access tokens. Must differ from the refresh secret.
    ACCESS_TOKEN_EXPIRES: datetime.timedelta
        Access token lifetime (``ACCESS_TOKEN_EXPIRES``, default ``1d``).
    REFRESH_TOKEN_SECRET: str
        HMAC secret for refresh tokens.
    REFRESH_TOKEN_EXPIRES: datetime.timedelta
        Refresh token lifetime (``REFRESH_TOKEN_EXPIRES``, default ``10d``).
    MEDIA_STORAGE_ENDPOINT: str | None
        MinIO/S3 endpoint. When unset no remote uploader is configured.
    MEDIA_STORAGE_BUCKET: str
        Bucket receiving avatars and profile pictures.
    MEDIA_PUBLIC_BASE_URL: str | None
        Public URL prefix used to build the returned asset URL.
    UPLOAD_TMP_DIR: str
        Local directory receiving multipart uploads before they are pushed.
    MAX_CONTENT_LENGTH: int
        Upper bound for request bodies, in bytes.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")

    # Tokens
    ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET", "CHANGE_ME_ACCESS")
    ACCESS_TOKEN_EXPIRES = env_duration("ACCESS_TOKEN_EXPIRES", "1d")
    REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET", "CHANGE_ME_REFRESH")
    REFRESH_TOKEN_EXPIRES = env_duration("REFRESH_TOKEN_EXPIRES", "10d")

    # Document store
    MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DB = os.getenv("MONGODB_DB", "mediahub")
    MONGODB_MOCK = False

    # Media storage
    MEDIA_STORAGE_ENDPOINT = os.getenv("MEDIA_STORAGE_ENDPOINT")
    MEDIA_STORAGE_ACCESS_KEY = os.getenv("MEDIA_STORAGE_ACCESS_KEY", "")
    MEDIA_STORAGE_SECRET_KEY = os.getenv("MEDIA_STORAGE_SECRET_KEY", "")
    MEDIA_STORAGE_BUCKET = os.getenv("MEDIA_STORAGE_BUCKET", "mediahub")
    MEDIA_STORAGE_SECURE = env_bool("MEDIA_STORAGE_SECURE", True)
    MEDIA_PUBLIC_BASE_URL = os.getenv("MEDIA_PUBLIC_BASE_URL")

    # Uploads
    UPLOAD_TMP_DIR = os.getenv("UPLOAD_TMP_DIR", os.path.join(tempfile.gettempdir(), "mediahub"))
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(16 * 1024 * 1024)))

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Swaps the MongoDB client for ``mongomock`` so no server is needed.
    - Uses short, fixed token secrets distinct per token type.
    """

    TESTING = True
    DEBUG = False
    MONGODB_DB = "mediahub-test"
    MONGODB_MOCK = True
    ACCESS_TOKEN_SECRET = "test-access-secret"
    REFRESH_TOKEN_SECRET = "test-refresh-secret"
    ACCESS_TOKEN_EXPIRES = timedelta(minutes=15)
    REFRESH_TOKEN_EXPIRES = timedelta(days=10)
    MEDIA_STORAGE_ENDPOINT = None
    USE_PROXYFIX = False
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments."""

    DEBUG = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
