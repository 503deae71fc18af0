"""Flask CLI commands for the media object storage."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from mediahub.core.extensions import get_media_uploader
from mediahub.infra.storage.minio_uploader import MinioUploader

LOGGER = logging.getLogger(__name__)


@click.group("storage")
def storage_cli() -> None:
    """Media storage maintenance commands."""


@storage_cli.command("ensure-bucket")
@with_appcontext
def ensure_bucket_command() -> None:
    """Create the configured media bucket when it is missing."""
    try:
        uploader = get_media_uploader()
    except RuntimeError as exc:
        raise click.UsageError(str(exc)) from exc
    if not isinstance(uploader, MinioUploader):
        raise click.UsageError("The configured media uploader is not backed by MinIO.")
    uploader.ensure_bucket()
    LOGGER.info("storage.bucket_ready", extra={"status": uploader.bucket})
    click.echo(f"Bucket '{uploader.bucket}' is ready.")
