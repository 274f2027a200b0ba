"""
Gallery file storage.
Objects live in an S3-compatible bucket of the hosted backend and are served
from its public URL.
"""

import logging
from typing import Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from .config import (
    STORAGE_ACCESS_KEY_ID,
    STORAGE_BUCKET,
    STORAGE_ENDPOINT_URL,
    STORAGE_PUBLIC_URL,
    STORAGE_REGION,
    STORAGE_SECRET_ACCESS_KEY,
)
from .shared.errors import StorageError

logger = logging.getLogger(__name__)

_client = None


def get_storage_client():
    """Get configured boto3 client for the storage bucket"""
    global _client
    if _client is None:
        _client = boto3.client(
            "s3",
            endpoint_url=STORAGE_ENDPOINT_URL,
            aws_access_key_id=STORAGE_ACCESS_KEY_ID,
            aws_secret_access_key=STORAGE_SECRET_ACCESS_KEY,
            config=Config(signature_version="s3v4"),
            region_name=STORAGE_REGION,
        )
    return _client


def get_public_url(path: str) -> str:
    return f"{STORAGE_PUBLIC_URL}/{path.lstrip('/')}"


def upload(path: str, data: bytes, content_type: Optional[str] = None) -> str:
    """
    Store an object and return its public URL.

    Raises:
        StorageError: the bucket rejected the upload
    """
    extra = {"ContentType": content_type} if content_type else {}
    try:
        get_storage_client().put_object(
            Bucket=STORAGE_BUCKET,
            Key=path,
            Body=data,
            CacheControl="max-age=3600",
            **extra,
        )
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Upload of {path} failed: {e}")
        raise StorageError("Erreur lors de l'upload de l'image") from e

    logger.info(f"Uploaded {path} ({len(data)} bytes)")
    return get_public_url(path)


def remove(paths: list[str]) -> None:
    """Delete objects; missing keys are not an error for S3"""
    if not paths:
        return
    try:
        response = get_storage_client().delete_objects(
            Bucket=STORAGE_BUCKET,
            Delete={"Objects": [{"Key": path} for path in paths], "Quiet": True},
        )
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Removal of {paths} failed: {e}")
        raise StorageError("Erreur lors de la suppression du fichier") from e

    errors = response.get("Errors") or []
    if errors:
        logger.error(f"Storage refused to remove some objects: {errors}")
        raise StorageError("Erreur lors de la suppression du fichier")
