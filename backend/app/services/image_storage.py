"""Question image uploads to S3.

Uploads are fail-soft: when the bucket is not configured or S3 rejects the
object, a placeholder URL is returned instead of an error.
"""

import time
from functools import lru_cache
from pathlib import PurePath
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

KEY_PREFIX = "questions"


@lru_cache(maxsize=1)
def get_s3_client():
    """Shared S3 client; credentials fall back to the default boto3 chain."""
    return boto3.client(
        "s3",
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        region_name=settings.AWS_REGION,
    )


def object_key(filename: str | None, now_ms: int | None = None) -> str:
    """``questions/<epoch-ms>-<basename>``."""
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    name = PurePath((filename or "image").replace("\\", "/")).name or "image"
    return f"{KEY_PREFIX}/{now_ms}-{name}"


def public_url(key: str) -> str:
    if settings.S3_PUBLIC_BASE_URL:
        return f"{settings.S3_PUBLIC_BASE_URL.rstrip('/')}/{quote(key)}"
    region = settings.AWS_REGION or "us-east-1"
    return f"https://{settings.S3_BUCKET_NAME}.s3.{region}.amazonaws.com/{quote(key)}"


def placeholder_url(now_ms: int | None = None) -> str:
    """Placeholder image URL, cache-busted with the upload time."""
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    parts = urlsplit(settings.IMAGE_PLACEHOLDER_URL)
    query = parse_qsl(parts.query, keep_blank_values=True)
    query = [(k, f"{v}+{now_ms}" if k == "text" else v) for k, v in query] or [("t", str(now_ms))]
    return urlunsplit(parts._replace(query=urlencode(query, safe="+")))


def upload_image(content: bytes, filename: str | None, content_type: str | None) -> str:
    """Store the image and return its URL (or a placeholder on failure)."""
    now_ms = int(time.time() * 1000)
    if not settings.S3_BUCKET_NAME:
        logger.warning("S3 bucket not configured, using placeholder image URL")
        return placeholder_url(now_ms)

    key = object_key(filename, now_ms)
    try:
        get_s3_client().put_object(
            Bucket=settings.S3_BUCKET_NAME,
            Key=key,
            Body=content,
            ContentType=content_type or "application/octet-stream",
        )
    except (BotoCoreError, ClientError) as e:
        logger.error("S3 upload failed, using placeholder image URL", extra={"key": key, "error": str(e)})
        return placeholder_url(now_ms)

    url = public_url(key)
    logger.info("Image uploaded", extra={"key": key, "size_bytes": len(content)})
    return url
