"""ETag support for static downloads."""

import hashlib

from fastapi import Request, status
from fastapi.responses import Response


def compute_etag(content: str | bytes) -> str:
    """Weak ETag (W/ prefix) over the response body."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return f'W/"{hashlib.md5(content).hexdigest()}"'


def check_if_none_match(request: Request, etag: str) -> bool:
    """True when the client already holds this ETag and should get a 304."""
    if_none_match = request.headers.get("If-None-Match")
    if not if_none_match:
        return False

    def _bare(value: str) -> str:
        return value.strip().replace("W/", "").strip('"')

    return any(_bare(candidate) == _bare(etag) for candidate in if_none_match.split(","))


def create_not_modified_response(etag: str) -> Response:
    """Create 304 Not Modified response with ETag header."""
    return Response(
        status_code=status.HTTP_304_NOT_MODIFIED,
        headers={"ETag": etag},
    )
