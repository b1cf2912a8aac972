"""FastAPI dependencies for authentication."""

from typing import Annotated, Any

import jwt
from fastapi import Depends, Header

from app.core.app_exceptions import unauthorized
from app.core.logging import get_logger
from app.core.security import verify_access_token

logger = get_logger(__name__)


def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
) -> dict[str, Any]:
    """Return the decoded token claims of the caller.

    Holding a valid token is the only permission there is; the claims are
    not checked against the users collection.
    """
    if not authorization:
        raise unauthorized()

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid authorization scheme")
    except ValueError:
        raise unauthorized() from None

    try:
        payload = verify_access_token(token)
    except jwt.InvalidTokenError as e:
        logger.info("Rejected access token", extra={"reason": str(e)})
        raise unauthorized("Invalid token") from None

    return payload


CurrentUser = Annotated[dict[str, Any], Depends(get_current_user)]
