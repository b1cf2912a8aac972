"""Security utilities: password hashing and JWT."""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from argon2 import PasswordHasher

from app.core.config import settings

# Password hasher instance
_password_hasher = PasswordHasher()


def hash_password(plain_password: str) -> str:
    """Hash a plain password using Argon2."""
    return _password_hasher.hash(plain_password)


def create_access_token(subject: str, email: str, role: str) -> str:
    """Create a signed access token valid for ACCESS_TOKEN_EXPIRE_MINUTES."""
    if not settings.JWT_SECRET:
        raise ValueError("JWT_SECRET must be set")

    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def verify_access_token(token: str) -> dict[str, Any]:
    """Verify and decode an access token.

    Raises:
        jwt.InvalidTokenError: If the token is malformed, tampered with or expired
    """
    if not settings.JWT_SECRET:
        raise ValueError("JWT_SECRET must be set")

    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
