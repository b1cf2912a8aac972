"""User document model.

Stored in the ``users`` collection as ``{email, password, role}``; ``email``
is unique and ``password`` holds an Argon2 hash.
"""

from enum import Enum

USERS_COLLECTION = "users"


class UserRole(str, Enum):
    """User role enum."""

    ADMIN = "admin"
    USER = "user"
