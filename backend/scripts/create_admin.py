#!/usr/bin/env python3
"""Create an admin user document for development/testing."""

import argparse
import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from pymongo.errors import DuplicateKeyError

from app.core.logging import get_logger, setup_logging
from app.core.security import hash_password
from app.db.mongo import ensure_indexes, get_db, users_collection
from app.models.user import UserRole

logger = get_logger(__name__)


def create_admin_user(email: str, password: str) -> bool:
    """Insert the admin user; False if the email is already taken."""
    db = get_db()
    ensure_indexes(db)
    try:
        users_collection(db).insert_one(
            {"email": email.lower().strip(), "password": hash_password(password), "role": UserRole.ADMIN.value}
        )
    except DuplicateKeyError:
        logger.warning("User already exists", extra={"email": email})
        return False
    logger.info("Admin user created", extra={"email": email})
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create an admin user")
    parser.add_argument("--email", default="admin@preplens.com")
    parser.add_argument("--password", required=True)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args()

    setup_logging("DEBUG" if args.verbose else None)
    created = create_admin_user(args.email, args.password)
    print(f"\n✓ Admin user {'created' if created else 'already exists'}: {args.email}")
