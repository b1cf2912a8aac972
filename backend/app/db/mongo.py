"""Document-store client and collection accessors."""

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from app.core.config import settings
from app.core.logging import get_logger
from app.models.question import QUESTIONS_COLLECTION
from app.models.user import USERS_COLLECTION

logger = get_logger(__name__)


def create_client() -> MongoClient:
    """Create the MongoDB client (connections are opened lazily)."""
    return MongoClient(
        settings.MONGODB_URI,
        serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
        tz_aware=True,
    )


# Global client instance
client = create_client()


def get_db() -> Database:
    """FastAPI dependency returning the application database."""
    return client[settings.MONGODB_DB]


def questions_collection(db: Database) -> Collection:
    return db[QUESTIONS_COLLECTION]


def users_collection(db: Database) -> Collection:
    return db[USERS_COLLECTION]


def ensure_indexes(db: Database) -> None:
    """Create the indexes the application relies on (idempotent)."""
    users_collection(db).create_index([("email", ASCENDING)], unique=True)
    # Group-bys and filtered deletes key on these
    questions = questions_collection(db)
    for field in ("subject", "exam", "difficulty", "tags"):
        questions.create_index([(field, ASCENDING)])
    logger.info("Indexes ensured", extra={"database": db.name})
