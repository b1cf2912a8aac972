"""Question store accessor: create, list and delete question documents."""

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.database import Database

from app.core.logging import get_logger
from app.db.mongo import questions_collection
from app.models.question import QuestionField
from app.services.importer.writer import QuestionWriter

logger = get_logger(__name__)


def build_delete_filter(
    subject: str | None = None,
    exam: str | None = None,
    difficulty: str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Field-equality filter; blank criteria are left out, tags match any-of."""
    query: dict[str, Any] = {}
    if subject:
        query[QuestionField.SUBJECT] = subject
    if exam:
        query[QuestionField.EXAM] = exam
    if difficulty:
        query[QuestionField.DIFFICULTY] = difficulty
    if tags:
        query[QuestionField.TAGS] = {"$in": list(tags)}
    return query


class QuestionStore:
    """Thin accessor over the questions collection."""

    def __init__(self, db: Database):
        self.collection = questions_collection(db)

    def create(self, document: dict[str, Any]) -> dict[str, Any]:
        """Insert one document and return it with its ``_id``."""
        stored = dict(document)
        result = self.collection.insert_one(stored)
        stored["_id"] = result.inserted_id
        return stored

    def insert_batch(self, documents: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Insert all documents in a single all-or-nothing call."""
        return QuestionWriter(self.collection).bulk_insert(documents)

    def list_all(self) -> list[dict[str, Any]]:
        """Every document, in store order."""
        return list(self.collection.find())

    def delete_by_id(self, question_id: str) -> int:
        """Delete one document; unknown or malformed ids delete nothing."""
        try:
            oid = ObjectId(question_id)
        except (InvalidId, TypeError):
            logger.info("Delete requested for malformed id", extra={"question_id": question_id})
            return 0
        return self.collection.delete_one({"_id": oid}).deleted_count

    def delete_matching(self, query: dict[str, Any]) -> int:
        """Delete every document matching ``query``; an empty query matches all."""
        deleted = self.collection.delete_many(query).deleted_count
        logger.info("Questions deleted", extra={"filter": str(query), "deleted_count": deleted})
        return deleted
