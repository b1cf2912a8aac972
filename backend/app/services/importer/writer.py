"""Writer for the bulk importer - batch insert of question documents."""

from typing import Any

from bson import ObjectId
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from app.core.logging import get_logger

logger = get_logger(__name__)


class QuestionWriter:
    """Insert a batch of normalized questions as one storage call."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def bulk_insert(self, documents: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """
        Insert all documents or none of them.

        Ids are assigned before the call so a failed ``insert_many`` can be
        rolled back by id.

        Args:
            documents: Normalized question documents (not mutated)

        Returns:
            The inserted documents, each carrying its ``_id``

        Raises:
            PyMongoError: If the store rejects the batch
        """
        if not documents:
            return []

        batch = [{"_id": ObjectId(), **doc} for doc in documents]
        try:
            self.collection.insert_many(batch, ordered=True)
        except PyMongoError:
            ids = [doc["_id"] for doc in batch]
            try:
                self.collection.delete_many({"_id": {"$in": ids}})
            except PyMongoError as cleanup_error:
                logger.error(
                    "Failed to roll back partial batch insert",
                    extra={"batch_size": len(batch), "error": str(cleanup_error)},
                )
            raise

        return batch
