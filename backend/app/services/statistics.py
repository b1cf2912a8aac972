"""Dashboard statistics over the questions collection.

Counts are recomputed on every call.
"""

from typing import Any

from pymongo.database import Database

from app.db.mongo import questions_collection
from app.models.question import QuestionField


def _group_counts(collection, field: str) -> list[dict[str, Any]]:
    """``[{_id: value, count: n}, ...]`` sorted by count, largest first."""
    pipeline = [
        {"$group": {"_id": f"${field}", "count": {"$sum": 1}}},
        {"$sort": {"count": -1, "_id": 1}},
    ]
    return list(collection.aggregate(pipeline))


def _present(field: str) -> dict[str, Any]:
    """Field exists, is not null and is not the empty string."""
    return {field: {"$exists": True, "$nin": [None, ""]}}


def compute_statistics(db: Database) -> dict[str, Any]:
    collection = questions_collection(db)

    total = collection.count_documents({})
    with_solutions = collection.count_documents(_present(QuestionField.SOLUTION))
    with_images = collection.count_documents(_present(QuestionField.IMAGE_URL))

    return {
        "total_questions": total,
        "questions_by_subject": _group_counts(collection, QuestionField.SUBJECT),
        "questions_by_exam": _group_counts(collection, QuestionField.EXAM),
        "questions_by_difficulty": _group_counts(collection, QuestionField.DIFFICULTY),
        "questions_with_solutions": with_solutions,
        "questions_without_solutions": total - with_solutions,
        "questions_with_images": with_images,
        "questions_without_images": total - with_images,
    }
