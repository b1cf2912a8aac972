"""One-time migration of legacy question documents.

Early records stored only the answer text. This fills ``correctOptionIndex``
and ``correctOptionLetter`` by matching that text against the options, so
readers never have to guess the correct option.
"""

from dataclasses import dataclass

from pymongo import UpdateOne
from pymongo.database import Database

from app.core.logging import get_logger
from app.db.mongo import questions_collection
from app.models.question import QuestionField, letter_for_index
from app.services.normalizer import IndexAnswer, TextAnswer, resolve_answer

logger = get_logger(__name__)


@dataclass
class BackfillReport:
    scanned: int = 0
    updated: int = 0
    unresolved: int = 0


def backfill_answer_fields(db: Database, dry_run: bool = False) -> BackfillReport:
    """Derive missing index/letter fields from ``answer`` (or letter from index)."""
    collection = questions_collection(db)
    report = BackfillReport()
    updates: list[UpdateOne] = []

    query = {
        "$or": [
            {QuestionField.CORRECT_OPTION_INDEX: None},
            {QuestionField.CORRECT_OPTION_LETTER: None},
        ]
    }
    for doc in collection.find(query):
        report.scanned += 1
        options = [opt or "" for opt in doc.get(QuestionField.OPTIONS) or []]
        index = doc.get(QuestionField.CORRECT_OPTION_INDEX)

        if isinstance(index, int) and not isinstance(index, bool):
            resolved = resolve_answer(options, IndexAnswer(index))
        else:
            resolved = resolve_answer(options, TextAnswer(doc.get(QuestionField.ANSWER)))

        if resolved.index is None:
            report.unresolved += 1
            continue

        changes = {
            QuestionField.CORRECT_OPTION_INDEX: resolved.index,
            QuestionField.CORRECT_OPTION_LETTER: letter_for_index(resolved.index),
            QuestionField.ANSWER: resolved.text,
        }
        updates.append(UpdateOne({"_id": doc["_id"]}, {"$set": changes}))
        report.updated += 1

    if updates and not dry_run:
        collection.bulk_write(updates, ordered=False)

    logger.info(
        "Answer backfill finished",
        extra={
            "scanned": report.scanned,
            "updated": report.updated,
            "unresolved": report.unresolved,
            "dry_run": dry_run,
        },
    )
    return report
