"""Tests for the legacy answer backfill."""

from app.services.backfill import backfill_answer_fields


def test_resolves_answer_text(db, questions):
    questions.insert_one({"text": "q", "options": ["Mars", "Venus", "Earth"], "answer": " venus "})

    report = backfill_answer_fields(db)

    assert (report.scanned, report.updated, report.unresolved) == (1, 1, 0)
    doc = questions.find_one()
    assert doc["correctOptionIndex"] == 1
    assert doc["correctOptionLetter"] == "B"
    assert doc["answer"] == "Venus"


def test_fills_letter_from_index(db, questions):
    questions.insert_one({"text": "q", "options": ["a", "b", "c", "d"], "correctOptionIndex": 3, "answer": ""})

    backfill_answer_fields(db)

    doc = questions.find_one()
    assert doc["correctOptionLetter"] == "D"
    assert doc["answer"] == "d"


def test_unmatched_answer_left_alone(db, questions):
    questions.insert_one({"text": "q", "options": ["a", "b"], "answer": "z"})

    report = backfill_answer_fields(db)

    assert report.unresolved == 1
    doc = questions.find_one()
    assert doc.get("correctOptionIndex") is None
    assert doc["answer"] == "z"


def test_resolved_documents_are_skipped(db, questions):
    questions.insert_one(
        {"text": "q", "options": ["a", "b"], "answer": "a", "correctOptionIndex": 0, "correctOptionLetter": "A"}
    )

    assert backfill_answer_fields(db).scanned == 0


def test_dry_run_writes_nothing(db, questions):
    questions.insert_one({"text": "q", "options": ["a", "b"], "answer": "b"})

    report = backfill_answer_fields(db, dry_run=True)

    assert report.updated == 1
    assert "correctOptionIndex" not in questions.find_one()
