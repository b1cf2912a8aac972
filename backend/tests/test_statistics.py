"""Tests for the statistics aggregator."""

from app.services.statistics import compute_statistics


def _question(**fields):
    doc = {"text": "q", "subject": "Maths", "exam": "SSC", "difficulty": "Easy"}
    doc.update(fields)
    return doc


def test_solution_counts(db, questions):
    questions.insert_many(
        [
            _question(solution="because"),
            _question(solution="<p>see</p>"),
            _question(solution=""),
        ]
    )

    stats = compute_statistics(db)

    assert stats["total_questions"] == 3
    assert stats["questions_with_solutions"] == 2
    assert stats["questions_without_solutions"] == 1


def test_image_counts_treat_missing_and_null_as_absent(db, questions):
    questions.insert_many(
        [
            _question(imageUrl="https://cdn/x.png"),
            _question(imageUrl=""),
            _question(imageUrl=None),
            _question(),
        ]
    )

    stats = compute_statistics(db)

    assert stats["questions_with_images"] == 1
    assert stats["questions_without_images"] == 3


def test_group_counts_sorted_descending(db, questions):
    questions.insert_many(
        [_question(subject="History")]
        + [_question(subject="Maths") for _ in range(3)]
        + [_question(subject="Polity") for _ in range(2)]
    )

    stats = compute_statistics(db)

    assert stats["questions_by_subject"] == [
        {"_id": "Maths", "count": 3},
        {"_id": "Polity", "count": 2},
        {"_id": "History", "count": 1},
    ]


def test_total_matches_difficulty_breakdown(db, questions):
    questions.insert_many(
        [_question(difficulty=level) for level in ("Easy", "Easy", "Medium", "Hard", "Hard", "Hard")]
    )

    stats = compute_statistics(db)

    assert stats["total_questions"] == sum(g["count"] for g in stats["questions_by_difficulty"])
    assert stats["questions_by_difficulty"][0] == {"_id": "Hard", "count": 3}


def test_empty_collection(db):
    stats = compute_statistics(db)

    assert stats["total_questions"] == 0
    assert stats["questions_by_exam"] == []
    assert stats["questions_without_solutions"] == 0


def test_statistics_endpoint_shape(client, questions):
    questions.insert_many([_question(solution="s"), _question(exam="UPSC")])

    response = client.get("/statistics")

    assert response.status_code == 200
    body = response.json()
    assert body["totalQuestions"] == 2
    assert body["questionsByExam"] == [{"_id": "SSC", "count": 1}, {"_id": "UPSC", "count": 1}]
    assert body["questionsWithSolutions"] == 1
    assert body["questionsWithoutSolutions"] == 1
    assert body["questionsWithImages"] == 0
    assert body["questionsWithoutImages"] == 2
