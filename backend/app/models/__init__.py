"""Document models: collection names, enums and field constants."""

from app.models.question import (
    ANSWER_LETTERS,
    QUESTIONS_COLLECTION,
    QuestionType,
    letter_for_index,
)
from app.models.user import USERS_COLLECTION, UserRole

__all__ = [
    "ANSWER_LETTERS",
    "QUESTIONS_COLLECTION",
    "QuestionType",
    "letter_for_index",
    "USERS_COLLECTION",
    "UserRole",
]
