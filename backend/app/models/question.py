"""Question document model.

Questions live in a single collection; field names are stored in camelCase
exactly as the admin UI reads them:

    text, options, answer, correctOptionIndex, correctOptionLetter, solution,
    subject, exam, difficulty, blooms, language, tags, marks, timeLimit,
    type, imageUrl
"""

from enum import Enum

QUESTIONS_COLLECTION = "questions"

# Options are labelled by position; at most four are offered by the UI
ANSWER_LETTERS: tuple[str, ...] = ("A", "B", "C", "D")


class QuestionType(str, Enum):
    """Question variant."""

    STATIC = "static"
    POWER = "power"  # declared, no behaviour yet


class QuestionField:
    """Stored field names."""

    ID = "_id"
    TEXT = "text"
    OPTIONS = "options"
    ANSWER = "answer"
    CORRECT_OPTION_INDEX = "correctOptionIndex"
    CORRECT_OPTION_LETTER = "correctOptionLetter"
    SOLUTION = "solution"
    SUBJECT = "subject"
    EXAM = "exam"
    DIFFICULTY = "difficulty"
    BLOOMS = "blooms"
    LANGUAGE = "language"
    TAGS = "tags"
    MARKS = "marks"
    TIME_LIMIT = "timeLimit"
    TYPE = "type"
    IMAGE_URL = "imageUrl"


def letter_for_index(index: int | None) -> str | None:
    """A=0, B=1, ...; None for indexes outside the letter table."""
    if index is None or not 0 <= index < len(ANSWER_LETTERS):
        return None
    return ANSWER_LETTERS[index]


def index_for_letter(letter: str | None) -> int | None:
    """Case-insensitive inverse of letter_for_index."""
    if not letter:
        return None
    letter = letter.strip().upper()
    if letter not in ANSWER_LETTERS:
        return None
    return ANSWER_LETTERS.index(letter)
