"""Row mapper for the bulk importer."""

from typing import Any

from app.models.question import QuestionField
from app.services.normalizer import LetterAnswer

# Spreadsheet column -> stored field. ``answer`` and ``optionA``..``optionD``
# are handled separately.
COLUMN_FIELDS: dict[str, str] = {
    "text": QuestionField.TEXT,
    "solution": QuestionField.SOLUTION,
    "subject": QuestionField.SUBJECT,
    "exam": QuestionField.EXAM,
    "difficulty": QuestionField.DIFFICULTY,
    "tags": QuestionField.TAGS,
    "marks": QuestionField.MARKS,
    "timeLimit": QuestionField.TIME_LIMIT,
    "blooms": QuestionField.BLOOMS,
    "type": QuestionField.TYPE,
    "language": QuestionField.LANGUAGE,
    "imageUrl": QuestionField.IMAGE_URL,
}
OPTION_COLUMNS: tuple[str, ...] = ("optionA", "optionB", "optionC", "optionD")
ANSWER_COLUMN = "answer"

# Header order of the downloadable template
TEMPLATE_COLUMNS: tuple[str, ...] = (
    "text",
    *OPTION_COLUMNS,
    ANSWER_COLUMN,
    "solution",
    "subject",
    "exam",
    "difficulty",
    "tags",
    "marks",
    "timeLimit",
    "blooms",
    "type",
)


class RowMapper:
    """Map spreadsheet rows onto normalizer input.

    Header matching ignores case and surrounding whitespace, so ``OptionA`` and
    ``timelimit`` are recognised as well.
    """

    def __init__(self) -> None:
        self._lookup = {name.lower(): name for name in (*COLUMN_FIELDS, *OPTION_COLUMNS, ANSWER_COLUMN)}

    def canonical_row(self, row: dict[str, Any]) -> dict[str, Any]:
        """Re-key a raw row by the recognised column names; unknown columns are dropped."""
        canonical: dict[str, Any] = {}
        for column, value in row.items():
            name = self._lookup.get(str(column).strip().lower())
            if name is not None and name not in canonical:
                canonical[name] = value
        return canonical

    def map_row(self, row: dict[str, Any]) -> tuple[dict[str, Any], LetterAnswer]:
        """
        Map a raw row to question fields and its answer reference.

        Args:
            row: Raw spreadsheet row (column_name -> cell value)

        Returns:
            Tuple of (fields keyed by stored field name, letter answer)
        """
        canonical = self.canonical_row(row)

        fields = {
            field_name: canonical.get(column)
            for column, field_name in COLUMN_FIELDS.items()
        }
        fields[QuestionField.OPTIONS] = [canonical.get(column) for column in OPTION_COLUMNS]

        letter = canonical.get(ANSWER_COLUMN)
        return fields, LetterAnswer(None if letter is None else str(letter))
