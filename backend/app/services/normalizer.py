"""Record normalizer: raw spreadsheet rows and form submissions -> question documents.

Both entry points share one answer resolver. A row that cannot be resolved is
never rejected: the document is still produced, with the unresolved fields
set to None, and the reasons are reported next to it.
"""

from dataclasses import dataclass, field
from typing import Any, Union

from app.core.config import settings
from app.models.question import (
    ANSWER_LETTERS,
    QuestionField,
    QuestionType,
    index_for_letter,
    letter_for_index,
)


# ---------------------------------------------------------------------------
# Answer references
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LetterAnswer:
    """Answer given as an option letter (spreadsheet ``answer`` column)."""

    value: str | None


@dataclass(frozen=True)
class IndexAnswer:
    """Answer given as a 0-based option index (form ``correctAnswer``)."""

    value: int


@dataclass(frozen=True)
class TextAnswer:
    """Answer given as the literal text of the correct option."""

    value: str | None


AnswerRef = Union[LetterAnswer, IndexAnswer, TextAnswer]


@dataclass(frozen=True)
class ResolvedAnswer:
    index: int | None
    letter: str | None
    text: str
    reason: str | None = None


def resolve_answer(options: list[str], ref: AnswerRef, fallback_text: str = "") -> ResolvedAnswer:
    """Resolve an answer reference against the option list.

    On success ``letter == ANSWER_LETTERS[index]`` and ``text == options[index]``.
    On failure index and letter are None, ``text`` is ``fallback_text`` and
    ``reason`` says why.
    """
    if isinstance(ref, IndexAnswer):
        index: int | None = ref.value
        if not 0 <= ref.value < min(len(options), len(ANSWER_LETTERS)):
            return ResolvedAnswer(
                None, None, fallback_text, f"answer index {ref.value} is out of range"
            )
        if _blank(options[ref.value]):
            return ResolvedAnswer(None, None, fallback_text, f"answer index {ref.value} has no option")
    elif isinstance(ref, LetterAnswer):
        index = index_for_letter(ref.value)
        if index is None:
            if not (ref.value or "").strip():
                reason = "answer letter is missing"
            else:
                reason = f"answer letter {ref.value.strip()!r} is not one of {', '.join(ANSWER_LETTERS)}"
            return ResolvedAnswer(None, None, fallback_text, reason)
        if index >= len(options) or _blank(options[index]):
            return ResolvedAnswer(
                None, None, fallback_text, f"answer letter {ref.value.strip().upper()!r} has no option"
            )
    else:
        index = _match_option_text(options, ref.value)
        if index is None:
            reason = "answer is missing" if not ref.value else "answer text does not match any option"
            return ResolvedAnswer(None, None, ref.value or fallback_text, reason)

    return ResolvedAnswer(index, letter_for_index(index), options[index] or "")


def _blank(option: str | None) -> bool:
    return not (option or "").strip()


def _match_option_text(options: list[str], text: str | None) -> int | None:
    """Exact match first, then whitespace/case-insensitive; first option wins."""
    if not text:
        return None
    for i, option in enumerate(options[: len(ANSWER_LETTERS)]):
        if option == text:
            return i
    wanted = " ".join(text.split()).casefold()
    for i, option in enumerate(options[: len(ANSWER_LETTERS)]):
        if option and " ".join(option.split()).casefold() == wanted:
            return i
    return None


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def parse_tags(value: Any) -> list[str]:
    """Split a comma-separated string; sequences are used as they are."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [token.strip() for token in str(value).split(",") if token.strip()]


def coerce_positive_number(value: Any) -> int | float | None:
    """Best-effort numeric parse; None for blanks, garbage and values <= 0."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    if number != number or number <= 0:  # NaN or non-positive
        return None
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def resolve_number(row_value: Any, batch_value: Any, default: int | float) -> int | float:
    """Row value, then batch override, then default; unusable values are skipped."""
    for candidate in (row_value, batch_value):
        number = coerce_positive_number(candidate)
        if number is not None:
            return number
    return default


def resolve_type(row_value: Any, batch_value: Any) -> str:
    for candidate in (row_value, batch_value):
        if isinstance(candidate, QuestionType):
            return candidate.value
        text = clean_text(candidate).lower()
        if text in {t.value for t in QuestionType}:
            return text
    return QuestionType.STATIC.value


def resolve_text(row_value: Any, batch_value: Any, default: str = "") -> str:
    for candidate in (row_value, batch_value):
        text = clean_text(candidate)
        if text:
            return text
    return default


def clean_text(value: Any) -> str:
    """Cell/form value as a stripped string; integral floats lose their ``.0``."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def optional_text(value: Any) -> str | None:
    return clean_text(value) or None


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


@dataclass
class BatchOverrides:
    """Values supplied once per upload for rows that leave them blank."""

    marks: Any = None
    time_limit: Any = None
    blooms: Any = None
    type: Any = None


@dataclass
class NormalizedRow:
    """Canonical question document plus the reasons it is degraded (if any)."""

    record: dict[str, Any]
    reasons: list[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.reasons)


def normalize_question(
    fields: dict[str, Any],
    answer: AnswerRef,
    overrides: BatchOverrides | None = None,
) -> NormalizedRow:
    """Build a canonical question document.

    ``fields`` uses the stored field names (``text``, ``options``, ``marks``,
    ``timeLimit`` ...). Never raises for bad input; see ``NormalizedRow.reasons``.
    """
    overrides = overrides or BatchOverrides()
    reasons: list[str] = []

    options = [_option_text(opt) for opt in (fields.get(QuestionField.OPTIONS) or [])]
    text = fields.get(QuestionField.TEXT)
    text = text.strip() if isinstance(text, str) else clean_text(text)
    if not text:
        reasons.append("question text is empty")

    resolved = resolve_answer(options, answer, fallback_text=clean_text(fields.get(QuestionField.ANSWER)))
    if resolved.reason:
        reasons.append(resolved.reason)

    record: dict[str, Any] = {
        QuestionField.TEXT: text,
        QuestionField.OPTIONS: options,
        QuestionField.ANSWER: resolved.text,
        QuestionField.CORRECT_OPTION_INDEX: resolved.index,
        QuestionField.CORRECT_OPTION_LETTER: resolved.letter,
        QuestionField.SOLUTION: clean_text(fields.get(QuestionField.SOLUTION)),
        QuestionField.SUBJECT: optional_text(fields.get(QuestionField.SUBJECT)),
        QuestionField.EXAM: optional_text(fields.get(QuestionField.EXAM)),
        QuestionField.DIFFICULTY: optional_text(fields.get(QuestionField.DIFFICULTY)),
        QuestionField.BLOOMS: resolve_text(fields.get(QuestionField.BLOOMS), overrides.blooms),
        QuestionField.LANGUAGE: optional_text(fields.get(QuestionField.LANGUAGE)),
        QuestionField.TAGS: parse_tags(fields.get(QuestionField.TAGS)),
        QuestionField.MARKS: resolve_number(
            fields.get(QuestionField.MARKS), overrides.marks, settings.DEFAULT_MARKS
        ),
        QuestionField.TIME_LIMIT: resolve_number(
            fields.get(QuestionField.TIME_LIMIT), overrides.time_limit, settings.DEFAULT_TIME_LIMIT
        ),
        QuestionField.TYPE: resolve_type(fields.get(QuestionField.TYPE), overrides.type),
        QuestionField.IMAGE_URL: optional_text(fields.get(QuestionField.IMAGE_URL)),
    }
    return NormalizedRow(record=record, reasons=reasons)


def _option_text(value: Any) -> str:
    # Options may be HTML fragments; only stringify, keep inner whitespace
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
