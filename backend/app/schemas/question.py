"""Pydantic schemas for questions, bulk uploads and bulk deletes.

Fields are snake_case in Python and camelCase on the wire.
"""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from app.models.question import ANSWER_LETTERS, QuestionType

# Validation caps (input hardening)
TEXT_MAX_LENGTH = 20000
SOLUTION_MAX_LENGTH = 40000
OPTION_MAX_LENGTH = 5000
TAG_MAX_LENGTH = 100


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuestionCreate(CamelModel):
    """Interactive create: options plus the 0-based index of the correct one."""

    text: str = Field(..., min_length=1, max_length=TEXT_MAX_LENGTH, description="Question body (HTML)")
    options: list[str] = Field(default_factory=list, max_length=len(ANSWER_LETTERS))
    correct_answer: int | None = Field(
        None, ge=0, lt=len(ANSWER_LETTERS), description="Index of the correct option"
    )
    answer: str | None = Field(None, max_length=OPTION_MAX_LENGTH, description="Correct option text")
    solution: str | None = Field(None, max_length=SOLUTION_MAX_LENGTH)
    subject: str | None = None
    exam: str | None = None
    difficulty: str | None = None
    blooms: str | None = None
    language: str | None = None
    tags: list[str] | str | None = Field(None, description="List or comma-separated string")
    marks: PositiveInt | None = None
    time_limit: PositiveInt | None = Field(None, description="Seconds")
    type: QuestionType = QuestionType.STATIC
    image_url: str | None = None

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Question text is required")
        return v

    @field_validator("options")
    @classmethod
    def option_length(cls, v: list[str]) -> list[str]:
        if any(len(opt) > OPTION_MAX_LENGTH for opt in v):
            raise ValueError(f"Options must be at most {OPTION_MAX_LENGTH} characters")
        return v

    @model_validator(mode="after")
    def correct_answer_within_options(self) -> "QuestionCreate":
        if self.correct_answer is not None and self.correct_answer >= len(self.options):
            raise ValueError("correctAnswer must point at one of the options")
        return self


class QuestionOut(CamelModel):
    """Stored question as returned to the admin UI."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str
    text: str = ""
    options: list[str | None] = Field(default_factory=list)
    answer: str | None = None
    correct_option_index: int | None = None
    correct_option_letter: str | None = None
    solution: str | None = None
    subject: str | None = None
    exam: str | None = None
    difficulty: str | None = None
    blooms: str | None = None
    language: str | None = None
    tags: list[str] = Field(default_factory=list)
    marks: int | float | None = None
    time_limit: int | float | None = None
    type: str = QuestionType.STATIC.value
    image_url: str | None = None

    @field_validator("options", "tags", mode="before")
    @classmethod
    def null_list_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @computed_field(alias="answerResolved")  # type: ignore[prop-decorator]
    @property
    def answer_resolved(self) -> bool:
        """False for degraded records, which the UI flags."""
        return self.correct_option_index is not None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "QuestionOut":
        data = {k: v for k, v in document.items() if k != "_id"}
        data["id"] = str(document["_id"])
        return cls.model_validate(data)


class DegradedRow(CamelModel):
    """Spreadsheet row stored without a resolvable answer (or text)."""

    row: int
    reasons: list[str]


class BulkUploadResult(CamelModel):
    added: int
    questions: list[QuestionOut]
    degraded: list[DegradedRow] = Field(default_factory=list)


class ClearQuestionsRequest(CamelModel):
    """Bulk-delete filter; every given criterion must match (tags: any-of)."""

    subject: str | None = None
    exam: str | None = None
    difficulty: str | None = None
    tags: list[str] | None = Field(None, max_length=100)
    confirm: str | None = Field(None, description="Required when no criteria are given")

    @field_validator("tags")
    @classmethod
    def tag_length(cls, v: list[str] | None) -> list[str] | None:
        if v and any(len(tag) > TAG_MAX_LENGTH for tag in v):
            raise ValueError(f"Tags must be at most {TAG_MAX_LENGTH} characters")
        return v


class ClearResult(CamelModel):
    message: str
    deleted_count: int
    filter: dict[str, Any] | None = None


class GroupCount(BaseModel):
    """One group-by bucket; ``_id`` is the grouped value (None when unset)."""

    model_config = ConfigDict(populate_by_name=True)

    key: Any = Field(None, alias="_id")
    count: int


class StatisticsOut(CamelModel):
    total_questions: int
    questions_by_subject: list[GroupCount]
    questions_by_exam: list[GroupCount]
    questions_by_difficulty: list[GroupCount]
    questions_with_solutions: int
    questions_without_solutions: int
    questions_with_images: int
    questions_without_images: int


class ImageUploadResponse(BaseModel):
    url: str
