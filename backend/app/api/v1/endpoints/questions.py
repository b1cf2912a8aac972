"""Question endpoints: create, list and delete."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, Response, status
from pymongo.database import Database

from app.core.app_exceptions import confirmation_required
from app.core.config import settings
from app.core.dependencies import CurrentUser
from app.core.logging import get_logger
from app.db.mongo import get_db
from app.schemas.question import ClearQuestionsRequest, ClearResult, QuestionCreate, QuestionOut
from app.services.normalizer import IndexAnswer, TextAnswer, normalize_question
from app.services.question_store import QuestionStore, build_delete_filter

logger = get_logger(__name__)

router = APIRouter(tags=["Questions"])


@router.get("/questions", response_model=list[QuestionOut])
async def list_questions(
    current_user: CurrentUser,
    db: Database = Depends(get_db),
) -> list[QuestionOut]:
    """Every question, unfiltered and unpaginated."""
    return [QuestionOut.from_document(doc) for doc in QuestionStore(db).list_all()]


@router.post("/questions", response_model=QuestionOut, status_code=status.HTTP_201_CREATED)
async def create_question(
    payload: QuestionCreate,
    current_user: CurrentUser,
    db: Database = Depends(get_db),
) -> QuestionOut:
    """Create one question from the interactive form."""
    if payload.correct_answer is not None:
        answer = IndexAnswer(payload.correct_answer)
    else:
        answer = TextAnswer(payload.answer)

    fields = payload.model_dump(mode="json", by_alias=True, exclude={"correct_answer"})
    normalized = normalize_question(fields, answer)
    if normalized.degraded:
        logger.warning("Question stored without a resolved answer", extra={"reasons": normalized.reasons})

    stored = QuestionStore(db).create(normalized.record)
    return QuestionOut.from_document(stored)


@router.delete("/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: str,
    current_user: CurrentUser,
    db: Database = Depends(get_db),
) -> Response:
    """Delete one question; unknown ids are not an error."""
    QuestionStore(db).delete_by_id(question_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/clear-database", response_model=ClearResult)
async def clear_database(
    current_user: CurrentUser,
    confirm: Annotated[str | None, Query(description="Must equal the configured confirmation phrase")] = None,
    db: Database = Depends(get_db),
) -> ClearResult:
    """Delete every question (requires the confirmation phrase)."""
    if confirm != settings.CLEAR_CONFIRMATION_PHRASE:
        raise confirmation_required("confirm")

    deleted = QuestionStore(db).delete_matching({})
    logger.warning("Question collection cleared", extra={"deleted_count": deleted, "by": current_user.get("email")})
    return ClearResult(
        message=f"Successfully cleared database. Deleted {deleted} questions.",
        deleted_count=deleted,
    )


@router.delete("/clear-questions", response_model=ClearResult)
async def clear_questions(
    current_user: CurrentUser,
    payload: Annotated[ClearQuestionsRequest | None, Body()] = None,
    db: Database = Depends(get_db),
) -> ClearResult:
    """Delete questions matching the filter; an empty filter needs confirmation."""
    payload = payload or ClearQuestionsRequest()
    query = build_delete_filter(
        subject=payload.subject,
        exam=payload.exam,
        difficulty=payload.difficulty,
        tags=payload.tags,
    )
    if not query and payload.confirm != settings.CLEAR_CONFIRMATION_PHRASE:
        raise confirmation_required("confirm")

    deleted = QuestionStore(db).delete_matching(query)
    return ClearResult(
        message=f"Successfully cleared questions with filter: {query}. Deleted {deleted} questions.",
        deleted_count=deleted,
        filter=query,
    )
