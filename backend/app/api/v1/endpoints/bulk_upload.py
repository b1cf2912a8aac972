"""Bulk question upload from spreadsheets, plus the template download."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile, status
from pymongo.database import Database

from app.core.app_exceptions import AppError
from app.core.config import settings
from app.core.dependencies import CurrentUser
from app.core.etag import check_if_none_match, compute_etag, create_not_modified_response
from app.core.logging import get_logger
from app.db.mongo import get_db
from app.schemas.question import BulkUploadResult, DegradedRow, QuestionOut
from app.services.importer import RowMapper, SpreadsheetParseError, SpreadsheetParser
from app.services.importer.template import TEMPLATE_FILENAME, build_template_csv
from app.services.normalizer import BatchOverrides, normalize_question
from app.services.question_store import QuestionStore

logger = get_logger(__name__)

router = APIRouter(tags=["Bulk upload"])


@router.post("/bulk-upload", response_model=BulkUploadResult)
async def bulk_upload(
    current_user: CurrentUser,
    file: UploadFile | None = File(None),
    marks: Annotated[str | None, Form()] = None,
    time_limit: Annotated[str | None, Form(alias="timeLimit")] = None,
    blooms: Annotated[str | None, Form()] = None,
    question_type: Annotated[str | None, Form(alias="type")] = None,
    db: Database = Depends(get_db),
) -> BulkUploadResult:
    """Import every row of the first sheet as one batch.

    Rows whose answer cannot be resolved are still stored and listed under
    ``degraded``. A file that cannot be parsed, or has more than
    IMPORT_MAX_ROWS rows, stores nothing.
    """
    if file is None:
        raise AppError(status.HTTP_400_BAD_REQUEST, "NO_FILE", "No file uploaded")

    file.file.seek(0, 2)
    file_size = file.file.tell()
    file.file.seek(0)
    if file_size > settings.MAX_BODY_BYTES_IMPORT:
        raise AppError(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            "PAYLOAD_TOO_LARGE",
            "File too large",
            {"limit": settings.MAX_BODY_BYTES_IMPORT},
        )

    file_content = await file.read()
    parser = SpreadsheetParser(filename=file.filename, content_type=file.content_type)
    try:
        rows = parser.parse(file_content)
    except SpreadsheetParseError as e:
        logger.warning("Bulk upload parse failed", extra={"upload_filename": file.filename, "error": str(e)})
        raise AppError(status.HTTP_400_BAD_REQUEST, "PARSE_ERROR", "Failed to parse file", str(e)) from e

    max_rows = settings.IMPORT_MAX_ROWS
    if len(rows) > max_rows:
        raise AppError(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "VALIDATION_LIMIT_EXCEEDED",
            "Import row count exceeds maximum allowed",
            {"limit": max_rows, "rows": len(rows)},
        )

    overrides = BatchOverrides(marks=marks, time_limit=time_limit, blooms=blooms, type=question_type)
    mapper = RowMapper()
    records = []
    degraded: list[DegradedRow] = []
    for row_number, raw_row in rows:
        fields, answer = mapper.map_row(raw_row)
        normalized = normalize_question(fields, answer, overrides)
        records.append(normalized.record)
        if normalized.degraded:
            degraded.append(DegradedRow(row=row_number, reasons=normalized.reasons))

    inserted = QuestionStore(db).insert_batch(records)

    logger.info(
        "Bulk upload completed",
        extra={
            "upload_filename": file.filename,
            "added": len(inserted),
            "degraded": len(degraded),
            "by": current_user.get("email"),
        },
    )
    return BulkUploadResult(
        added=len(inserted),
        questions=[QuestionOut.from_document(doc) for doc in inserted],
        degraded=degraded,
    )


@router.get("/template")
async def download_template(request: Request) -> Response:
    """Download the CSV template. Supports ETag/If-None-Match for caching."""
    csv_content = build_template_csv()
    etag = compute_etag(csv_content)
    if check_if_none_match(request, etag):
        return create_not_modified_response(etag)

    return Response(
        content=csv_content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"',
            "ETag": etag,
        },
    )
