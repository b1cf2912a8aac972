"""Health and readiness endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pymongo.database import Database
from pymongo.errors import PyMongoError

from app.core.errors import get_request_id
from app.core.logging import get_logger
from app.db.mongo import get_db

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["ok"] = "ok"


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    status: Literal["ok", "down"]
    database: Literal["ok", "down"]
    request_id: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Returns 200 if the API process is running.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Verifies that the document store answers a ping.",
)
async def readiness_check(request: Request, db: Database = Depends(get_db)):
    request_id = get_request_id(request)
    try:
        db.command("ping")
    except PyMongoError as e:
        logger.warning("Readiness check failed", extra={"request_id": request_id, "error": str(e)})
        body = ReadinessResponse(status="down", database="down", request_id=request_id)
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body.model_dump())
    return ReadinessResponse(status="ok", database="ok", request_id=request_id)
