"""Dashboard statistics endpoint."""

from fastapi import APIRouter, Depends
from pymongo.database import Database

from app.core.dependencies import CurrentUser
from app.db.mongo import get_db
from app.schemas.question import StatisticsOut
from app.services.statistics import compute_statistics

router = APIRouter(tags=["Statistics"])


@router.get("/statistics", response_model=StatisticsOut)
async def get_statistics(
    current_user: CurrentUser,
    db: Database = Depends(get_db),
) -> StatisticsOut:
    """Counts by subject, exam and difficulty plus solution/image coverage."""
    return StatisticsOut.model_validate(compute_statistics(db))
