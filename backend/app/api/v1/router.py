"""API v1 router - includes all v1 endpoints."""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, bulk_upload, health, media, questions, statistics

api_router = APIRouter()

api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(questions.router)
api_router.include_router(bulk_upload.router)
api_router.include_router(statistics.router)
api_router.include_router(media.router)
