"""Authentication endpoints."""

from fastapi import APIRouter, Depends, status
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from app.core.app_exceptions import AppError, unauthorized
from app.core.config import settings
from app.core.logging import get_logger
from app.core.security import create_access_token, hash_password
from app.db.mongo import get_db, users_collection
from app.models.user import UserRole
from app.schemas.auth import LoginRequest, MessageResponse, RegisterRequest, TokenResponse

logger = get_logger(__name__)

router = APIRouter()

# Subject claim for tokens issued through the fixed admin login
ADMIN_SUBJECT = "devadmin"


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log in",
    description="Issues a one-day access token for the configured admin email.",
)
async def login(payload: LoginRequest) -> TokenResponse:
    """Only ADMIN_EMAIL is accepted; the password is not checked."""
    if payload.email != settings.ADMIN_EMAIL:
        logger.info("Login rejected")
        raise unauthorized("Invalid credentials")

    token = create_access_token(ADMIN_SUBJECT, payload.email, UserRole.ADMIN.value)
    logger.info("Admin login", extra={"email": payload.email})
    return TokenResponse(token=token)


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register admin",
    description="Bootstrap endpoint for creating an admin user; disabled unless ALLOW_ADMIN_REGISTRATION.",
)
async def register(payload: RegisterRequest, db: Database = Depends(get_db)) -> MessageResponse:
    if not settings.ALLOW_ADMIN_REGISTRATION:
        raise AppError(status.HTTP_404_NOT_FOUND, "NOT_FOUND", "Not Found")

    try:
        users_collection(db).insert_one(
            {
                "email": payload.email,
                "password": hash_password(payload.password),
                "role": UserRole.ADMIN.value,
            }
        )
    except DuplicateKeyError:
        raise AppError(status.HTTP_400_BAD_REQUEST, "USER_EXISTS", "User already exists") from None

    logger.info("Admin user registered", extra={"email": payload.email})
    return MessageResponse(message="Admin user created")
