"""Image upload endpoint for question diagrams."""

from fastapi import APIRouter, File, UploadFile, status

from app.core.app_exceptions import AppError
from app.core.config import settings
from app.core.dependencies import CurrentUser
from app.core.logging import get_logger
from app.schemas.question import ImageUploadResponse
from app.services.image_storage import upload_image

logger = get_logger(__name__)

router = APIRouter(tags=["Media"])

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp", "image/svg+xml"}


@router.post(
    "/upload-image",
    response_model=ImageUploadResponse,
    summary="Upload image",
    description="Stores an image in object storage; falls back to a placeholder URL if storage fails.",
)
async def upload_question_image(
    current_user: CurrentUser,
    image: UploadFile | None = File(None),
) -> ImageUploadResponse:
    if image is None:
        raise AppError(status.HTTP_400_BAD_REQUEST, "NO_FILE", "No file uploaded")

    if image.content_type not in ALLOWED_IMAGE_TYPES:
        raise AppError(
            status.HTTP_400_BAD_REQUEST,
            "UNSUPPORTED_MEDIA_TYPE",
            f"File type {image.content_type} not allowed",
            {"allowed": sorted(ALLOWED_IMAGE_TYPES)},
        )

    content = await image.read()
    if len(content) > settings.MAX_IMAGE_BYTES:
        raise AppError(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            "PAYLOAD_TOO_LARGE",
            "File too large",
            {"limit": settings.MAX_IMAGE_BYTES},
        )

    logger.info(
        "Image upload attempted",
        extra={"upload_filename": image.filename, "size_bytes": len(content)},
    )
    return ImageUploadResponse(url=upload_image(content, image.filename, image.content_type))
