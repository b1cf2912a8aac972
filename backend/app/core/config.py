"""Application settings and configuration."""

from typing import Literal

from pydantic import Field, model_validator  # type: ignore
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore

_LOCAL_MONGODB_URI = "mongodb://localhost:27017"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    ENV: Literal["dev", "staging", "prod", "test"] = Field(default="dev")
    PROJECT_NAME: str = Field(default="Preplens Admin API")

    # API (empty prefix: admin clients call /questions, /bulk-upload, ... directly)
    API_PREFIX: str = Field(default="")

    # Document store
    MONGODB_URI: str = Field(default=_LOCAL_MONGODB_URI)
    MONGODB_DB: str = Field(default="preplens")
    MONGODB_TIMEOUT_MS: int = Field(default=5000)
    MONGODB_ENSURE_INDEXES: bool = Field(default=True)

    # CORS - Accept string or list, will be normalized to list
    CORS_ORIGINS: str | list[str] = Field(default="http://localhost:3000,http://localhost:3001")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Security - JWT
    JWT_SECRET: str | None = Field(default="changeme")
    JWT_ALG: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=1440)  # 1 day
    ADMIN_EMAIL: str = Field(default="admin@preplens.com")
    ALLOW_ADMIN_REGISTRATION: bool = Field(default=False)

    # Bulk import
    IMPORT_MAX_ROWS: int = Field(default=50)
    MAX_BODY_BYTES_IMPORT: int = Field(default=10 * 1024 * 1024)
    DEFAULT_MARKS: int = Field(default=4)
    DEFAULT_TIME_LIMIT: int = Field(default=60)  # seconds

    # Destructive operations
    CLEAR_CONFIRMATION_PHRASE: str = Field(default="DELETE ALL QUESTIONS")

    # Image storage (S3)
    MAX_IMAGE_BYTES: int = Field(default=50 * 1024 * 1024)
    AWS_ACCESS_KEY_ID: str | None = Field(default=None)
    AWS_SECRET_ACCESS_KEY: str | None = Field(default=None)
    AWS_REGION: str | None = Field(default=None)
    S3_BUCKET_NAME: str | None = Field(default=None)
    S3_PUBLIC_BASE_URL: str | None = Field(default=None)  # e.g. CDN in front of the bucket
    IMAGE_PLACEHOLDER_URL: str = Field(
        default="https://via.placeholder.com/400x300/cccccc/666666?text=Image+Uploaded"
    )

    @model_validator(mode="before")
    @classmethod
    def parse_cors_origins(cls, data):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(data, dict) and isinstance(data.get("CORS_ORIGINS"), str):
            data["CORS_ORIGINS"] = [
                origin.strip() for origin in data["CORS_ORIGINS"].split(",") if origin.strip()
            ]
        return data

    def __init__(self, **kwargs):
        """Validate settings on initialization."""
        super().__init__(**kwargs)
        # Values read from the environment bypass the before-validator
        if isinstance(self.CORS_ORIGINS, str):
            object.__setattr__(
                self,
                "CORS_ORIGINS",
                [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()],
            )
        # Fail fast in production if critical vars are missing
        if self.ENV == "prod":
            if not self.MONGODB_URI or self.MONGODB_URI == _LOCAL_MONGODB_URI:
                raise ValueError("MONGODB_URI must be set in production")
            if not self.JWT_SECRET or self.JWT_SECRET == "changeme":
                raise ValueError("JWT_SECRET must be set in production")


# Global settings instance
settings = Settings()
