"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field, field_validator


class LoginRequest(BaseModel):
    """Login request schema; the email is compared exactly as sent."""

    email: str = Field(..., max_length=320)
    password: str | None = Field(None, max_length=128)


class TokenResponse(BaseModel):
    """Signed access token."""

    token: str


class RegisterRequest(BaseModel):
    """Admin registration request schema."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower().strip()


class MessageResponse(BaseModel):
    message: str
