"""Authentication-related request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Payload for customer self-registration."""

    username: str = Field(min_length=3, max_length=128)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6, max_length=128)
    name: str | None = None
    phone: str | None = None


class LoginRequest(BaseModel):
    """Payload for login; ``login`` is a username or e-mail."""

    login: str
    password: str


class TokenResponse(BaseModel):
    """JWT response payload."""

    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """Public view of a user account."""

    id: int
    username: str
    email: str
    name: str | None = None
    phone: str | None = None
    role: str
    is_active: bool
    created_at: datetime
    last_login_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
