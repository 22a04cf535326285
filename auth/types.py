"""Pydantic models for auth domain."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator


class User(BaseModel):
    """A registered user, as exposed to clients. Never carries the password hash."""

    id: UUID
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserCredentials(User):
    """User row including the stored bcrypt hash. Internal only."""

    password_hash: str

    def public(self) -> User:
        return User.model_validate(self.model_dump(exclude={"password_hash"}))


class AccessToken(BaseModel):
    """Stored record of an issued bearer token. Holds no raw token value."""

    id: UUID
    user_id: UUID
    name: str = Field(..., description="Device label chosen by the client")
    created_at: datetime
    last_used_at: datetime | None = None
    expires_at: datetime | None = None


class IssuedToken(BaseModel):
    """A freshly issued token: the only time the raw value is available."""

    plain_text_token: str
    access_token: AccessToken


class AuthenticatedUser(BaseModel):
    """Identity resolved from a bearer token for one request."""

    user: User
    access_token: AccessToken


class AuthTokenResponse(BaseModel):
    """Response body for register and login."""

    token: str
    user: User


class RegisterRequest(BaseModel):
    """Request payload for registration."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    # Declared before password so the match check can report under `password`
    password_confirmation: str
    password: str = Field(..., min_length=8)
    device_name: str | None = Field(None, max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("The name field is required.")
        return value

    @field_validator("password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        confirmation = info.data.get("password_confirmation")
        if confirmation is not None and value != confirmation:
            raise ValueError("The password confirmation does not match.")
        return value


class LoginRequest(BaseModel):
    """Request payload for login."""

    email: EmailStr
    password: str = Field(..., min_length=1)
    device_name: str | None = Field(None, max_length=255)
