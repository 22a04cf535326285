"""Authentication configuration."""

from pydantic import BaseModel, Field


class AuthConfig(BaseModel):
    """
    Authentication configuration.

    Tokens never expire unless `token_expiry_hours` is set; logout is the
    normal way a token ends.
    """

    # Access tokens
    token_bytes: int = Field(
        default=40,
        description="Random bytes behind each access token",
        ge=32,
        le=128,
    )
    token_expiry_hours: int | None = Field(
        default=None,
        description="Token lifetime in hours (None = valid until revoked)",
        ge=1,
    )
    touch_last_used: bool = Field(
        default=True,
        description="Record last_used_at on every successful validation",
    )
    default_device_name: str = Field(
        default="api_token",
        description="Token name used when the client sends no device_name",
        min_length=1,
        max_length=255,
    )

    # Passwords
    bcrypt_rounds: int = Field(
        default=12,
        description="bcrypt cost factor (log2 rounds)",
        ge=4,
        le=15,
    )
