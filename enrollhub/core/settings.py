"""Application settings using Pydantic Settings for typed configuration.

This module centralizes all configuration and provides type-safe access to settings.
Settings are loaded from environment variables with sensible defaults.
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from enrollhub.auth.tokens import TokenConfig


class Settings(BaseSettings):
    """Application-wide settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env_name: str = Field(default="development", alias="ENV_NAME")

    # Database
    database_url: str = Field(alias="DATABASE_URL")

    # Admin panel
    session_secret_key: str = Field(alias="SESSION_SECRET_KEY")
    admin_username: str = Field(alias="ADMIN_USERNAME")
    admin_password: str = Field(alias="ADMIN_PASSWORD")

    # HTTP
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    client_url: str = Field(default="http://localhost:3000", alias="CLIENT_URL")
    server_url: str = Field(default="http://localhost:8000", alias="SERVER_URL")
    api_prefix: str = Field(default="/api/v1", alias="API_PREFIX")

    # Email (Resend)
    resend_api_key: str | None = Field(default=None, alias="RESEND_API_KEY")
    email_from: str = Field(default="noreply@resend.dev", alias="EMAIL_FROM")

    # Tokens
    activation_secret: str = Field(alias="ACTIVATION_SECRET")
    activation_expires_minutes: int = Field(
        default=30, alias="ACTIVATION_EXPIRES_MINUTES", ge=1
    )
    jwt_secret_key: str = Field(alias="JWT_SECRET_KEY")
    jwt_expires_days: int = Field(default=5, alias="JWT_EXPIRES_DAYS", ge=1, le=30)
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    reset_token_expires_minutes: int = Field(
        default=15, alias="RESET_TOKEN_EXPIRES_MINUTES", ge=1
    )
    password_hash_rounds: int = Field(
        default=10, alias="PASSWORD_HASH_ROUNDS", ge=4, le=31
    )

    # Image store (Cloudinary)
    cloudinary_cloud_name: str | None = Field(
        default=None, alias="CLOUDINARY_CLOUD_NAME"
    )
    cloudinary_api_key: str | None = Field(default=None, alias="CLOUDINARY_API_KEY")
    cloudinary_api_secret: str | None = Field(
        default=None, alias="CLOUDINARY_API_SECRET"
    )
    avatar_folder: str = Field(default="avatars", alias="AVATAR_FOLDER")

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        origins = []
        for o in self.cors_origins.split(","):
            trimmed = o.strip()
            if trimmed:
                origins.append(trimmed)
        return origins

    @computed_field
    @property
    def is_secure_cookie(self) -> bool:
        """Determine if cookies should be set with Secure flag."""
        return self.env_name.lower() not in {"dev", "development", "local", "test"}

    @computed_field
    @property
    def activation_expires_in(self) -> timedelta:
        return timedelta(minutes=self.activation_expires_minutes)

    @computed_field
    @property
    def session_expires_in(self) -> timedelta:
        """Get session token lifetime as timedelta."""
        return timedelta(days=self.jwt_expires_days)

    @computed_field
    @property
    def reset_token_expires_in(self) -> timedelta:
        return timedelta(minutes=self.reset_token_expires_minutes)

    @property
    def api_base_url(self) -> str:
        """Public base URL of the versioned API (used in emailed links)."""
        return f"{self.server_url.rstrip('/')}{self.api_prefix}"

    @property
    def token_config(self) -> TokenConfig:
        """Signing configuration handed to the token issuer."""
        return TokenConfig(
            activation_secret=self.activation_secret,
            activation_ttl=self.activation_expires_in,
            session_secret=self.jwt_secret_key,
            session_ttl=self.session_expires_in,
            algorithm=self.jwt_algorithm,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
