"""
Application configuration using Pydantic Settings.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import field_validator


# List of known insecure default secrets that should never be used
INSECURE_DEFAULTS = {
    "your-super-secret-key-change-in-production",
    "secret",
    "changeme",
    "test",
    "dev",
    "development",
    "password",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "JWT Pizza API"
    VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./pizza.db"
    CREATE_TABLES_ON_STARTUP: bool = True

    # JWT Configuration
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Pizza factory
    FACTORY_URL: str = "https://pizza-factory.cs329.click"
    FACTORY_API_KEY: str = ""
    FACTORY_TIMEOUT_SECONDS: float = 10.0

    # Listing
    PAGE_SIZE: int = 10

    # Seeded on first start when the user table is empty
    DEFAULT_ADMIN_NAME: str = "常用名字"
    DEFAULT_ADMIN_EMAIL: str = "a@jwt.com"
    DEFAULT_ADMIN_PASSWORD: str = "admin"

    @field_validator("JWT_SECRET_KEY")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """
        Validate JWT secret key is secure.

        Requirements:
        - At least 32 characters
        - Not a known insecure default
        """
        if v.lower() in INSECURE_DEFAULTS:
            raise ValueError(
                "JWT_SECRET_KEY is set to an insecure default value. "
                "Please set a strong secret key via environment variable. "
                "Generate one with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )

        if len(v) < 32:
            raise ValueError(
                f"JWT_SECRET_KEY must be at least 32 characters long (got {len(v)}). "
                "Generate a secure key with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )

        return v

    @field_validator("FACTORY_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
