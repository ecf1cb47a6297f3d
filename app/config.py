# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.MONGO_URI)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, catching configuration
# errors early rather than at runtime.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    The database store and token service are built from one Settings
    instance at startup (see app.main.lifespan).
    """

    # -------------------------------------------------------------------------
    # MongoDB Configuration
    # -------------------------------------------------------------------------

    MONGO_URI: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string"
    )

    MONGO_DB_NAME: str = Field(
        default="devnet",
        min_length=1,
        description="Database holding the users, profiles and posts collections"
    )

    MONGO_TIMEOUT_MS: int = Field(
        default=5000,
        ge=100,
        description="Server selection timeout in milliseconds"
    )

    # -------------------------------------------------------------------------
    # Access Tokens
    # -------------------------------------------------------------------------

    JWT_SECRET: str = Field(
        default="dev-secret-key-change-in-production",
        min_length=16,
        description="Shared secret for signing access tokens"
    )

    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256",
        description="HMAC algorithm used to sign access tokens"
    )

    JWT_EXPIRES_SECONDS: int = Field(
        default=360000,
        ge=60,
        description="Lifetime of an issued access token in seconds"
    )

    # -------------------------------------------------------------------------
    # GitHub Integration
    # -------------------------------------------------------------------------

    GITHUB_API_URL: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API"
    )

    GITHUB_TOKEN: str | None = Field(
        default=None,
        description="Optional token to raise the GitHub rate limit"
    )

    GITHUB_REPO_LIMIT: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Number of repositories shown on a profile"
    )

    GITHUB_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for GitHub requests"
    )

    # -------------------------------------------------------------------------
    # Avatars
    # -------------------------------------------------------------------------

    GRAVATAR_SIZE: int = Field(default=200, ge=1, le=2048)
    GRAVATAR_RATING: Literal["g", "pg", "r", "x"] = Field(default="pg")
    GRAVATAR_DEFAULT: str = Field(default="mm")

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Treat empty variables as unset
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
