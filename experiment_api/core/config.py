"""Application configuration management.

This module handles environment detection, .env file loading and the
settings consumed by the experiment API, including the external link
signing secret and the document store location.
"""

import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
)

from experiment_api.constants.auth import (
    JWT_ALGORITHM_DEFAULT,
    LINK_TTL_SECONDS_DEFAULT,
)


# Define environment types
class Environment(str, Enum):
    """Application environment types.

    Defines the possible environments the application can run in:
    development, staging, production, and test.
    """

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


def get_environment() -> Environment:
    """Get the current environment.

    Returns:
        Environment: The current environment (development, staging, production, or test)
    """
    match os.getenv("APP_ENV", "development").lower():
        case "production" | "prod":
            return Environment.PRODUCTION
        case "staging" | "stage":
            return Environment.STAGING
        case "test":
            return Environment.TEST
        case _:
            return Environment.DEVELOPMENT


def load_env_file():
    """Load .env file."""
    if Path(".env").exists():
        load_dotenv(".env")


load_env_file()


class Settings(BaseSettings):
    """Application settings.

    Every field can be overridden by an environment variable of the same name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Application Settings
    APP_ENV: Environment = Field(default_factory=get_environment)
    PROJECT_NAME: str = Field(default="Experiment Session API")
    VERSION: str = Field(default="1.0.0")
    DESCRIPTION: str = Field(
        default="Read-only access to experiment session records via signed external links",
    )
    API_PREFIX: str = Field(default="/api")

    # CORS Settings
    CORS_ORIGINS: str = Field(default="*")

    @property
    def CORS_ORIGINS_LIST(self) -> list[str]:
        """Parse CORS_ORIGINS string into a list."""
        origins = [origin.strip() for origin in self.CORS_ORIGINS.split(",")]
        origins = [origin for origin in origins if origin]
        return origins or ["*"]

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="console")

    # External link signing. An empty secret disables signing and verification.
    EXTERNAL_LINK_SECRET: str = Field(default="")
    LINK_JWT_ALGORITHM: str = Field(default=JWT_ALGORITHM_DEFAULT)
    LINK_DEFAULT_TTL_SECONDS: int = Field(default=LINK_TTL_SECONDS_DEFAULT, gt=0)

    # Firebase / Firestore Configuration
    FIREBASE_PROJECT_ID: str = Field(default="")
    FIREBASE_CREDENTIALS_PATH: str = Field(default="")
    EXPERIMENTS_COLLECTION: str = Field(default="experiments")

    # Rate Limiting
    RATE_LIMIT_DEFAULT: str = Field(default="1000 per day,200 per hour")
    RATE_LIMIT_EXPERIMENTS: str = Field(default="120 per minute")
    RATE_LIMIT_SIGN: str = Field(default="30 per minute")
    RATE_LIMIT_ROOT: str = Field(default="50 per minute")

    @property
    def RATE_LIMIT_ENDPOINTS(self) -> dict:
        """Get rate limit configuration for endpoints."""
        return {
            "default": [limit.strip() for limit in self.RATE_LIMIT_DEFAULT.split(",")],
            "experiments": [self.RATE_LIMIT_EXPERIMENTS],
            "sign": [self.RATE_LIMIT_SIGN],
            "root": [self.RATE_LIMIT_ROOT],
        }

    @property
    def link_signing_enabled(self) -> bool:
        """Whether a signing secret is configured."""
        return bool(self.EXTERNAL_LINK_SECRET)


# Create settings instance
settings = Settings()
