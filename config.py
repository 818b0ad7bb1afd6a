"""Environment-driven settings for the media database."""

import logging
import os
from typing import List, Literal, Optional, Tuple

from dotenv import load_dotenv  # Load variables from a .env file.
from pydantic import BaseModel

logger = logging.getLogger(__name__)

Environment = Literal["development", "production", "test"]

REQUIRED_VARS = ("MEDIA_DB_URL", "MEDIA_FILES_DIR")
OPTIONAL_VARS = ("MEDIA_ENV", "PORT")

ALLOWED_MEDIA_TYPES = ["jpg", "jpeg", "png", "gif", "mp4", "mp3", "pdf"]


class ConfigError(ValueError):
    """Raised when required configuration is missing or malformed."""


class DatabaseSettings(BaseModel):
    url: str
    echo: bool = False


class FilesSettings(BaseModel):
    directory: str
    allowed_types: List[str] = ALLOWED_MEDIA_TYPES
    max_size_mb: int = 500


class AppSettings(BaseModel):
    port: int = 3000
    environment: Environment = "development"


class Settings(BaseModel):
    database: DatabaseSettings
    files: FilesSettings
    app: AppSettings = AppSettings()


def async_database_url(url: str) -> str:
    """Rewrite a plain driver URL so SQLAlchemy picks the async driver."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def validate_environment() -> Tuple[bool, List[str]]:
    """Check required variables, warning about optional ones left at defaults."""
    errors = [
        f"Missing required environment variable: {name}"
        for name in REQUIRED_VARS
        if not os.getenv(name)
    ]
    for name in OPTIONAL_VARS:
        if not os.getenv(name):
            logger.warning("Optional environment variable %s not set, using default value", name)
    return not errors, errors


def load_settings(env_file: Optional[str] = None) -> Settings:
    load_dotenv(env_file)  # Pull values from .env into process environment.

    valid, errors = validate_environment()
    if not valid:
        raise ConfigError("; ".join(errors))

    environment = os.getenv("MEDIA_ENV", "development")
    if environment not in ("development", "production", "test"):
        raise ConfigError(f"MEDIA_ENV must be development, production or test, got {environment!r}")

    port = os.getenv("PORT", "3000")
    if not port.isdigit():
        raise ConfigError(f"PORT must be an integer, got {port!r}")

    files_dir = os.environ["MEDIA_FILES_DIR"]
    if not os.path.isdir(files_dir):
        logger.warning("Media files directory %s does not exist", files_dir)

    return Settings(
        database=DatabaseSettings(
            url=os.environ["MEDIA_DB_URL"],
            echo=environment == "development",
        ),
        files=FilesSettings(
            directory=files_dir,
            max_size_mb=100 if environment == "production" else 500,
        ),
        app=AppSettings(port=int(port), environment=environment),
    )
