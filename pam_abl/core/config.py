"""
Application configuration settings.

Central configuration module using Pydantic BaseSettings with environment variable support.
Loads from .env file and environment variables.
"""
import json
from functools import lru_cache
from pathlib import Path
from typing import List, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if it exists (python-dotenv)
env_path = Path(".env")
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


def _parse_list(v):
    """Parse a list setting given as JSON array or comma-separated string."""
    if isinstance(v, str):
        try:
            return json.loads(v)
        except json.JSONDecodeError:
            return [item.strip() for item in v.split(",") if item.strip()]
    return v


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # App settings
    APP_NAME: str = "pam_abl config validator"
    APP_ENV: str = Field(default="local")
    DEBUG: bool = Field(default=False)

    # CORS settings
    CORS_ORIGINS: Union[str, List[str]] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:8000"],
    )

    @field_validator("CORS_ORIGINS")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from string or list."""
        return _parse_list(v)

    # pam_abl configuration files
    DEFAULT_CONFIG_PATH: str = Field(
        default="/etc/security/pam_abl.conf",
        description="Configuration file used when no config= module argument is given",
    )
    ALLOWED_CONFIG_DIRS: Union[str, List[str]] = Field(
        default_factory=lambda: ["/etc/security"],
        description="Directories config= arguments may point into (JSON list or comma-separated)",
    )
    MAX_CONFIG_SIZE: int = Field(
        default=1024 * 1024, description="Max configuration file size in bytes (1MB default)"
    )

    @field_validator("ALLOWED_CONFIG_DIRS")
    @classmethod
    def parse_allowed_config_dirs(cls, v):
        """Parse ALLOWED_CONFIG_DIRS from string or list."""
        return _parse_list(v)

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    LOG_DIR: str = Field(default="logs")
    LOG_TO_FILE: bool = Field(default=True)


# Create global settings instance
@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

settings = get_settings()
