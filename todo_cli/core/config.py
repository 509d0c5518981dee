"""Configuration management for todo-cli."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TODO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage Configuration
    storage_path: Path | None = Field(
        default=None,
        description="Path of the tasks JSON document (defaults to ~/.todo/tasks.json)",
    )

    # Logging Configuration
    log_level: str = Field(default="WARNING", description="Minimum level for standard logging records")
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="local", description="Environment name reported to Logfire")

    def resolve_storage_path(self, override: str | Path | None = None) -> Path:
        """Return the storage file path to use.

        Priority: explicit override > TODO_STORAGE_PATH > per-user default.
        """
        if override:
            return Path(override).expanduser()
        if self.storage_path:
            return Path(self.storage_path).expanduser()
        return default_storage_path()


# Application Constants
class Constants:
    """Application-wide constants."""

    APP_NAME: str = "todo-cli"
    APP_VERSION: str = "1.0.0"

    # Storage
    STORAGE_DIR_NAME: str = ".todo"
    STORAGE_FILE_NAME: str = "tasks.json"
    BACKUP_SUFFIX: str = ".backup"
    JSON_INDENT: int = 2

    # Date formats
    DATE_FORMAT: str = "%Y-%m-%d"
    DATETIME_FORMAT: str = "%Y-%m-%d %H:%M"
    TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S"
    DISPLAY_DATE_FORMAT: str = "%b %d, %Y"
    SHORT_DATE_FORMAT: str = "%b %d"

    # Export
    DEFAULT_CSV_FILE: str = "tasks.csv"
    DEFAULT_TXT_FILE: str = "tasks.txt"

    # Rendering
    TITLE_COLUMN_WIDTH: int = 40
    RULE_WIDTH: int = 60
    PROGRESS_BAR_LENGTH: int = 30
    PROGRESS_GOOD_PERCENT: float = 75.0
    PROGRESS_FAIR_PERCENT: float = 50.0

    # Confirmation answers accepted for destructive actions
    CONFIRM_ANSWERS: frozenset[str] = frozenset({"yes", "y"})


def default_storage_path() -> Path:
    """Per-user storage location, falling back to the working directory."""
    try:
        home = Path.home()
    except RuntimeError:
        return Path(Constants.STORAGE_FILE_NAME)
    return home / Constants.STORAGE_DIR_NAME / Constants.STORAGE_FILE_NAME


def get_settings() -> Settings:
    """Build application settings from the current environment."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
