"""Schema engine configuration loaded from environment variables."""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from schema_engine.models.revert import RevertMessages

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Settings(BaseSettings):
    """Engine settings loaded from environment variables with SCHEMA_ENGINE_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    debug: bool = False

    # Logging
    log_level: LogLevel = LogLevel.INFO
    structured_logging: bool = False

    # Default (English) revert messages, used when the caller does not
    # inject a localized table.
    cannot_revert_foreign_key: str = (
        "Cannot revert: The referenced table or columns no longer exist in the current schema."
    )
    cannot_revert_deleted_column: str = "Cannot revert: This column is referenced by a deleted foreign key."

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    def revert_messages(self) -> RevertMessages:
        return RevertMessages(
            cannot_revert_foreign_key=self.cannot_revert_foreign_key,
            cannot_revert_deleted_column=self.cannot_revert_deleted_column,
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info("Loaded schema engine settings (log_level=%s)", settings.log_level.value)

    return settings
