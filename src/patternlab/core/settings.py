"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `PATTERNLAB_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    history_max_size : int
        Default bound of the undo/redo history; maps from
        `PATTERNLAB_HISTORY_MAX_SIZE`.
    autosave_capacity : int
        Default size of the auto-save ring; maps from
        `PATTERNLAB_AUTOSAVE_CAPACITY`.
    preview_length : int
        Number of characters kept in history previews; maps from
        `PATTERNLAB_PREVIEW_LENGTH`.
    """

    environment: EnvName = Field(default="dev", alias="PATTERNLAB_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    history_max_size: int = Field(default=100, ge=1, alias="PATTERNLAB_HISTORY_MAX_SIZE")
    autosave_capacity: int = Field(default=5, ge=1, alias="PATTERNLAB_AUTOSAVE_CAPACITY")
    preview_length: int = Field(default=30, ge=1, alias="PATTERNLAB_PREVIEW_LENGTH")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    @property
    def is_prod(self) -> bool:
        """Return True if running in the production environment."""
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    We keep this behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("PATTERNLAB_ENV", "dev")
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "patternlab") -> logging.Logger:
    """Return a process-global logger configured to the current log level.

    The level is re-read through :func:`load_settings` on every call so a
    `cache_clear()` in tests is honoured by loggers created afterwards.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
