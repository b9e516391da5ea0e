"""Runtime configuration management using Pydantic Settings.

This module defines the `Settings` class, which loads configuration parameters
from `PROMISIFY_`-prefixed environment variables and a `.env` file. The
traversal itself is a pure function of its arguments; settings only tune the
surroundings (logging verbosity, extra callback names, CLI wait time).

The `get_settings` function provides a cached, singleton instance of the
configuration, ensuring consistent settings throughout the process.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict


class Settings(BaseSettings):
    """Defines all tunable configuration parameters.

    Values are read from `PROMISIFY_<FIELD>` environment variables or a `.env`
    file in the working directory. Unknown variables are ignored.
    """

    model_config = _SettingsConfigDict(
        env_prefix="PROMISIFY_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Logging & runtime behavior
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    DEBUG: bool = Field(
        default=False,
        description="Log every classification decision at INFO instead of DEBUG",
    )

    # ---------------- Callback detection -----------------
    # Use Any type to prevent Pydantic Settings JSON decoding; validator converts to list[str]
    CALLBACK_NAMES_EXTRA: Any = Field(
        default_factory=list,
        description=(
            "Comma-separated list of additional callback parameter names honoured "
            "by every promisify call in this process. Matching stays exact and "
            "case-sensitive. The shared callbacks list itself is not modified."
        ),
    )

    # ---------------- CLI -----------------
    CALL_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Seconds the `call` command waits for a deferred value to settle",
    )

    @field_validator("CALLBACK_NAMES_EXTRA", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | list[str] | None) -> list[str]:
        """Parse comma-separated string into list of stripped strings.

        Supports both direct list input (from code/tests) and comma-separated
        string input (from environment variables). Empty strings result in
        empty list.
        """
        if isinstance(v, list):
            return [s.strip() for s in v if isinstance(s, str) and s.strip()]
        if isinstance(v, str):
            if not v.strip():
                return []
            return [s.strip() for s in v.split(",") if s.strip()]
        return []

    @field_validator("CALL_TIMEOUT_SECONDS")
    @classmethod
    def positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("CALL_TIMEOUT_SECONDS must be positive")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached, singleton instance of the settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
