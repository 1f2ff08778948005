"""Centralized settings for testkit.

All fields can be set through ``TESTKIT_*`` environment variables (for
example ``TESTKIT_MISSING_START_POLICY=absent``) or a ``.env`` file.

Tags:
    testkit, configuration, settings, pydantic
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from testkit.core.errors import ConfigError


class MissingStartPolicy(str, Enum):
    """How a ``FINISHED`` event without a recorded start is reconstructed.

    TERMINAL: start is the terminal event's timestamp (zero duration)
    ABSENT:   start is ``None`` and so is the duration
    """

    TERMINAL = "terminal"
    ABSENT = "absent"


class TestkitSettings(BaseSettings):
    """Testkit configuration."""

    __test__ = False

    model_config = SettingsConfigDict(
        env_prefix="TESTKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console", description="json or console")

    # ── Reconstruction ───────────────────────────────────────────
    missing_start_policy: MissingStartPolicy = Field(default=MissingStartPolicy.TERMINAL)

    # ── Diagnostics ──────────────────────────────────────────────
    debug_indent: str = Field(default="\t", description="Prefix for each debug line")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return value

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in {"json", "console"}:
            raise ValueError(f"unknown log format: {value}")
        return value


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, TestkitSettings] = {}


def get_settings(*, _force_reload: bool = False) -> TestkitSettings:
    """Load, validate, and cache a :class:`TestkitSettings` instance.

    Raises:
        ConfigError: If an environment value fails validation.
    """
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    try:
        settings = TestkitSettings()
    except ValidationError as exc:
        raise ConfigError("Invalid TESTKIT_* settings", cause=exc) from exc
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Drop cached settings (used by tests)."""
    _settings_cache.clear()


__all__ = [
    "MissingStartPolicy",
    "TestkitSettings",
    "get_settings",
    "clear_settings_cache",
]
