"""Tests for testkit.core.settings — TestkitSettings + get_settings."""

from __future__ import annotations

import pytest

from testkit.core.errors import ConfigError
from testkit.core.settings import (
    MissingStartPolicy,
    TestkitSettings,
    clear_settings_cache,
    get_settings,
)


class TestDefaults:
    def test_default_log_level(self):
        assert TestkitSettings().log_level == "INFO"

    def test_default_log_format(self):
        assert TestkitSettings().log_format == "console"

    def test_default_missing_start_policy(self):
        assert TestkitSettings().missing_start_policy is MissingStartPolicy.TERMINAL

    def test_default_debug_indent(self):
        assert TestkitSettings().debug_indent == "\t"


class TestEnvOverride:
    def test_env_overrides_policy(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TESTKIT_MISSING_START_POLICY", "absent")
        assert TestkitSettings().missing_start_policy is MissingStartPolicy.ABSENT

    def test_log_level_is_normalized(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TESTKIT_LOG_LEVEL", "debug")
        assert TestkitSettings().log_level == "DEBUG"

    def test_invalid_value_raises_config_error(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TESTKIT_LOG_FORMAT", "xml")
        with pytest.raises(ConfigError):
            get_settings()


class TestCaching:
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_force_reload(self, monkeypatch: pytest.MonkeyPatch):
        first = get_settings()
        monkeypatch.setenv("TESTKIT_DEBUG_INDENT", "  ")
        assert get_settings() is first
        reloaded = get_settings(_force_reload=True)
        assert reloaded.debug_indent == "  "

    def test_clear_cache(self):
        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first
