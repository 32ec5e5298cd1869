# =============================================================================
# test_config.py - Parser Configuration Tests
# =============================================================================
# Tests for ParserOptions, environment overrides and the default options.
# =============================================================================

import pytest
from p4lite.config import (
    ParserOptions,
    get_default_options,
    set_default_options,
    log_level_from_env,
)


class TestParserOptions:
    """Test option defaults and validation."""

    def test_defaults(self):
        options = ParserOptions()
        assert options.allow_comments is False
        assert options.max_nesting_depth == 64
        assert options.default_filename == "<input>"

    def test_non_positive_depth_rejected(self):
        with pytest.raises(ValueError):
            ParserOptions(max_nesting_depth=0)


class TestFromEnv:
    """Test environment variable overrides."""

    def test_no_environment(self):
        assert ParserOptions.from_env() == ParserOptions()

    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_allow_comments_true(self, monkeypatch, value):
        monkeypatch.setenv("P4LITE_ALLOW_COMMENTS", value)
        assert ParserOptions.from_env().allow_comments is True

    def test_allow_comments_false(self, monkeypatch):
        monkeypatch.setenv("P4LITE_ALLOW_COMMENTS", "no")
        assert ParserOptions.from_env().allow_comments is False

    def test_max_nesting_depth(self, monkeypatch):
        monkeypatch.setenv("P4LITE_MAX_NESTING_DEPTH", "12")
        assert ParserOptions.from_env().max_nesting_depth == 12

    @pytest.mark.parametrize("value", ["deep", "0", "-5"])
    def test_invalid_depth_ignored(self, monkeypatch, value):
        monkeypatch.setenv("P4LITE_MAX_NESTING_DEPTH", value)
        assert ParserOptions.from_env().max_nesting_depth == 64


class TestDefaultOptions:
    """Test the process-wide default options."""

    def test_default_is_cached(self):
        assert get_default_options() is get_default_options()

    def test_default_reads_environment(self, monkeypatch):
        monkeypatch.setenv("P4LITE_ALLOW_COMMENTS", "1")
        assert get_default_options().allow_comments is True

    def test_set_default_options(self):
        options = ParserOptions(max_nesting_depth=5)
        set_default_options(options)
        assert get_default_options() is options

    def test_reset_default_options(self, monkeypatch):
        set_default_options(ParserOptions(allow_comments=True))
        set_default_options(None)
        assert get_default_options().allow_comments is False


class TestLogLevel:
    """Test P4LITE_LOG_LEVEL parsing."""

    def test_default(self):
        assert log_level_from_env() == "WARNING"

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("P4LITE_LOG_LEVEL", "debug")
        assert log_level_from_env() == "DEBUG"

    def test_unknown_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("P4LITE_LOG_LEVEL", "chatty")
        assert log_level_from_env("INFO") == "INFO"
