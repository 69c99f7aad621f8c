"""Unit tests for configuration loading (config.py)."""

import pytest

from caption_timeline import config


class TestEnvInt:

    def test_unset_returns_default(self, monkeypatch):
        monkeypatch.delenv("CAPTION_TEST_VALUE", raising=False)
        assert config.env_int("CAPTION_TEST_VALUE", 7) == 7
        assert config.env_int("CAPTION_TEST_VALUE", None) is None

    def test_blank_returns_default(self, monkeypatch):
        monkeypatch.setenv("CAPTION_TEST_VALUE", "  ")
        assert config.env_int("CAPTION_TEST_VALUE", 7) == 7

    def test_integer_value(self, monkeypatch):
        monkeypatch.setenv("CAPTION_TEST_VALUE", " 42 ")
        assert config.env_int("CAPTION_TEST_VALUE", 7) == 42

    def test_invalid_value_names_the_variable(self, monkeypatch):
        monkeypatch.setenv("CAPTION_MAX_WORDS", "twelve")
        with pytest.raises(ValueError, match="CAPTION_MAX_WORDS must be an integer"):
            config.env_int("CAPTION_MAX_WORDS", 12)


class TestDefaults:

    def test_types(self):
        assert isinstance(config.CAPTION_MAX_GAP_MS, int)
        assert isinstance(config.CAPTION_MAX_WORDS, int)
        assert config.CAPTION_MAX_CUE_MS is None or isinstance(config.CAPTION_MAX_CUE_MS, int)
        assert isinstance(config.DEFAULT_FPS, int)

    def test_string_settings_are_normalized(self):
        assert config.DEFAULT_PRESET == config.DEFAULT_PRESET.strip().lower()
        assert config.LOG_LEVEL == config.LOG_LEVEL.upper()
