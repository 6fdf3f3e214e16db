"""Tests for umbrella_headers.config."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from umbrella_headers.config import HeaderSettings, get_settings


class TestHeaderSettings:
    def test_defaults(self):
        cfg = HeaderSettings()
        assert cfg.boundary_prefix == "----sinikael-?=_"
        assert cfg.continuation_max_length == 50
        assert cfg.max_q_word_length == 52
        assert cfg.max_b_word_bytes == 39
        assert cfg.log_level == "INFO"
        assert cfg.log_json is True

    def test_override(self):
        cfg = HeaderSettings(continuation_max_length=30, log_json=False)
        assert cfg.continuation_max_length == 30
        assert cfg.log_json is False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MIME_HEADERS_MAX_Q_WORD_LENGTH", "40")
        monkeypatch.setenv("MIME_HEADERS_LOG_LEVEL", "DEBUG")
        cfg = HeaderSettings()
        assert cfg.max_q_word_length == 40
        assert cfg.log_level == "DEBUG"

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValidationError):
            HeaderSettings(continuation_max_length=0)


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_env(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("MIME_HEADERS_BOUNDARY_PREFIX", "x-")
        get_settings.cache_clear()
        second = get_settings()
        assert second is not first
        assert second.boundary_prefix == "x-"
