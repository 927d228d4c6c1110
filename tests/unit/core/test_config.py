"""Tests for environment-driven engine settings and logging setup."""

import logging

from fitrecovery.core import logging as engine_logging
from fitrecovery.core.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("FITRECOVERY_LOG_LEVEL", raising=False)
        s = Settings(_env_file=None)
        assert s.LOG_LEVEL == "WARNING"
        assert s.DEFAULT_BASE_REST_INTERVAL_HOURS == 48.0
        assert s.DEFAULT_EXPERIENCE_LEVEL == "intermediate"
        assert s.WORKLOAD_VOLUME_SCALE == 100.0

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("FITRECOVERY_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("FITRECOVERY_WORKLOAD_VOLUME_SCALE", "250")
        s = Settings(_env_file=None)
        assert s.LOG_LEVEL == "DEBUG"
        assert s.WORKLOAD_VOLUME_SCALE == 250.0

    def test_unprefixed_env_ignored(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.delenv("FITRECOVERY_LOG_LEVEL", raising=False)
        assert Settings(_env_file=None).LOG_LEVEL == "WARNING"


class TestConfigureLogging:

    def test_uses_settings_format(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
        engine_logging.configure_logging("info")
        assert calls["level"] == "INFO"
        assert calls["format"] == engine_logging.settings.LOG_FORMAT
