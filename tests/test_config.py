"""
Tests for environment-driven configuration.
"""

import importlib
import logging

from staffing_api import config


class TestLogLevel:

    def test_lowercase_level_is_normalised(self, monkeypatch):
        """LOG_LEVEL=debug is accepted and handed to logging as DEBUG."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        try:
            importlib.reload(config)

            assert config.LOG_LEVEL == "DEBUG"
            # logging rejects lowercase names, so this raises if not normalised
            logging.getLogger("staffing_api.test_config").setLevel(config.LOG_LEVEL)
        finally:
            monkeypatch.delenv("LOG_LEVEL")
            importlib.reload(config)

    def test_default_level(self, monkeypatch):
        """Without LOG_LEVEL the service logs at INFO."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        importlib.reload(config)

        assert config.LOG_LEVEL == "INFO"
