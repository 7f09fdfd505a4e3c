"""
Tests for environment configuration helpers
"""
import os
from unittest.mock import patch

from src import config


class TestEnvInt:
    def test_missing_uses_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert config.env_int("SUBMIT_RATE_LIMIT_REQUESTS", 30) == 30

    def test_valid_value(self):
        with patch.dict(os.environ, {"SUBMIT_RATE_LIMIT_REQUESTS": "45"}):
            assert config.env_int("SUBMIT_RATE_LIMIT_REQUESTS", 30) == 45

    def test_non_numeric_uses_default(self, caplog):
        with patch.dict(os.environ, {"SUBMIT_RATE_LIMIT_REQUESTS": "lots"}):
            assert config.env_int("SUBMIT_RATE_LIMIT_REQUESTS", 30) == 30
        assert "Invalid SUBMIT_RATE_LIMIT_REQUESTS" in caplog.text

    def test_below_minimum_uses_default(self):
        with patch.dict(os.environ, {"SUBMIT_RATE_LIMIT_REQUESTS": "0"}):
            assert config.env_int("SUBMIT_RATE_LIMIT_REQUESTS", 30) == 30

    def test_above_maximum_uses_default(self):
        with patch.dict(os.environ, {"PORT": "70000"}):
            assert config.env_int("PORT", 8080, maximum=65535) == 8080


class TestEnvFlag:
    def test_truthy_values(self):
        for value in ("true", "TRUE", "1", "yes"):
            with patch.dict(os.environ, {"DISABLE_RATE_LIMIT": value}):
                assert config.env_flag("DISABLE_RATE_LIMIT") is True

    def test_unset_is_false(self):
        with patch.dict(os.environ, {}, clear=True):
            assert config.env_flag("DISABLE_RATE_LIMIT") is False
