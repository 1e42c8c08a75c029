"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from config.settings import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("PORT", "BCRYPT_ROUNDS", "CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.port == 3000
        assert settings.bcrypt_rounds == 10
        assert settings.cors_origins == ["*"]

    def test_cors_origins_from_env(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", '["http://localhost:3000", "https://example.com"]')
        settings = Settings(_env_file=None)
        assert settings.cors_origins == ["http://localhost:3000", "https://example.com"]

    def test_cors_origins_must_be_strings(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "[1, 2]")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
