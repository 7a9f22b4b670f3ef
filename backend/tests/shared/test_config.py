"""Tests for shared/config.py."""

import os
from unittest.mock import patch

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings(_env_file=None)
        assert settings.app_name == "Stacks API"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.api_prefix == "/api"
        assert settings.storage_backend == "supabase"
        assert settings.token_ttl_seconds == 7 * 24 * 3600
        assert settings.verification_ttl_minutes == 60
        assert settings.email_transport == "log"

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {
            "DEBUG": "true",
            "PORT": "9000",
            "STORAGE_BACKEND": "memory",
            "BCRYPT_ROUNDS": "11",
        }):
            settings = Settings(_env_file=None)
            assert settings.debug is True
            assert settings.port == 9000
            assert settings.storage_backend == "memory"
            assert settings.bcrypt_rounds == "11"

    def test_loads_jwt_config_from_env(self):
        with patch.dict(os.environ, {
            "JWT_SECRET": "s3cret",
            "JWT_ISSUER": "stacks",
            "JWT_AUDIENCE": "stacks-web",
        }):
            settings = Settings(_env_file=None)
            assert settings.jwt_secret == "s3cret"
            assert settings.jwt_issuer == "stacks"
            assert settings.jwt_audience == "stacks-web"


class TestAdminEmailList:
    def test_trims_and_lowercases(self):
        settings = Settings(_env_file=None, admin_emails=" Boss@Example.com, ops@example.com ,,")
        assert settings.admin_email_list == ["boss@example.com", "ops@example.com"]

    def test_empty(self):
        assert Settings(_env_file=None, admin_emails="").admin_email_list == []


class TestIsProduction:
    def test_only_production_environment(self):
        assert Settings(_env_file=None, environment="production").is_production is True
        assert Settings(_env_file=None, environment="development").is_production is False


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
