"""
Unit Tests for Configuration Module

These tests verify that the configuration system works correctly:
- Default values are applied when needed
- The API secret stays masked
- Credentials are only built when key and secret are both present
- Validation catches invalid configurations

Run with:
    pytest tests/unit/test_config.py -v
"""

import pytest
from pydantic import SecretStr

from core.config import Settings, settings, validate_configuration
from core.schemas import Credentials


def make_settings(**overrides):
    """Settings independent of the local .env file"""
    values = {
        "kucoin_base_url": "https://api.kucoin.com",
        "kucoin_api_prefix": "/v1",
        "kucoin_api_key": "",
        "kucoin_api_secret": "",
        "request_timeout": 30,
        "log_level": "INFO",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestConfigurationLoading:
    """Test that the global configuration loads"""

    def test_base_url_loaded(self):
        """Verify KuCoin API URL is set"""
        assert settings.kucoin_base_url.startswith("http")

    def test_secret_is_secret_str(self):
        """Verify the secret is wrapped"""
        assert isinstance(settings.kucoin_api_secret, SecretStr)

    def test_log_level_is_set(self):
        """Verify log level is configured"""
        assert isinstance(settings.log_level, str)
        assert len(settings.log_level) > 0


class TestDefaults:
    """Test default values"""

    def test_default_base_url_and_prefix(self):
        assert Settings.model_fields["kucoin_base_url"].default == "https://api.kucoin.com"
        assert Settings.model_fields["kucoin_api_prefix"].default == "/v1"

    def test_request_timeout_is_positive(self):
        assert make_settings().request_timeout > 0

    def test_only_client_settings_are_declared(self):
        """Verify no setting exists that the client never reads"""
        assert set(Settings.model_fields) == {
            "kucoin_base_url",
            "kucoin_api_prefix",
            "kucoin_api_key",
            "kucoin_api_secret",
            "request_timeout",
            "log_level",
        }


class TestCredentials:
    """Test credential properties"""

    def test_no_credentials_by_default(self):
        config = make_settings()
        assert config.has_credentials is False
        assert config.credentials is None

    def test_credentials_built_when_both_set(self):
        config = make_settings(kucoin_api_key="key", kucoin_api_secret="secret")

        assert config.has_credentials is True
        assert isinstance(config.credentials, Credentials)
        assert config.credentials.api_key == "key"
        assert config.credentials.secret_bytes == b"secret"

    def test_secret_not_in_repr(self):
        config = make_settings(kucoin_api_key="key", kucoin_api_secret="very-secret")
        assert "very-secret" not in repr(config)

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("KUCOIN_API_KEY", "env-key")
        monkeypatch.setenv("KUCOIN_API_SECRET", "env-secret")

        config = Settings(_env_file=None)
        assert config.credentials.api_key == "env-key"


class TestConfigurationValidation:
    """Test configuration validation function"""

    def test_valid_configuration_passes(self):
        try:
            validate_configuration(make_settings())
        except ValueError as e:
            pytest.fail(f"Configuration validation failed: {e}")

    @pytest.mark.parametrize("overrides, match", [
        ({"kucoin_base_url": "ftp://api.kucoin.com"}, "KUCOIN_BASE_URL"),
        ({"kucoin_base_url": "https://api.kucoin.com/"}, "KUCOIN_BASE_URL"),
        ({"kucoin_api_prefix": "v1"}, "KUCOIN_API_PREFIX"),
        ({"kucoin_api_prefix": "/v1/"}, "KUCOIN_API_PREFIX"),
        ({"request_timeout": 0}, "REQUEST_TIMEOUT"),
        ({"log_level": "VERBOSE"}, "LOG_LEVEL"),
        ({"kucoin_api_key": "key"}, "together"),
    ])
    def test_validation_rejects(self, overrides, match):
        with pytest.raises(ValueError, match=match):
            validate_configuration(make_settings(**overrides))
