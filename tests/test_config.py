"""Tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from models.config_models import Config, CredentialsConfig
from utils.config_loader import load_config


class TestCredentialsConfig:
    """Test CredentialsConfig validation."""

    def test_valid_credentials(self):
        """Test that valid credentials pass validation."""
        creds = CredentialsConfig(
            github_client_id="Iv1.abc",
            github_client_secret="secret",
            supabase_url="https://myproject.supabase.co",
            supabase_key="valid_key_here",
        )
        assert creds.github_client_id == "Iv1.abc"
        assert creds.supabase_url == "https://myproject.supabase.co"
        assert creds.has_github_app
        assert creds.has_identity_store

    def test_all_credentials_optional(self):
        """Test that the server can start without any credentials."""
        creds = CredentialsConfig()
        assert creds.gemini_api_key is None
        assert not creds.has_github_app
        assert not creds.has_identity_store

    def test_blank_values_treated_as_unset(self):
        """Test that empty strings from the environment become None."""
        creds = CredentialsConfig(gemini_api_key="", supabase_url="  ")
        assert creds.gemini_api_key is None
        assert creds.supabase_url is None

    def test_rejects_placeholder_supabase_url(self):
        """Test that placeholder Supabase URL is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            CredentialsConfig(supabase_url="https://your-project.supabase.co")
        assert "Supabase URL must be set" in str(exc_info.value)

    def test_rejects_non_https_supabase_url(self):
        """Test that non-HTTPS Supabase URL is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            CredentialsConfig(supabase_url="http://myproject.supabase.co")
        assert "must start with https://" in str(exc_info.value)

    def test_rejects_placeholder_supabase_key(self):
        with pytest.raises(ValidationError) as exc_info:
            CredentialsConfig(supabase_key="your_supabase_anon_key_here")
        assert "Supabase key must be set" in str(exc_info.value)

    def test_github_app_requires_both_halves(self):
        """Test that a client ID without a secret does not enable GitHub login."""
        creds = CredentialsConfig(github_client_id="Iv1.abc")
        assert not creds.has_github_app


class TestConfig:
    """Test main Config model."""

    def test_defaults(self):
        """Test default values."""
        config = Config()
        assert config.log_level == "INFO"
        assert config.app_base_url == "http://localhost:5173"
        assert config.token_exchange_timeout == 10.0
        assert config.identity_timeout == 10.0
        assert config.analysis_timeout == 30.0
        assert config.bootstrap_failure_policy == "proceed"

    def test_app_base_url_trailing_slash_removed(self):
        """Test that the base URL is normalised."""
        config = Config(app_base_url="https://pullwise.test/")
        assert config.app_base_url == "https://pullwise.test"
        assert config.github_redirect_uri == "https://pullwise.test/api/github/callback"

    def test_app_base_url_must_be_absolute(self):
        """Test that a host without a scheme is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Config(app_base_url="pullwise.test")
        assert "must start with http" in str(exc_info.value)

    def test_log_level_case_insensitive(self):
        """Test that log level is normalized to uppercase."""
        config = Config(log_level="info")
        assert config.log_level == "INFO"

    def test_invalid_log_level_rejected(self):
        """Test that invalid log level is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Config(log_level="INVALID")
        assert "Log level must be one of" in str(exc_info.value)

    def test_bootstrap_policy_normalised(self):
        config = Config(bootstrap_failure_policy="ABORT")
        assert config.bootstrap_failure_policy == "abort"

    def test_unknown_bootstrap_policy_rejected(self):
        with pytest.raises(ValidationError):
            Config(bootstrap_failure_policy="retry")

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError):
            Config(analysis_timeout=0)


class TestConfigLoader:
    """Test config_loader.load_config() function."""

    def test_load_valid_config(self, test_env):
        """Test loading valid configuration from environment."""
        config = load_config()

        assert config.credentials.github_client_id == test_env["github_client_id"]
        assert config.credentials.github_client_secret == test_env["github_client_secret"]
        assert config.credentials.gemini_api_key == test_env["gemini_api_key"]
        assert config.credentials.supabase_url == test_env["supabase_url"]
        assert config.app_base_url == test_env["app_base_url"]
        assert config.log_level == test_env["log_level"]

    def test_load_config_reads_timeouts_and_policy(self, test_env, monkeypatch):
        monkeypatch.setenv("ANALYSIS_TIMEOUT", "12.5")
        monkeypatch.setenv("BOOTSTRAP_FAILURE_POLICY", "abort")

        config = load_config()

        assert config.analysis_timeout == 12.5
        assert config.bootstrap_failure_policy == "abort"

    def test_base_url_falls_back_to_vercel_host(self, clean_env, monkeypatch):
        """Test that VERCEL_URL is used when APP_BASE_URL is not set."""
        monkeypatch.setenv("VERCEL_URL", "pullwise-abc.vercel.app")
        config = load_config()
        assert config.app_base_url == "https://pullwise-abc.vercel.app"

    def test_base_url_defaults_to_dev_server(self, clean_env):
        config = load_config()
        assert config.app_base_url == "http://localhost:5173"

    def test_load_config_with_invalid_values(self, invalid_env):
        """Test that loading config with invalid values fails gracefully."""
        with pytest.raises(SystemExit) as exc_info:
            load_config()
        assert exc_info.value.code == 1
