"""Shared pytest fixtures and configuration."""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock

from models.config_models import Config, CredentialsConfig

ENV_KEYS = [
    "GITHUB_CLIENT_ID",
    "GITHUB_CLIENT_SECRET",
    "GEMINI_API_KEY",
    "GEMINI_API_URL",
    "SUPABASE_URL",
    "SUPABASE_KEY",
    "APP_BASE_URL",
    "VERCEL_URL",
    "LOG_LEVEL",
    "TOKEN_EXCHANGE_TIMEOUT",
    "IDENTITY_TIMEOUT",
    "ANALYSIS_TIMEOUT",
    "BOOTSTRAP_FAILURE_POLICY",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every setting the config loader reads."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def test_env(monkeypatch, clean_env):
    """
    Set valid test environment variables.

    This fixture sets up valid test environment variables so config
    can be loaded during tests without requiring real credentials.
    """
    monkeypatch.setenv("GITHUB_CLIENT_ID", "Iv1.test_client_id")
    monkeypatch.setenv("GITHUB_CLIENT_SECRET", "test_client_secret_1234567890")
    monkeypatch.setenv("GEMINI_API_KEY", "test_gemini_key_1234567890")
    monkeypatch.setenv("GEMINI_API_URL", "https://gemini.test/v1beta/models/gemini-pro:generateContent")
    monkeypatch.setenv("SUPABASE_URL", "https://test-project.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "test_supabase_key_1234567890")
    monkeypatch.setenv("APP_BASE_URL", "https://pullwise.test")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    return {
        "github_client_id": "Iv1.test_client_id",
        "github_client_secret": "test_client_secret_1234567890",
        "gemini_api_key": "test_gemini_key_1234567890",
        "supabase_url": "https://test-project.supabase.co",
        "app_base_url": "https://pullwise.test",
        "log_level": "DEBUG",
    }


@pytest.fixture
def invalid_env(monkeypatch, clean_env):
    """
    Set up invalid environment variables for testing validation.
    """
    monkeypatch.setenv("SUPABASE_URL", "http://insecure.supabase.co")
    monkeypatch.setenv("APP_BASE_URL", "pullwise.test")


@pytest.fixture
def app_config():
    """Fully configured application settings (no identity store)."""
    return Config(
        credentials=CredentialsConfig(
            github_client_id="Iv1.test_client_id",
            github_client_secret="test_client_secret_1234567890",
            gemini_api_key="test_gemini_key_1234567890",
            gemini_api_url="https://gemini.test/v1beta/models/gemini-pro:generateContent",
        ),
        app_base_url="https://pullwise.test",
        log_level="DEBUG",
    )


@pytest.fixture
def bare_config():
    """Settings with no third-party credentials at all."""
    return Config(app_base_url="https://pullwise.test")


@pytest.fixture
def client(app_config):
    """Create FastAPI test client with a fully configured app."""
    from backend.app import create_app
    with TestClient(create_app(app_config)) as test_client:
        yield test_client


@pytest.fixture
def bare_client(bare_config):
    """Create FastAPI test client for an app with no credentials."""
    from backend.app import create_app
    with TestClient(create_app(bare_config)) as test_client:
        yield test_client


def make_response(status_code=200, json_data=None, text=None, content_type="application/json"):
    """Build a mock requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.headers = {"content-type": content_type} if content_type else {}
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    response.text = text if text is not None else ("" if json_data is None else str(json_data))
    return response


@pytest.fixture
def response_factory():
    """Factory for mock requests.Response objects."""
    return make_response
