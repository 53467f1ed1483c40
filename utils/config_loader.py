"""Configuration loader that reads from .env and validates with Pydantic."""

import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from pydantic import ValidationError

from models.config_models import Config, CredentialsConfig

DEFAULT_APP_BASE_URL = "http://localhost:5173"


def _app_base_url() -> str:
    """Resolve the dashboard URL: APP_BASE_URL, then Vercel's host, then the dev server."""
    explicit = os.getenv("APP_BASE_URL")
    if explicit:
        return explicit
    vercel_host = os.getenv("VERCEL_URL")
    if vercel_host:
        return f"https://{vercel_host}"
    return DEFAULT_APP_BASE_URL


def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    Reads from .env file in the project root and validates all
    credentials and settings using Pydantic models. Call this once at
    startup and pass the result to the app factory.

    Returns:
        Config: Validated configuration object

    Raises:
        SystemExit: If configuration is invalid
    """
    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    try:
        config = Config(
            credentials=CredentialsConfig(
                github_client_id=os.getenv("GITHUB_CLIENT_ID"),
                github_client_secret=os.getenv("GITHUB_CLIENT_SECRET"),
                gemini_api_key=os.getenv("GEMINI_API_KEY"),
                gemini_api_url=os.getenv("GEMINI_API_URL"),
                supabase_url=os.getenv("SUPABASE_URL"),
                supabase_key=os.getenv("SUPABASE_KEY"),
            ),
            app_base_url=_app_base_url(),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            token_exchange_timeout=os.getenv("TOKEN_EXCHANGE_TIMEOUT", "10"),
            identity_timeout=os.getenv("IDENTITY_TIMEOUT", "10"),
            analysis_timeout=os.getenv("ANALYSIS_TIMEOUT", "30"),
            bootstrap_failure_policy=os.getenv("BOOTSTRAP_FAILURE_POLICY", "proceed"),
        )

        return config

    except ValidationError as e:
        print("❌ Configuration validation failed:", file=sys.stderr)
        print("\nPlease check your .env file. Missing or invalid fields:", file=sys.stderr)

        for error in e.errors():
            field_path = " → ".join(str(x) for x in error["loc"])
            message = error["msg"]
            print(f"  • {field_path}: {message}", file=sys.stderr)

        print("\nHint: Copy .env.example to .env and fill in your credentials.", file=sys.stderr)
        sys.exit(1)
