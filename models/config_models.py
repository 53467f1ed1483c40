"""Configuration models for validation using Pydantic."""

from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator


class CredentialsConfig(BaseModel):
    """Third-party credentials loaded from environment variables.

    Every field is optional so the server can start with a partial
    deployment; handlers report the missing key when they need it.
    """

    # GitHub OAuth app
    github_client_id: Optional[str] = Field(None, description="GitHub OAuth app client ID")
    github_client_secret: Optional[str] = Field(None, description="GitHub OAuth app client secret")

    # Generative AI endpoint
    gemini_api_key: Optional[str] = Field(None, description="Gemini API key")
    gemini_api_url: Optional[str] = Field(None, description="Gemini generateContent endpoint URL")

    # Supabase identity store
    supabase_url: Optional[str] = Field(None, description="Supabase project URL")
    supabase_key: Optional[str] = Field(None, description="Supabase anon key")

    @field_validator(
        "github_client_id",
        "github_client_secret",
        "gemini_api_key",
        "gemini_api_url",
        "supabase_url",
        "supabase_key",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings from the environment as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("supabase_url")
    @classmethod
    def validate_supabase_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate Supabase URL format."""
        if v is None:
            return v
        if v == "https://your-project.supabase.co":
            raise ValueError("Supabase URL must be set in .env file")
        if not v.startswith("https://"):
            raise ValueError("Supabase URL must start with https://")
        return v

    @field_validator("supabase_key")
    @classmethod
    def validate_supabase_key(cls, v: Optional[str]) -> Optional[str]:
        """Reject the .env.example placeholder."""
        if v == "your_supabase_anon_key_here":
            raise ValueError("Supabase key must be set in .env file")
        return v

    @field_validator("gemini_api_url")
    @classmethod
    def validate_gemini_api_url(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.startswith(("https://", "http://")):
            raise ValueError("Gemini API URL must start with http:// or https://")
        return v

    @property
    def has_github_app(self) -> bool:
        return bool(self.github_client_id and self.github_client_secret)

    @property
    def has_identity_store(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


class Config(BaseModel):
    """Application configuration, built once at startup."""

    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    app_base_url: str = Field(default="http://localhost:5173", description="Public URL of the dashboard")
    log_level: str = Field(default="INFO", description="Logging level")

    # Outbound call timeouts in seconds
    token_exchange_timeout: float = Field(default=10.0, gt=0)
    identity_timeout: float = Field(default=10.0, gt=0)
    analysis_timeout: float = Field(default=30.0, gt=0)

    # What to do when the identity store rejects the sign-up
    bootstrap_failure_policy: Literal["proceed", "abort"] = "proceed"

    @field_validator("app_base_url")
    @classmethod
    def validate_app_base_url(cls, v: str) -> str:
        """Require an absolute http(s) URL and drop any trailing slash."""
        if not v.startswith(("https://", "http://")):
            raise ValueError("App base URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper

    @field_validator("bootstrap_failure_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v

    @property
    def github_redirect_uri(self) -> str:
        """Callback URL registered with the GitHub OAuth app."""
        return f"{self.app_base_url}/api/github/callback"
