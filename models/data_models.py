"""Data models for OAuth handoff and analysis proxy payloads."""

from enum import Enum
from typing import Literal, Optional, Union
from pydantic import BaseModel, Field


class TokenGrant(BaseModel):
    """Successful response from GitHub's token endpoint."""
    access_token: str = Field(..., min_length=1)
    token_type: str = "bearer"
    scope: str = ""


class TokenError(BaseModel):
    """Error response from GitHub's token endpoint.

    GitHub answers a bad code with HTTP 200 and an ``error`` field, so this
    is a regular response shape rather than an exception.
    """
    error: str
    error_description: Optional[str] = None
    error_uri: Optional[str] = None


TokenExchangeResult = Union[TokenGrant, TokenError]


class ProviderIdentity(BaseModel):
    """Authenticated GitHub user, as returned by ``GET /user``."""
    id: int
    login: str = Field(..., min_length=1)
    email: Optional[str] = None

    @property
    def signup_email(self) -> str:
        """Email used for the application account (placeholder when hidden)."""
        return self.email or f"{self.login}@github.com"


class BootstrapStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class BootstrapResult(BaseModel):
    """Outcome of creating the application account for a GitHub user."""
    status: BootstrapStatus
    user_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == BootstrapStatus.SUCCEEDED


class CallbackState(str, Enum):
    """Terminal states of the OAuth callback controllers."""
    ERROR_FROM_PROVIDER = "error_from_provider"
    NO_CODE = "no_code"
    NO_TOKEN = "no_token"
    EXCHANGE_FAILED = "exchange_failed"
    IDENTITY_FAILED = "identity_failed"
    BOOTSTRAP_FAILED = "bootstrap_failed"
    SUCCESS = "success"
    SERVER_ERROR = "server_error"


class CallbackOutcome(BaseModel):
    """Where the browser is sent after a callback, and why."""
    state: CallbackState
    redirect_url: str
    bootstrap: Optional[BootstrapResult] = None


class SessionHandoff(BaseModel):
    """Tokens handed to the dashboard after a provider-native login.

    Field order is the order they appear in the redirect fragment.
    """
    access_token: str = Field(..., min_length=1)
    expires_at: Optional[str] = None
    expires_in: Optional[str] = None
    refresh_token: Optional[str] = None
    token_type: Literal["bearer"] = "bearer"
    provider_token: Optional[str] = None


class AnalysisRequest(BaseModel):
    """Body of ``POST /api/analyze``."""
    prompt: str = Field(..., min_length=1)


class AnalysisResult(BaseModel):
    """Upstream response relayed verbatim to the caller."""
    body: str
    status_code: int
    content_type: str = ""

    @property
    def is_json(self) -> bool:
        return "application/json" in self.content_type.lower()
