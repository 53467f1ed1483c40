"""Data models for the Pullwise backend."""

from models.config_models import Config, CredentialsConfig
from models.data_models import (
    AnalysisRequest,
    AnalysisResult,
    BootstrapResult,
    BootstrapStatus,
    CallbackOutcome,
    CallbackState,
    ProviderIdentity,
    SessionHandoff,
    TokenError,
    TokenGrant,
)

__all__ = [
    "Config",
    "CredentialsConfig",
    "AnalysisRequest",
    "AnalysisResult",
    "BootstrapResult",
    "BootstrapStatus",
    "CallbackOutcome",
    "CallbackState",
    "ProviderIdentity",
    "SessionHandoff",
    "TokenError",
    "TokenGrant",
]
