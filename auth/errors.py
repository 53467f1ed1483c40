"""Exceptions raised along the OAuth handoff.

Each carries an opaque ``code`` that is safe to show in a redirect; the
``description`` must never contain a credential.
"""

from typing import Optional


class OAuthError(Exception):
    """Base class for login failures that map to an error redirect."""

    code = "server_error"

    def __init__(self, description: Optional[str] = None, code: Optional[str] = None):
        if code:
            self.code = code
        self.description = description
        super().__init__(description or self.code)


class IdentityResolutionError(OAuthError):
    """GitHub did not return a usable profile for the access token."""

    code = "identity_failed"


class ConfigurationError(Exception):
    """A required deployment setting is missing.

    The message names the setting (e.g. ``GEMINI_API_KEY``), never its value.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Missing {key}")
