"""
Supabase identity store client.

Creates the application-side account for a user who just logged in with
GitHub. The outcome is returned as a tagged BootstrapResult so the caller
decides whether a failed sign-up should block the login.
"""

import logging
import secrets
from supabase import Client, create_client

from models.data_models import BootstrapResult, BootstrapStatus, ProviderIdentity

logger = logging.getLogger(__name__)


class SupabaseClient:
    """Client for interacting with the Supabase auth API."""

    def __init__(self, supabase_url: str, supabase_key: str):
        """
        Initialize Supabase client.

        Args:
            supabase_url: Supabase project URL
            supabase_key: Supabase API key (anon/public key)
        """
        self.client: Client = create_client(supabase_url, supabase_key)
        logger.info(f"Initialized SupabaseClient for {supabase_url}")

    def bootstrap_identity(self, identity: ProviderIdentity) -> BootstrapResult:
        """
        Sign up an application account for a GitHub user.

        Users whose GitHub email is private get a ``<login>@github.com``
        placeholder. The password is random and discarded; the account is
        only ever reached through GitHub.

        Args:
            identity: Profile resolved from the GitHub access token

        Returns:
            BootstrapResult with status SUCCEEDED (and the Supabase user id)
            or FAILED (and the error type for logs). Store errors never
            propagate out of this method.
        """
        payload = {
            "email": identity.signup_email,
            "password": secrets.token_urlsafe(24),
            "options": {
                "data": {
                    "github_login": identity.login,
                    "github_id": identity.id,
                    "provider": "github",
                }
            },
        }

        try:
            response = self.client.auth.sign_up(payload)
        except Exception as e:
            logger.warning(
                f"Account bootstrap failed for {identity.login}: {type(e).__name__}: {e}"
            )
            return BootstrapResult(status=BootstrapStatus.FAILED, error=type(e).__name__)

        user = getattr(response, "user", None)
        if user is None:
            logger.warning(f"Account bootstrap for {identity.login} returned no user")
            return BootstrapResult(status=BootstrapStatus.FAILED, error="no_user")

        logger.info(f"Bootstrapped account for {identity.login}")
        return BootstrapResult(status=BootstrapStatus.SUCCEEDED, user_id=str(user.id))
