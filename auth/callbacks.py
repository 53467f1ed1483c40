"""
OAuth callback controllers.

Two login paths land here:
- GitHub callback (manually brokered): exchange the code, resolve the
  user, bootstrap the Supabase account, then send the browser home.
- Supabase callback (provider-native): Supabase already issued the
  session, so the tokens are only re-encoded into the URL fragment.

Both controllers always return a redirect. Every failure becomes an opaque
error code on the dashboard's /auth page.
"""

import logging
from typing import Mapping, Optional

from auth.errors import ConfigurationError, IdentityResolutionError
from fetchers.github import GitHubOAuthClient
from models.config_models import Config
from models.data_models import (
    BootstrapResult,
    BootstrapStatus,
    CallbackOutcome,
    CallbackState,
    SessionHandoff,
    TokenError,
)
from storage.supabase_client import SupabaseClient
from utils.redirects import error_redirect, fragment_redirect, success_redirect

logger = logging.getLogger(__name__)


def _provider_error(config: Config, params: Mapping[str, str]) -> Optional[CallbackOutcome]:
    """Redirect for a callback that carries the provider's own ``error``."""
    error = params.get("error")
    if not error:
        return None
    logger.info(f"Provider returned error on callback: {error}")
    return CallbackOutcome(
        state=CallbackState.ERROR_FROM_PROVIDER,
        redirect_url=error_redirect(config.app_base_url, error, params.get("error_description")),
    )


def start_github_login(
    params: Mapping[str, str],
    config: Config,
    github: Optional[GitHubOAuthClient],
) -> str:
    """
    URL that sends the browser to GitHub's consent screen.

    The caller's ``state`` is forwarded unmodified and the redirect URI is
    the same one later used for the code exchange.
    """
    if github is None:
        logger.error("GitHub login requested but GITHUB_CLIENT_ID/GITHUB_CLIENT_SECRET are not configured")
        return error_redirect(config.app_base_url, "server_error")
    return github.authorize_url(config.github_redirect_uri, state=params.get("state"))


def handle_github_callback(
    params: Mapping[str, str],
    config: Config,
    github: Optional[GitHubOAuthClient],
    store: Optional[SupabaseClient] = None,
) -> CallbackOutcome:
    """
    Complete the authorization code flow for GitHub.

    Args:
        params: Callback query parameters (code, state, error, error_description)
        config: Application configuration
        github: OAuth client, or None when the GitHub app is not configured
        store: Identity store, or None when Supabase is not configured

    Returns:
        CallbackOutcome with the terminal state and the redirect URL.
        Never raises.
    """
    base = config.app_base_url
    try:
        outcome = _provider_error(config, params)
        if outcome:
            return outcome

        code = params.get("code")
        if not code:
            logger.warning("GitHub callback without code or error")
            return CallbackOutcome(
                state=CallbackState.NO_CODE,
                redirect_url=error_redirect(base, "no_code"),
            )

        if github is None:
            raise ConfigurationError("GITHUB_CLIENT_ID")

        result = github.exchange_code(code, config.github_redirect_uri)
        if isinstance(result, TokenError):
            return CallbackOutcome(
                state=CallbackState.EXCHANGE_FAILED,
                redirect_url=error_redirect(base, result.error, result.error_description),
            )
        access_token = result.access_token

        try:
            identity = github.fetch_user(access_token)
        except IdentityResolutionError as e:
            return CallbackOutcome(
                state=CallbackState.IDENTITY_FAILED,
                redirect_url=error_redirect(base, e.code, e.description),
            )

        if store is None:
            bootstrap = BootstrapResult(status=BootstrapStatus.SKIPPED)
            logger.info("No identity store configured; skipping account bootstrap")
        else:
            bootstrap = store.bootstrap_identity(identity)

        if bootstrap.status == BootstrapStatus.FAILED and config.bootstrap_failure_policy == "abort":
            logger.warning(f"Aborting login for {identity.login}: account bootstrap failed")
            return CallbackOutcome(
                state=CallbackState.BOOTSTRAP_FAILED,
                redirect_url=error_redirect(base, "bootstrap_failed"),
                bootstrap=bootstrap,
            )

        logger.info(f"GitHub login complete for {identity.login} (bootstrap={bootstrap.status.value})")
        return CallbackOutcome(
            state=CallbackState.SUCCESS,
            redirect_url=success_redirect(
                base,
                {"github_user": identity.login, "provider_token": access_token},
            ),
            bootstrap=bootstrap,
        )

    except ConfigurationError as e:
        logger.error(f"GitHub auth callback misconfigured: {e}")
        return CallbackOutcome(
            state=CallbackState.SERVER_ERROR,
            redirect_url=error_redirect(base, "server_error"),
        )
    except Exception as e:
        # Type name only, the message may echo request data
        logger.error(f"GitHub auth callback error: {type(e).__name__}")
        return CallbackOutcome(
            state=CallbackState.SERVER_ERROR,
            redirect_url=error_redirect(base, "server_error"),
        )


def handle_native_callback(params: Mapping[str, str], config: Config) -> CallbackOutcome:
    """
    Hand a Supabase-issued session to the dashboard.

    Tokens go into the URL fragment in a fixed order:
    access_token, expires_at, expires_in, refresh_token, token_type,
    then provider_token when present. Absent optional fields are left out.
    """
    base = config.app_base_url
    try:
        outcome = _provider_error(config, params)
        if outcome:
            return outcome

        if not params.get("access_token"):
            logger.warning("Auth callback without access_token or error")
            return CallbackOutcome(
                state=CallbackState.NO_TOKEN,
                redirect_url=error_redirect(base, "missing_token"),
            )

        handoff = SessionHandoff(
            access_token=params["access_token"],
            expires_at=params.get("expires_at") or None,
            expires_in=params.get("expires_in") or None,
            refresh_token=params.get("refresh_token") or None,
            provider_token=params.get("provider_token") or None,
        )

        logger.info("Auth callback complete; handing session to dashboard")
        return CallbackOutcome(
            state=CallbackState.SUCCESS,
            redirect_url=fragment_redirect(base, handoff.model_dump()),
        )

    except Exception as e:
        logger.error(f"Auth callback error: {type(e).__name__}")
        return CallbackOutcome(
            state=CallbackState.SERVER_ERROR,
            redirect_url=error_redirect(base, "callback_error"),
        )
