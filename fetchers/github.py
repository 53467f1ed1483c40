"""GitHub OAuth client for the manually-brokered login flow.

Covers the two server-to-server calls of the authorization code flow:
- Token exchange: trade the single-use ``code`` for an access token
- Identity: fetch the authenticated user's profile with that token
"""

import logging
from typing import Optional
from urllib.parse import urlencode

import requests
from pydantic import ValidationError

from auth.errors import IdentityResolutionError
from models.data_models import ProviderIdentity, TokenError, TokenExchangeResult, TokenGrant

logger = logging.getLogger(__name__)

GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
DEFAULT_SCOPE = "read:user user:email"


class GitHubOAuthClient:
    """Talk to GitHub on behalf of one OAuth app.

    Holds no per-user state, so a single instance can serve concurrent
    callbacks.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_timeout: float = 10.0,
        user_timeout: float = 10.0,
    ):
        """Initialize GitHub OAuth client.

        Args:
            client_id: OAuth app client ID
            client_secret: OAuth app client secret (sent only to the token endpoint)
            token_timeout: Seconds to wait for the token endpoint
            user_timeout: Seconds to wait for the user endpoint
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_timeout = token_timeout
        self.user_timeout = user_timeout
        self.base_url = "https://api.github.com"
        self.headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28"
        }

    def authorize_url(self, redirect_uri: str, state: Optional[str] = None, scope: str = DEFAULT_SCOPE) -> str:
        """Build the URL that starts the login on github.com.

        ``state`` is passed through untouched; GitHub echoes it back on the
        callback.
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "scope": scope,
        }
        if state:
            params["state"] = state
        return f"{GITHUB_AUTHORIZE_URL}?{urlencode(params)}"

    def exchange_code(self, code: str, redirect_uri: str) -> TokenExchangeResult:
        """Exchange an authorization code for an access token.

        Codes are single-use, so this never retries.

        Args:
            code: Authorization code from the callback query string
            redirect_uri: Must match the redirect_uri of the authorize request exactly

        Returns:
            TokenGrant on success, TokenError when GitHub reports an error or
            answers with something that is not a token.

        Raises:
            ValueError: If code is empty
            requests.RequestException: On network errors or timeout
        """
        if not code:
            raise ValueError("Authorization code is required")

        response = requests.post(
            GITHUB_TOKEN_URL,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            json={
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "code": code,
                "redirect_uri": redirect_uri,
            },
            timeout=self.token_timeout,
        )

        if not 200 <= response.status_code < 300:
            logger.error(f"Token exchange failed: HTTP {response.status_code}")
            return TokenError(error="token_exchange_failed")

        try:
            data = response.json()
        except ValueError:
            logger.error("Token exchange returned a non-JSON body")
            return TokenError(error="token_exchange_failed")

        if not isinstance(data, dict):
            logger.error("Token exchange returned an unexpected body shape")
            return TokenError(error="token_exchange_failed")

        if data.get("error"):
            logger.warning(f"GitHub rejected the authorization code: {data['error']}")
            return TokenError(
                error=str(data["error"]),
                error_description=data.get("error_description"),
                error_uri=data.get("error_uri"),
            )

        try:
            grant = TokenGrant.model_validate(data)
        except ValidationError:
            logger.error("Token exchange response had no access token")
            return TokenError(error="token_exchange_failed")

        logger.debug(f"Token exchange succeeded (scope={grant.scope or '-'})")
        return grant

    def fetch_user(self, access_token: str) -> ProviderIdentity:
        """Fetch the profile of the user who owns ``access_token``.

        Raises:
            IdentityResolutionError: On a non-2xx status or an unusable body
            requests.RequestException: On network errors or timeout
        """
        response = requests.get(
            f"{self.base_url}/user",
            headers={**self.headers, "Authorization": f"Bearer {access_token}"},
            timeout=self.user_timeout,
        )

        if not 200 <= response.status_code < 300:
            message = None
            try:
                body = response.json()
                if isinstance(body, dict):
                    message = body.get("message")
            except ValueError:
                pass
            logger.error(f"GitHub user lookup failed: HTTP {response.status_code} {message or ''}".rstrip())
            raise IdentityResolutionError(message)

        try:
            identity = ProviderIdentity.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"GitHub user lookup returned an unusable profile: {type(e).__name__}")
            raise IdentityResolutionError("Malformed user profile") from e

        logger.info(f"Resolved GitHub user {identity.login} (id={identity.id})")
        return identity
