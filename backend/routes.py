"""
API routes for the Pullwise backend.

- OAuth callbacks answer every request with a 302 to the dashboard.
- The analysis proxy relays Gemini's response as-is.
"""

import json
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, RedirectResponse, Response
from pydantic import ValidationError

from analyzer.llm_client import GeminiProxyClient
from auth.callbacks import handle_github_callback, handle_native_callback, start_github_login
from auth.errors import ConfigurationError
from fetchers.github import GitHubOAuthClient
from models.config_models import Config
from models.data_models import AnalysisRequest
from storage.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["pullwise"])


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_github(request: Request) -> Optional[GitHubOAuthClient]:
    return request.app.state.github


def get_store(request: Request) -> Optional[SupabaseClient]:
    return request.app.state.store


def get_llm(request: Request) -> Optional[GeminiProxyClient]:
    return request.app.state.llm


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=302, headers={"Cache-Control": "no-store"})


@router.get("/health")
def health(config: Config = Depends(get_config)):
    """Liveness check; reports whether the analysis key is configured."""
    return {"ok": True, "envKeyPresent": bool(config.credentials.gemini_api_key)}


@router.get("/github/login")
def github_login(
    request: Request,
    config: Config = Depends(get_config),
    github: Optional[GitHubOAuthClient] = Depends(get_github),
):
    """Send the browser to GitHub's authorization page."""
    return _redirect(start_github_login(request.query_params, config, github))


@router.get("/github/callback")
def github_callback(
    request: Request,
    config: Config = Depends(get_config),
    github: Optional[GitHubOAuthClient] = Depends(get_github),
    store: Optional[SupabaseClient] = Depends(get_store),
):
    """
    GitHub OAuth callback (manually brokered flow).

    Query Parameters:
    - code: Authorization code issued by GitHub
    - state: Opaque value from the login request
    - error / error_description: Set by GitHub when authorization was refused
    """
    outcome = handle_github_callback(request.query_params, config, github, store)
    logger.debug(f"GitHub callback finished in state {outcome.state.value}")
    return _redirect(outcome.redirect_url)


@router.get("/auth/callback")
def auth_callback(request: Request, config: Config = Depends(get_config)):
    """
    Supabase OAuth callback (provider-native flow).

    Query Parameters:
    - access_token, refresh_token, expires_in, expires_at, provider_token
    - error / error_description
    """
    outcome = handle_native_callback(request.query_params, config)
    logger.debug(f"Auth callback finished in state {outcome.state.value}")
    return _redirect(outcome.redirect_url)


@router.post("/analyze")
async def analyze(
    request: Request,
    config: Config = Depends(get_config),
    llm: Optional[GeminiProxyClient] = Depends(get_llm),
):
    """
    Relay a prompt to Gemini.

    Request body: {"prompt": "..."}

    Returns:
    - Gemini's body and status code; JSON when Gemini sent JSON, plain text otherwise
    - 400 {"error": "Missing prompt"} when the prompt is absent or empty,
      including empty bodies and JSON that is not an object
    - 500 {"error": "Missing <SETTING>"} when Gemini is not configured
    - 500 {"error": "server_error", "detail": "..."} on any other failure,
      malformed JSON included
    """
    try:
        raw = await request.body()
        payload = json.loads(raw) if raw.strip() else {}
        if not isinstance(payload, dict):
            payload = {}

        try:
            analysis_request = AnalysisRequest.model_validate(payload)
        except ValidationError:
            return JSONResponse({"error": "Missing prompt"}, status_code=400)

        if llm is None:
            creds = config.credentials
            raise ConfigurationError("GEMINI_API_KEY" if not creds.gemini_api_key else "GEMINI_API_URL")

        result = await run_in_threadpool(llm.forward, analysis_request.prompt)

        media_type = "application/json" if result.is_json else "text/plain"
        return Response(content=result.body, status_code=result.status_code, media_type=media_type)

    except ConfigurationError as e:
        logger.error(f"/api/analyze misconfigured: {e}")
        return JSONResponse({"error": str(e)}, status_code=500)
    except Exception as e:
        logger.error(f"Error in /api/analyze: {e}")
        return JSONResponse({"error": "server_error", "detail": str(e)}, status_code=500)
