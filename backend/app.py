"""
FastAPI application for the Pullwise backend.

Configuration is loaded once here and shared with the routes through
``app.state``; routes never read the environment themselves.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from analyzer.llm_client import GeminiProxyClient
from fetchers.github import GitHubOAuthClient
from models.config_models import Config
from storage.supabase_client import SupabaseClient
from utils.config_loader import load_config
from utils.logger import setup_logger

VITE_DEV_ORIGIN = "http://localhost:5173"


def create_app(config: Optional[Config] = None) -> FastAPI:
    """
    Build the FastAPI app and its upstream clients.

    Clients whose credentials are missing are left as None; the routes
    that need them report the missing setting per request.

    Args:
        config: Pre-built configuration (tests); loaded from .env/environment when omitted
    """
    if config is None:
        config = load_config()

    # Module loggers inherit this level from the root logger
    setup_logger(config.log_level)
    logger = logging.getLogger(__name__)
    creds = config.credentials

    app = FastAPI(
        title="Pullwise API",
        description="GitHub login handoff and LLM analysis proxy for the Pullwise dashboard",
        version="1.0.0"
    )

    app.state.config = config
    app.state.github = None
    app.state.store = None
    app.state.llm = None

    if creds.has_github_app:
        app.state.github = GitHubOAuthClient(
            creds.github_client_id,
            creds.github_client_secret,
            token_timeout=config.token_exchange_timeout,
            user_timeout=config.identity_timeout,
        )
    else:
        logger.warning("GITHUB_CLIENT_ID/GITHUB_CLIENT_SECRET not set; GitHub login disabled")

    if creds.has_identity_store:
        app.state.store = SupabaseClient(creds.supabase_url, creds.supabase_key)
    else:
        logger.warning("SUPABASE_URL/SUPABASE_KEY not set; account bootstrap disabled")

    if creds.gemini_api_key and creds.gemini_api_url:
        app.state.llm = GeminiProxyClient(
            creds.gemini_api_url,
            creds.gemini_api_key,
            timeout=config.analysis_timeout,
        )
    else:
        logger.warning("GEMINI_API_KEY/GEMINI_API_URL not set; /api/analyze will return 500")

    # Dashboard origin plus the Vite dev server
    origins = sorted({config.app_base_url, VITE_DEV_ORIGIN})
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from backend.routes import router
    app.include_router(router)

    logger.info(f"FastAPI app initialized for {config.app_base_url}")
    return app
