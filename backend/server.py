#!/usr/bin/env python3
"""
Run the Pullwise API with uvicorn.

Usage:
    python backend/server.py [--host HOST] [--port PORT] [--no-reload]
    uvicorn backend.app:create_app --factory
"""

import argparse
from typing import List, Optional


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pullwise API Server")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    # The dashboard's Vite dev server proxies /api to port 3000
    parser.add_argument("--port", type=int, default=3000, help="Port (default: 3000)")
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload (production)")
    return parser


def main(argv: Optional[List[str]] = None):
    """Launch the FastAPI backend server."""
    args = build_parser().parse_args(argv)

    import uvicorn
    uvicorn.run(
        "backend.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=not args.no_reload,
        log_level="info"
    )


if __name__ == "__main__":
    main()
