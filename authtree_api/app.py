"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn authtree_api.app:app --reload

    # Or run directly
    python -m authtree_api.app
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from authtree.schemas.errors import AuthTreeException

from authtree_api.errors import (
    APIError,
    api_error_handler,
    authtree_error_handler,
    generic_error_handler,
)
from authtree_api.routes import health, leaves, proofs


def _resolve_log_level() -> int:
    """Resolve log level from AUTHTREE_LOG_LEVEL or authtree.json, defaulting to INFO."""
    raw = os.getenv("AUTHTREE_LOG_LEVEL")
    if raw is None:
        try:
            import json
            from pathlib import Path
            cfg_path = Path.cwd() / "authtree.json"
            if cfg_path.exists():
                with open(cfg_path) as f:
                    raw = json.load(f).get("logging", {}).get("level")
        except (OSError, ValueError, AttributeError):
            raw = None
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="authtree API",
        description="""
HTTP API for a fixed-depth authenticated (Merkle) tree.

## Endpoints

- **GET /root** - Current root hash and tree shape
- **GET /leaves/{index}** - Read a leaf with its inclusion proof
- **PUT /leaves/{index}** - Write a leaf, returns the proof against the new root
- **POST /verify** - Verify a proof document
- **GET /health** - Health check

Indices are global level-order indices; pass `offset=true` to address
leaves by their 0-based position instead.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(AuthTreeException, authtree_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(leaves.router)
    app.include_router(proofs.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
