"""FastAPI application for playing Fritz over HTTP."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from fritz import __version__
from fritz.web.security import get_real_ip
from fritz.web.db import init_db, get_engine
from fritz.web.routes import boards, games, stats

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = "http://localhost:5173"  # Vite dev server
DEFAULT_RATE_LIMIT = "120/minute"


def cors_origins() -> list[str]:
    raw = os.environ.get("FRITZ_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    engine = get_engine(app.state.db_path)
    init_db(engine)
    logger.info(f"Database ready at {app.state.db_path or 'default path'}")

    yield


def create_app(db_path: Optional[str] = None, rate_limit: Optional[str] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: SQLite file (defaults to FRITZ_DB_PATH)
        rate_limit: Per-client limit such as "120/minute" (defaults to FRITZ_RATE_LIMIT)
    """
    app = FastAPI(
        title="Fritz",
        description="Find the hidden animals",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.db_path = db_path

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting using real IP
    limit = rate_limit or os.environ.get("FRITZ_RATE_LIMIT", DEFAULT_RATE_LIMIT)
    app.state.limiter = Limiter(key_func=get_real_ip, default_limits=[limit])
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Health check
    @app.get("/health")
    async def health():
        return {"status": "ok"}

    app.include_router(games.router, prefix="/api", tags=["games"])
    app.include_router(boards.router, prefix="/api", tags=["boards"])
    app.include_router(stats.router, prefix="/api", tags=["stats"])

    return app
