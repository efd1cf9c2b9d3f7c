"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session as SQLSession

from fritz.web.db import get_session
from fritz.web.security import get_real_ip, hash_ip


def get_db(request: Request) -> Generator[SQLSession, None, None]:
    """Get database session for the app's configured database."""
    db = get_session(getattr(request.app.state, "db_path", None))
    try:
        yield db
    finally:
        db.close()


def get_player_id(request: Request) -> str:
    """Anonymous player identity (hashed client IP)."""
    return hash_ip(get_real_ip(request))
