"""Web API backend for Fritz."""

from fritz.web.models import Base, BoardRecord, GameRecord, PlayerStats
from fritz.web.db import get_engine, init_db, get_session, get_test_db

__all__ = [
    "Base",
    "BoardRecord",
    "GameRecord",
    "PlayerStats",
    "get_engine",
    "init_db",
    "get_session",
    "get_test_db",
]
