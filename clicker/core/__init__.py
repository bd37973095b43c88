"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    API_PREFIX,
    DATA_DIR,
    HOST,
    LEADERBOARD_SIZE,
    LOG_LEVEL,
    PORT,
    RELOAD,
    SNAPSHOT_PATH,
    SQLITE_PATH,
    STORE_BACKEND,
)
from .database import make_engine
from .log import configure_logging
from .time import utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "API_PREFIX",
    "DATA_DIR",
    "HOST",
    "LEADERBOARD_SIZE",
    "LOG_LEVEL",
    "PORT",
    "RELOAD",
    "SNAPSHOT_PATH",
    "SQLITE_PATH",
    "STORE_BACKEND",
    "configure_logging",
    "make_engine",
    "utcnow",
]
