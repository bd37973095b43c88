"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Persistence ---------------------------------------------------------------
STORE_BACKEND = os.getenv("STORE_BACKEND", "json").strip().lower()
if STORE_BACKEND not in {"json", "sqlite"}:
    raise RuntimeError("STORE_BACKEND must be 'json' or 'sqlite'")

DATA_DIR = Path(os.getenv("DATA_DIR", "data"))
SNAPSHOT_PATH = DATA_DIR / os.getenv("SNAPSHOT_FILE", "users.json")
SQLITE_PATH = DATA_DIR / os.getenv("SQLITE_FILE", "clicker.db")


# HTTP ----------------------------------------------------------------------
API_PREFIX = os.getenv("API_PREFIX", "/api").rstrip("/")
HOST = os.getenv("HOST", "127.0.0.1")
PORT = _env_int("PORT", 3001)
RELOAD = _env_bool("RELOAD", False)

# FRONTEND_ORIGIN can contain a comma-separated list for multi-domain deploys.
_frontend_origins = _split_csv(os.getenv("FRONTEND_ORIGIN"))
_additional_origins = _split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS"))

_local_dev_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

ALLOWED_CORS_ORIGINS = _unique(
    [
        *_frontend_origins,
        *_additional_origins,
        *_local_dev_origins,
    ]
)


# Game rules ----------------------------------------------------------------
LEADERBOARD_SIZE = _env_int("LEADERBOARD_SIZE", 100)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


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
]
