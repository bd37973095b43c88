"""Database configuration for the SQLite-backed user store."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.engine import Engine
from sqlmodel import create_engine


def make_engine(path: Path) -> Engine:
    """Create a SQLite engine, ensuring the parent directory exists."""

    path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(
        f"sqlite:///{path}", connect_args={"check_same_thread": False}
    )


__all__ = ["make_engine"]
