"""API assembly helpers."""

from __future__ import annotations

from fastapi import FastAPI

from .routers import GAME_ROUTERS, SYSTEM_ROUTERS


def register_routes(app: FastAPI, prefix: str = "") -> None:
    """Attach the game routers under ``prefix`` and system routers at the root."""

    for router in SYSTEM_ROUTERS:
        app.include_router(router)
    for router in GAME_ROUTERS:
        app.include_router(router, prefix=prefix)


__all__ = ["register_routes"]
