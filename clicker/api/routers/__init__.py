"""Aggregate API routers."""

from fastapi import APIRouter

from .clicks import router as clicks_router
from .leaderboard import router as leaderboard_router
from .system import router as system_router
from .users import router as users_router

GAME_ROUTERS: tuple[APIRouter, ...] = (
    clicks_router,
    leaderboard_router,
    users_router,
)

SYSTEM_ROUTERS: tuple[APIRouter, ...] = (system_router,)

__all__ = ["GAME_ROUTERS", "SYSTEM_ROUTERS"]
