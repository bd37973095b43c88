"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...services import USERNAME_MAX_LENGTH, ClickerGame
from ..deps import get_game

router = APIRouter(tags=["system"])


@router.get("/health")
def health(game: ClickerGame = Depends(get_game)) -> Dict[str, Any]:
    """Simple readiness probe."""

    return {"ok": True, "users": game.store.count()}


@router.get("/config")
def get_config(game: ClickerGame = Depends(get_game)) -> Dict[str, Any]:
    """Expose game constants the frontend renders."""

    return {
        "leaderboardSize": game.leaderboard_size,
        "usernameMaxLength": USERNAME_MAX_LENGTH,
        "upgrades": [
            {"tier": index, "cost": tier.cost, "multiplier": tier.multiplier}
            for index, tier in enumerate(game.upgrade_tiers)
        ],
    }


__all__ = ["router"]
