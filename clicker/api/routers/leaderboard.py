"""Leaderboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...services import ClickerGame
from ..deps import get_game

router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboard")
def get_leaderboard(game: ClickerGame = Depends(get_game)):
    """Get the current Top 100 of named players."""

    return {"leaderboard": game.leaderboard()}


__all__ = ["router"]
