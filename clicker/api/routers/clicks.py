"""Click and upgrade endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from ...services import ClickerGame
from ..deps import as_object, get_game

router = APIRouter(tags=["clicks"])


@router.post("/click")
def click(body: Any = Body(None), game: ClickerGame = Depends(get_game)):
    """Register one button press, creating the player on first use."""

    return game.register_click(as_object(body).get("userId"))


@router.post("/upgrade")
def purchase_upgrade(body: Any = Body(None), game: ClickerGame = Depends(get_game)):
    """Buy the click multiplier upgrade."""

    return game.purchase_upgrade(as_object(body).get("userId"))


__all__ = ["router"]
