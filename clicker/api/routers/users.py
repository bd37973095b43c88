"""Player profile endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from ...services import ClickerGame
from ..deps import as_object, get_game

router = APIRouter(tags=["users"])


@router.post("/username")
def set_username(body: Any = Body(None), game: ClickerGame = Depends(get_game)):
    """Claim a display name once the player has reached the Top 100."""

    payload = as_object(body)
    return game.assign_username(payload.get("userId"), payload.get("username"))


@router.get("/user/{user_id}")
def get_user(user_id: str, game: ClickerGame = Depends(get_game)):
    """Return a player's state, used by the client to restore a session."""

    return game.user_state(user_id)


__all__ = ["router"]
