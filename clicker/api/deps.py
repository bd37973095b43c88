"""Request dependencies shared by the routers."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import Request

from ..services import ClickerGame


def get_game(request: Request) -> ClickerGame:
    """FastAPI dependency returning the game bound to this application."""

    return request.app.state.game


def as_object(body: Any) -> Dict[str, Any]:
    """Treat anything but a JSON object as an empty payload."""

    return body if isinstance(body, dict) else {}


__all__ = ["as_object", "get_game"]
