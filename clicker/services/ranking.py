"""Leaderboard and Top-N membership helpers."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..models import UserRecord

DEFAULT_LEADERBOARD_SIZE = 100


def _by_clicks(records: Sequence[UserRecord]) -> List[UserRecord]:
    # stable: equal scores keep store (creation) order
    return sorted(records, key=lambda record: record.clicks, reverse=True)


def compute_leaderboard(
    records: Sequence[UserRecord], size: int = DEFAULT_LEADERBOARD_SIZE
) -> List[Dict[str, Any]]:
    """Rank named users by clicks, highest first, truncated to ``size``."""

    named = [record for record in records if record.username is not None]
    return [
        {
            "userId": record.user_id,
            "username": record.username,
            "clicks": record.clicks,
            "rank": position,
        }
        for position, record in enumerate(_by_clicks(named)[:size], start=1)
    ]


def is_in_top(
    records: Sequence[UserRecord], user_id: str, size: int = DEFAULT_LEADERBOARD_SIZE
) -> bool:
    """Whether ``user_id`` is among the ``size`` highest scores of all users.

    Unlike :func:`compute_leaderboard` this considers users without a name,
    so it can decide when to ask a player for one.
    """

    top = _by_clicks(records)[:size]
    return any(record.user_id == user_id for record in top)


__all__ = ["DEFAULT_LEADERBOARD_SIZE", "compute_leaderboard", "is_in_top"]
