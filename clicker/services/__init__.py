"""Service layer helpers."""

from .game import UPGRADE_TIERS, ClickerGame, UpgradeTier
from .ranking import compute_leaderboard, is_in_top
from .store import JsonSnapshotStore, SqlUserStore, UserStore
from .usernames import USERNAME_MAX_LENGTH, default_is_profane, validate_username

__all__ = [
    "ClickerGame",
    "JsonSnapshotStore",
    "SqlUserStore",
    "UPGRADE_TIERS",
    "USERNAME_MAX_LENGTH",
    "UpgradeTier",
    "UserStore",
    "compute_leaderboard",
    "default_is_profane",
    "is_in_top",
    "validate_username",
]
