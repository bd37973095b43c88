"""Click, username and upgrade operations over a user store."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..models import UserRecord
from .errors import (
    InsufficientBalance,
    UnknownUser,
    UpgradeAlreadyOwned,
    UserNotFound,
    UsernameTaken,
)
from .ranking import DEFAULT_LEADERBOARD_SIZE, compute_leaderboard, is_in_top
from .store import UserStore
from .usernames import ProfanityCheck, default_is_profane, validate_username

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpgradeTier:
    cost: int
    multiplier: int


# Index 0 is the first purchasable tier; a player at multiplier 1 owns none.
UPGRADE_TIERS: Tuple[UpgradeTier, ...] = (UpgradeTier(cost=500, multiplier=2),)


class _LockRegistry:
    """One lock per user id, created on demand."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    @contextmanager
    def hold(self, user_id: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(user_id, threading.Lock())
        with lock:
            yield


class ClickerGame:
    """Mutation engine; every public operation is atomic per user record."""

    def __init__(
        self,
        store: UserStore,
        is_profane: ProfanityCheck = default_is_profane,
        leaderboard_size: int = DEFAULT_LEADERBOARD_SIZE,
        upgrade_tiers: Tuple[UpgradeTier, ...] = UPGRADE_TIERS,
    ):
        self.store = store
        self.is_profane = is_profane
        self.leaderboard_size = leaderboard_size
        self.upgrade_tiers = upgrade_tiers
        self._locks = _LockRegistry()
        self._names_lock = threading.Lock()

    def leaderboard(self) -> List[Dict[str, Any]]:
        return compute_leaderboard(self.store.all(), self.leaderboard_size)

    def in_top(self, user_id: str) -> bool:
        return is_in_top(self.store.all(), user_id, self.leaderboard_size)

    def register_click(self, user_id: Optional[str] = None) -> Dict[str, Any]:
        """Credit one press, creating the player if the id is absent or unknown."""

        record = self.store.get(user_id) if isinstance(user_id, str) and user_id else None
        if record is None:
            record = self.store.create()
            logger.info("Created user %s", record.user_id)

        with self._locks.hold(record.user_id):
            record = self.store.get(record.user_id) or record
            record.clicks += record.click_multiplier
            self.store.put(record)

        in_top = self.in_top(record.user_id)
        return {
            "userId": record.user_id,
            "clicks": record.clicks,
            "username": record.username,
            "clickMultiplier": record.click_multiplier,
            "inTop100": in_top,
            "needsUsername": in_top and record.username is None,
            "leaderboard": self.leaderboard(),
        }

    def assign_username(self, user_id: Any, raw: Any) -> Dict[str, Any]:
        """Claim a display name for a player; names are unique ignoring case."""

        self._require_user(user_id)

        error = validate_username(raw, self.is_profane)
        if error is not None:
            raise error
        trimmed = raw.strip()
        folded = trimmed.lower()

        with self._names_lock, self._locks.hold(user_id):
            for other in self.store.all():
                if other.user_id == user_id or other.username is None:
                    continue
                if other.username.lower() == folded:
                    raise UsernameTaken()

            record = self._require_user(user_id)
            record.username = trimmed
            self.store.put(record)

        logger.info("User %s claimed username %r", user_id, trimmed)
        return {
            "success": True,
            "username": trimmed,
            "leaderboard": self.leaderboard(),
        }

    def purchase_upgrade(self, user_id: Any) -> Dict[str, Any]:
        """Buy the next multiplier tier, paying for it in clicks."""

        self._require_user(user_id)

        with self._locks.hold(user_id):
            record = self._require_user(user_id)
            tier = self._next_tier(record)
            if tier is None:
                raise UpgradeAlreadyOwned()
            if record.clicks < tier.cost:
                raise InsufficientBalance(
                    f"Not enough clicks: the upgrade costs {tier.cost}"
                )
            record.clicks -= tier.cost
            record.click_multiplier = tier.multiplier
            self.store.put(record)

        logger.info("User %s bought x%d multiplier", user_id, record.click_multiplier)
        return {
            "userId": record.user_id,
            "clicks": record.clicks,
            "clickMultiplier": record.click_multiplier,
            "leaderboard": self.leaderboard(),
        }

    def user_state(self, user_id: str) -> Dict[str, Any]:
        record = self.store.get(user_id)
        if record is None:
            raise UserNotFound()
        return {
            "userId": record.user_id,
            "clicks": record.clicks,
            "username": record.username,
            "clickMultiplier": record.click_multiplier,
            "inTop100": self.in_top(record.user_id),
        }

    def _next_tier(self, record: UserRecord) -> Optional[UpgradeTier]:
        for tier in self.upgrade_tiers:
            if tier.multiplier > record.click_multiplier:
                return tier
        return None

    def _require_user(self, user_id: Any) -> UserRecord:
        if not user_id or not isinstance(user_id, str):
            raise UnknownUser()
        record = self.store.get(user_id)
        if record is None:
            raise UnknownUser()
        return record


__all__ = ["ClickerGame", "UPGRADE_TIERS", "UpgradeTier"]
