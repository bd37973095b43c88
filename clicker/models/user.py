"""Database model for anonymous players."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


def new_user_id() -> str:
    """Return a fresh opaque user identifier."""
    return uuid.uuid4().hex


class UserRecord(SQLModel, table=True):
    """Persisted state for one anonymous player."""

    __tablename__ = "user_record"

    user_id: str = ORMField(default_factory=new_user_id, primary_key=True)
    username: Optional[str] = ORMField(default=None, index=True)
    clicks: int = 0
    click_multiplier: int = 1
    created_at: datetime = ORMField(default_factory=utcnow, index=True)

    def clone(self) -> "UserRecord":
        return UserRecord(
            user_id=self.user_id,
            username=self.username,
            clicks=self.clicks,
            click_multiplier=self.click_multiplier,
            created_at=self.created_at,
        )

    def to_snapshot(self) -> Dict[str, Any]:
        """Serialise to the JSON snapshot layout (keyed externally by id)."""

        return {
            "username": self.username,
            "clicks": self.clicks,
            "clickMultiplier": self.click_multiplier,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_snapshot(cls, user_id: str, data: Dict[str, Any]) -> "UserRecord":
        """Rebuild a record, defaulting fields that older snapshots lack."""

        username = data.get("username")
        raw_created = data.get("createdAt")
        created_at = datetime.fromisoformat(raw_created) if raw_created else utcnow()
        return cls(
            user_id=str(user_id),
            username=str(username) if username is not None else None,
            clicks=max(0, int(data.get("clicks") or 0)),
            click_multiplier=max(1, int(data.get("clickMultiplier") or 1)),
            created_at=created_at,
        )


__all__ = ["UserRecord", "new_user_id"]
