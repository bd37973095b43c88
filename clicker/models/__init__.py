"""Database model exports."""

from .user import UserRecord, new_user_id

__all__ = [
    "UserRecord",
    "new_user_id",
]
