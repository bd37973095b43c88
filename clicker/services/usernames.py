"""Username validation."""

from __future__ import annotations

import re
from typing import Any, Callable, Optional

from better_profanity import profanity

from .errors import (
    UsernameEmpty,
    UsernameError,
    UsernameInvalidCharacters,
    UsernameProfane,
    UsernameRequired,
    UsernameTooLong,
)

USERNAME_MAX_LENGTH = 20
_ALLOWED = re.compile(r"[A-Za-z0-9 _\-]+")

ProfanityCheck = Callable[[str], bool]


def default_is_profane(text: str) -> bool:
    """Profanity judgment backed by the better-profanity word list."""

    return profanity.contains_profanity(text)


def validate_username(
    raw: Any, is_profane: ProfanityCheck = default_is_profane
) -> Optional[UsernameError]:
    """Return the first rule ``raw`` breaks, or ``None`` when it is acceptable."""

    if not raw or not isinstance(raw, str):
        return UsernameRequired()
    trimmed = raw.strip()
    if not trimmed:
        return UsernameEmpty()
    if len(trimmed) > USERNAME_MAX_LENGTH:
        return UsernameTooLong()
    if not _ALLOWED.fullmatch(trimmed):
        return UsernameInvalidCharacters()
    if is_profane(trimmed):
        return UsernameProfane()
    return None


__all__ = [
    "USERNAME_MAX_LENGTH",
    "ProfanityCheck",
    "default_is_profane",
    "validate_username",
]
