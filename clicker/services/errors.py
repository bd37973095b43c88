"""Game errors surfaced to API callers."""

from __future__ import annotations


class ClickerError(Exception):
    """Business-rule failure rendered to the client as ``{"error": message}``."""

    status_code = 400
    message = "Request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


class UnknownUser(ClickerError):
    message = "Invalid or unknown user ID"


class UserNotFound(ClickerError):
    status_code = 404
    message = "User not found"


class UsernameError(ClickerError):
    """Base class for username validation failures."""


class UsernameRequired(UsernameError):
    message = "Username is required"


class UsernameEmpty(UsernameError):
    message = "Username cannot be empty"


class UsernameTooLong(UsernameError):
    message = "Username must be 20 characters or fewer"


class UsernameInvalidCharacters(UsernameError):
    message = (
        "Username may only contain letters, numbers, spaces, underscores, and hyphens"
    )


class UsernameProfane(UsernameError):
    message = "Please choose a family-friendly username"


class UsernameTaken(ClickerError):
    message = "That username is already taken"


class UpgradeAlreadyOwned(ClickerError):
    message = "Upgrade already purchased"


class InsufficientBalance(ClickerError):
    message = "Not enough clicks to buy this upgrade"


class StorageIOError(Exception):
    """Reading or writing durable state failed."""


__all__ = [
    "ClickerError",
    "InsufficientBalance",
    "StorageIOError",
    "UnknownUser",
    "UpgradeAlreadyOwned",
    "UserNotFound",
    "UsernameEmpty",
    "UsernameError",
    "UsernameInvalidCharacters",
    "UsernameProfane",
    "UsernameRequired",
    "UsernameTaken",
    "UsernameTooLong",
]
