"""Error taxonomy for the kudos ledger.

Domain errors subclass :class:`KudosError` and are always raised before any
write happens, so a rejected message leaves no partial state behind.
:class:`StoreError` is different: it means the key-value store itself is
broken and the enclosing operation must be aborted.
"""

from __future__ import annotations

CODESPACE = "kudos"


class KudosError(Exception):
    """Base class for expected, user-facing ledger rejections."""

    codespace: str = CODESPACE
    code: int = 0
    default_message: str = "kudos error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.codespace}:{self.code}: {self.message}"


class InvalidAddressError(KudosError):
    code = 1
    default_message = "invalid address"


class SameAddressError(KudosError):
    code = 2
    default_message = "cannot send kudos to yourself"


class InvalidAmountError(KudosError):
    code = 3
    default_message = "amount must be greater than 0"


class CommentTooLongError(KudosError):
    code = 4
    default_message = "comment exceeds 140 characters"


class InvalidLeaderboardParamsError(KudosError):
    code = 5
    default_message = "invalid leaderboard parameters"


class DailyLimitExceededError(KudosError):
    code = 6
    default_message = "daily kudos limit exceeded"


class StoreError(RuntimeError):
    """Fatal failure of the underlying key-value store."""


__all__ = [
    "CODESPACE",
    "CommentTooLongError",
    "DailyLimitExceededError",
    "InvalidAddressError",
    "InvalidAmountError",
    "InvalidLeaderboardParamsError",
    "KudosError",
    "SameAddressError",
    "StoreError",
]
