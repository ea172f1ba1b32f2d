"""Host-facing message and query types plus stateless validation."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from kudos.errors import (
    CommentTooLongError,
    InvalidAddressError,
    InvalidAmountError,
    SameAddressError,
)
from kudos.keys import MAX_UINT64
from kudos.models.ledger import LeaderboardEntry

MAX_UINT32 = 2**32 - 1

_ADDRESS_DATA = re.compile(r"[0-9a-z]+")


def is_valid_address(address: str, prefix: str) -> bool:
    """True when *address* looks like ``<prefix>1<data>`` with lowercase data."""
    if not isinstance(address, str) or not prefix:
        return False
    head = f"{prefix}1"
    if not address.startswith(head):
        return False
    return _ADDRESS_DATA.fullmatch(address[len(head) :]) is not None


def validate_address(address: str, prefix: str, field: str = "address") -> None:
    if not is_valid_address(address, prefix):
        raise InvalidAddressError(f"invalid {field}: {address!r}")


class MsgSendKudos(BaseModel):
    from_address: str
    to_address: str
    amount: int = Field(ge=0, le=MAX_UINT64)
    comment: str = ""

    def validate_basic(self, *, address_prefix: str, max_comment_length: int) -> None:
        """Stateless checks, in the same order the keeper applies them."""
        validate_address(self.from_address, address_prefix, "from address")
        validate_address(self.to_address, address_prefix, "to address")
        if self.from_address == self.to_address:
            raise SameAddressError()
        if self.amount == 0:
            raise InvalidAmountError()
        if len(self.comment) > max_comment_length:
            raise CommentTooLongError(f"comment exceeds {max_comment_length} characters")


class MsgSendKudosResponse(BaseModel):
    history_id: int


class QueryKudosBalanceRequest(BaseModel):
    address: str


class QueryKudosBalanceResponse(BaseModel):
    balance: int


class QueryKudosLeaderboardRequest(BaseModel):
    limit: int = Field(default=0, ge=0, le=MAX_UINT32)


class QueryKudosLeaderboardResponse(BaseModel):
    entries: list[LeaderboardEntry] = Field(default_factory=list)


__all__ = [
    "MAX_UINT32",
    "MsgSendKudos",
    "MsgSendKudosResponse",
    "QueryKudosBalanceRequest",
    "QueryKudosBalanceResponse",
    "QueryKudosLeaderboardRequest",
    "QueryKudosLeaderboardResponse",
    "is_valid_address",
    "validate_address",
]
