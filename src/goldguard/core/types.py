"""
Type definitions for GoldGuard.

This module contains the error codes, result types and small records
shared by the ledger, the executor and the storage layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Generic, TypeVar, Union

from goldguard.core.exceptions import LedgerRejectedError, ValidationError

T = TypeVar("T")

# Reserved principal meaning "no valid destination".
BURN_ADDRESS = "SP000000000000000000002Q6VF78"


class ErrorCode(IntEnum):
    """Rejection codes returned by ledger operations."""

    NOT_ADMIN = 100
    INSUFFICIENT_BALANCE = 101
    INSUFFICIENT_STAKE = 102
    SUPPLY_CAP_EXCEEDED = 103
    PAUSED = 104
    INVALID_RECIPIENT = 105
    INVALID_AMOUNT = 106
    NOT_ORACLE = 107
    # Shared by "redemption disabled" and "account still time-locked".
    REDEMPTION_LOCKED = 108


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful operation result."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value}


@dataclass(frozen=True)
class Err:
    """Rejected operation result carrying exactly one error code."""

    code: ErrorCode

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise LedgerRejectedError(
            f"Operation rejected with {self.code.name}",
            code=self.code,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"error": int(self.code)}


Result = Union[Ok[T], Err]


@dataclass(frozen=True)
class LedgerEvent:
    """
    Snapshot of the most recent mint or redemption.

    Attributes:
        recipient: Account credited (mint) or debited (redeem)
        amount: Units moved
        block_height: Height at which the operation succeeded
    """

    recipient: str = ""
    amount: int = 0
    block_height: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "recipient": self.recipient,
            "amount": str(self.amount),
            "block_height": str(self.block_height),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LedgerEvent:
        return cls(
            recipient=data.get("recipient", ""),
            amount=int(data.get("amount", "0")),
            block_height=int(data.get("block_height", "0")),
        )


@dataclass(frozen=True)
class CallContext:
    """Caller identity and block height supplied by the host for one call."""

    caller: str
    block_height: int

    def __post_init__(self) -> None:
        require_int("block_height", self.block_height)
        if self.block_height < 0:
            raise ValidationError(
                "block_height must be non-negative",
                details={"block_height": self.block_height},
            )


def require_int(name: str, value: Any) -> int:
    """Reject anything that is not a plain integer (bool included)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{name} must be an integer, got {type(value).__name__}",
            details={name: repr(value)},
        )
    return value
