"""
Exception hierarchy for GoldGuard.

All package-specific exceptions inherit from GoldGuardError for easy catching.
Ledger operations never raise for business rejections; they return an
``Err`` result. These exceptions cover misuse and environment faults.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from goldguard.core.types import ErrorCode


class GoldGuardError(Exception):
    """
    Base exception for all GoldGuard errors.

    Example:
        >>> try:
        ...     ledger.mint(admin, "ST2...", 10, True).unwrap()
        ... except GoldGuardError as e:
        ...     print(f"Ledger error: {e}")
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(GoldGuardError):
    """
    Configuration is missing or invalid.

    Raised when:
    - Required configuration values are not provided
    - Configuration values fail validation
    - Environment variables hold unparsable values
    """

    pass


class ValidationError(GoldGuardError):
    """
    Input validation error.

    Raised when:
    - An amount or block height is not an integer
    - The host supplies a block height lower than the current one
    """

    pass


class LedgerRejectedError(GoldGuardError):
    """
    An operation result was unwrapped after the ledger rejected it.

    Only raised by ``Err.unwrap()``; the ledger itself returns the code.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.code = code

    def __str__(self) -> str:
        return f"[{self.code.name}:{int(self.code)}] {self.message}"


class StorageError(GoldGuardError):
    """
    Persisted ledger state could not be read or written.

    Raised when:
    - A stored snapshot is malformed
    - The backend is unknown or unavailable
    """

    pass


class LedgerBusyError(StorageError):
    """
    The ledger lock is held by another transaction.

    Raised by the executor after exhausting its lock retries.
    """

    def __init__(
        self,
        message: str,
        ledger_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.ledger_id = ledger_id
