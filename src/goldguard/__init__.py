"""
GoldGuard - Gold-backed token ledger

Role-gated issuance and redemption, a staking sub-ledger and per-account
redemption locks, as a deterministic state machine driven by a host that
supplies the caller identity and block height.

Usage:
    >>> from goldguard import GoldLedger, LedgerConfig
    >>>
    >>> ledger = GoldLedger(LedgerConfig(admin="ST1ADMIN"), block_height=1000)
    >>> ledger.mint("ST1ADMIN", "ST2ALICE", 5_000_000, True)
    Ok(value=True)
    >>> ledger.transfer("ST2ALICE", "ST3BOB", 2_000_000)
    Ok(value=True)
"""

from goldguard.core.config import LedgerConfig
from goldguard.core.exceptions import (
    ConfigurationError,
    GoldGuardError,
    LedgerBusyError,
    LedgerRejectedError,
    StorageError,
    ValidationError,
)
from goldguard.core.logging import configure_logging, get_logger
from goldguard.core.types import (
    BURN_ADDRESS,
    CallContext,
    Err,
    ErrorCode,
    LedgerEvent,
    Ok,
    Result,
)
from goldguard.ledger import GoldLedger, LedgerExecutor, LedgerState
from goldguard.storage import InMemoryStorage, RedisStorage, StorageBackend, get_storage

__version__ = "0.1.0"

__all__ = [
    # Ledger
    "GoldLedger",
    "LedgerExecutor",
    "LedgerState",
    # Config
    "LedgerConfig",
    # Types
    "BURN_ADDRESS",
    "CallContext",
    "Err",
    "ErrorCode",
    "LedgerEvent",
    "Ok",
    "Result",
    # Exceptions
    "ConfigurationError",
    "GoldGuardError",
    "LedgerBusyError",
    "LedgerRejectedError",
    "StorageError",
    "ValidationError",
    # Storage
    "InMemoryStorage",
    "RedisStorage",
    "StorageBackend",
    "get_storage",
    # Logging
    "configure_logging",
    "get_logger",
]
