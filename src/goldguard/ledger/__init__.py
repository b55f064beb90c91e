"""
Ledger module - gold token state machine for GoldGuard.

Provides the explicit ledger state, the guarded operations over it,
the GoldLedger facade and the persisted executor.
"""

from goldguard.ledger.executor import LedgerExecutor
from goldguard.ledger.ledger import GoldLedger
from goldguard.ledger.state import LedgerState

__all__ = [
    "GoldLedger",
    "LedgerExecutor",
    "LedgerState",
]
