"""
GoldLedger facade.

Owns one LedgerState and the current block height, and dispatches every
operation against that state. Operations check before they write, so a
rejected call leaves the state untouched without any copy being taken.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from goldguard.core.config import LedgerConfig
from goldguard.core.exceptions import ValidationError
from goldguard.core.types import CallContext, LedgerEvent, Result, require_int
from goldguard.ledger import operations
from goldguard.ledger.state import LedgerState

logger = logging.getLogger(__name__)


class GoldLedger:
    """
    Gold-backed token ledger.

    Example:
        >>> ledger = GoldLedger(LedgerConfig(admin="ST1ADMIN"), block_height=1000)
        >>> ledger.mint("ST1ADMIN", "ST2ALICE", 1_000_000, True)
        Ok(value=True)
        >>> ledger.balance_of("ST2ALICE")
        1000000
    """

    def __init__(self, config: LedgerConfig, block_height: int = 0) -> None:
        """
        Initialize a fresh ledger.

        Args:
            config: Ledger configuration
            block_height: Current chain height supplied by the host
        """
        require_int("block_height", block_height)
        if block_height < 0:
            raise ValidationError("block_height must be non-negative")
        self._state = LedgerState(config=config)
        self._block_height = block_height

    @classmethod
    def from_state(cls, state: LedgerState, block_height: int = 0) -> GoldLedger:
        """Resume from previously committed state, using the config it carries."""
        ledger = cls(state.config, block_height=block_height)
        ledger._state = state
        return ledger

    @property
    def config(self) -> LedgerConfig:
        return self._state.config

    @property
    def state(self) -> LedgerState:
        return self._state

    @property
    def block_height(self) -> int:
        return self._block_height

    def advance_to(self, block_height: int) -> None:
        """
        Move the ledger clock to a new height.

        Raises:
            ValidationError: If the height is not an integer or goes backwards
        """
        require_int("block_height", block_height)
        if block_height < self._block_height:
            raise ValidationError(
                "block_height cannot decrease",
                details={"current": self._block_height, "requested": block_height},
            )
        self._block_height = block_height

    def snapshot(self) -> LedgerState:
        """Return a deep copy of the current state."""
        return self._state.copy()

    def _apply(self, op: Callable[..., Result[Any]], caller: str, *args: Any) -> Result[Any]:
        ctx = CallContext(caller=caller, block_height=self._block_height)
        return op(self._state, ctx, *args)

    # Role queries

    def is_admin(self, caller: str) -> bool:
        return operations.is_admin(self._state, caller)

    def is_oracle(self, caller: str) -> bool:
        return operations.is_oracle(self._state, caller)

    # Admin operations

    def set_paused(self, caller: str, pause: bool) -> Result[bool]:
        return self._apply(operations.set_paused, caller, pause)

    def set_redemption_enabled(self, caller: str, enabled: bool) -> Result[bool]:
        return self._apply(operations.set_redemption_enabled, caller, enabled)

    def set_oracle(self, caller: str, new_oracle: str) -> Result[bool]:
        return self._apply(operations.set_oracle, caller, new_oracle)

    # Token operations

    def mint(self, caller: str, recipient: str, amount: int, oracle_verified: bool) -> Result[bool]:
        return self._apply(operations.mint, caller, recipient, amount, oracle_verified)

    def redeem(self, caller: str, amount: int) -> Result[bool]:
        return self._apply(operations.redeem, caller, amount)

    def transfer(self, caller: str, recipient: str, amount: int) -> Result[bool]:
        return self._apply(operations.transfer, caller, recipient, amount)

    def stake(self, caller: str, amount: int) -> Result[bool]:
        return self._apply(operations.stake, caller, amount)

    def unstake(self, caller: str, amount: int) -> Result[bool]:
        return self._apply(operations.unstake, caller, amount)

    def execute(self, operation: str, caller: str, *args: Any) -> Result[Any]:
        """
        Run an operation by name.

        Raises:
            ValidationError: If the operation name is unknown
        """
        op = operations.OPERATIONS.get(operation)
        if op is None:
            raise ValidationError(
                f"Unknown ledger operation: '{operation}'",
                details={"available": sorted(operations.OPERATIONS)},
            )
        return self._apply(op, caller, *args)

    # Queries

    def balance_of(self, account: str) -> int:
        return self._state.balance_of(account)

    def staked_of(self, account: str) -> int:
        return self._state.staked_of(account)

    def redemption_lock_of(self, account: str) -> int:
        return self._state.redemption_lock_of(account)

    @property
    def total_supply(self) -> int:
        return self._state.total_supply

    @property
    def paused(self) -> bool:
        return self._state.paused

    @property
    def redemption_enabled(self) -> bool:
        return self._state.redemption_enabled

    @property
    def admin(self) -> str:
        return self._state.admin

    @property
    def oracle(self) -> str:
        return self._state.oracle

    @property
    def last_mint_event(self) -> LedgerEvent:
        return self._state.last_mint_event

    @property
    def last_redemption_event(self) -> LedgerEvent:
        return self._state.last_redemption_event

    def check_invariants(self) -> list[str]:
        violations = self._state.check_invariants()
        for violation in violations:
            logger.error(f"Ledger invariant violated: {violation}")
        return violations
