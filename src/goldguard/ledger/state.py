"""
Ledger state record.

All mutable ledger data lives in one LedgerState instance that is passed
explicitly into every operation. Maps treat absent keys as zero; reading
never inserts a key.
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

from goldguard.core.config import LedgerConfig
from goldguard.core.exceptions import ConfigurationError, StorageError
from goldguard.core.types import LedgerEvent


@dataclass
class LedgerState:
    """
    Complete state of one gold token ledger.

    Attributes:
        config: Immutable limits and the initial roles
        admin: Identity allowed to change flags and co-authorize mints
        oracle: Identity attesting collateral for mints
        paused: Global pause switch
        redemption_enabled: Global redemption switch
        total_supply: Units in circulation, spendable plus staked
        balances: Spendable amount per account
        staked: Staked amount per account, moved out of balances
        redemption_locks: Height before which each account may not redeem
        last_mint_event: Most recent successful mint
        last_redemption_event: Most recent successful redemption
    """

    config: LedgerConfig
    admin: str | None = None
    oracle: str | None = None
    paused: bool = False
    redemption_enabled: bool = False
    total_supply: int = 0
    balances: dict[str, int] = field(default_factory=dict)
    staked: dict[str, int] = field(default_factory=dict)
    redemption_locks: dict[str, int] = field(default_factory=dict)
    last_mint_event: LedgerEvent = field(default_factory=LedgerEvent)
    last_redemption_event: LedgerEvent = field(default_factory=LedgerEvent)

    def __post_init__(self) -> None:
        # Roles come from the config only for a fresh ledger; a stored role,
        # including an empty one, is kept as is
        if self.admin is None:
            self.admin = self.config.admin
        if self.oracle is None:
            self.oracle = self.config.oracle

    def balance_of(self, account: str) -> int:
        return self.balances.get(account, 0)

    def staked_of(self, account: str) -> int:
        return self.staked.get(account, 0)

    def redemption_lock_of(self, account: str) -> int:
        return self.redemption_locks.get(account, 0)

    def check_invariants(self) -> list[str]:
        """
        Check the supply and sign invariants.

        Returns:
            Descriptions of violated invariants, empty when the state is sound
        """
        violations = []
        # Staking moves units between the two maps without touching supply
        held = sum(self.balances.values()) + sum(self.staked.values())
        if self.total_supply != held:
            violations.append(
                f"total_supply {self.total_supply} != balances plus staked {held}"
            )
        if self.total_supply > self.config.max_supply:
            violations.append(
                f"total_supply {self.total_supply} exceeds max_supply {self.config.max_supply}"
            )
        for account, amount in self.balances.items():
            if amount < 0:
                violations.append(f"negative balance for {account}: {amount}")
        for account, amount in self.staked.items():
            if amount < 0:
                violations.append(f"negative stake for {account}: {amount}")
        return violations

    def copy(self) -> LedgerState:
        """Return an independent deep copy."""
        return deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for storage. Integers are stored as strings."""
        return {
            "config": self.config.to_dict(),
            "admin": self.admin,
            "oracle": self.oracle,
            "paused": self.paused,
            "redemption_enabled": self.redemption_enabled,
            "total_supply": str(self.total_supply),
            "balances": {k: str(v) for k, v in self.balances.items()},
            "staked": {k: str(v) for k, v in self.staked.items()},
            "redemption_locks": {k: str(v) for k, v in self.redemption_locks.items()},
            "last_mint_event": self.last_mint_event.to_dict(),
            "last_redemption_event": self.last_redemption_event.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LedgerState:
        """Create LedgerState from dictionary."""
        try:
            return cls(
                config=LedgerConfig.from_dict(data["config"]),
                admin=data.get("admin"),
                oracle=data.get("oracle"),
                paused=bool(data.get("paused", False)),
                redemption_enabled=bool(data.get("redemption_enabled", False)),
                total_supply=int(data.get("total_supply", "0")),
                balances={k: int(v) for k, v in data.get("balances", {}).items()},
                staked={k: int(v) for k, v in data.get("staked", {}).items()},
                redemption_locks={
                    k: int(v) for k, v in data.get("redemption_locks", {}).items()
                },
                last_mint_event=LedgerEvent.from_dict(data.get("last_mint_event", {})),
                last_redemption_event=LedgerEvent.from_dict(
                    data.get("last_redemption_event", {})
                ),
            )
        except (ConfigurationError, KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Malformed ledger state: {e}") from e
