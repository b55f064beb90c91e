"""
Configuration management for GoldGuard.

Handles loading ledger configuration from environment variables and validation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any

from goldguard.core.exceptions import ConfigurationError
from goldguard.core.types import BURN_ADDRESS

DEFAULT_MAX_SUPPLY = 1_000_000_000_000
DEFAULT_MIN_REDEMPTION = 1_000_000
DEFAULT_REDEMPTION_LOCK_PERIOD = 1440  # blocks


def _get_env_var(name: str, default: str | None = None, required: bool = False) -> str | None:
    """Get environment variable with optional default."""
    value = os.environ.get(name, default)
    if required and not value:
        raise ConfigurationError(f"Required environment variable {name} is not set")
    return value


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env_var(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw.replace("_", ""))
    except ValueError:
        raise ConfigurationError(
            f"Environment variable {name} must be an integer",
            details={name: raw},
        ) from None


@dataclass(frozen=True)
class LedgerConfig:
    """Ledger configuration fixed at construction."""

    admin: str
    # Defaults to the admin identity when left empty
    oracle: str = ""
    max_supply: int = DEFAULT_MAX_SUPPLY
    min_redemption: int = DEFAULT_MIN_REDEMPTION
    redemption_lock_period: int = DEFAULT_REDEMPTION_LOCK_PERIOD
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.admin:
            raise ConfigurationError("admin is required")
        if not self.oracle:
            object.__setattr__(self, "oracle", self.admin)
        for name in ("admin", "oracle"):
            if getattr(self, name) == BURN_ADDRESS:
                raise ConfigurationError(f"{name} cannot be the burn address")
        for name in ("max_supply", "min_redemption", "redemption_lock_period"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer", details={name: value})
        if self.max_supply <= 0:
            raise ConfigurationError("max_supply must be positive")
        if self.min_redemption < 0:
            raise ConfigurationError("min_redemption cannot be negative")
        if self.redemption_lock_period < 0:
            raise ConfigurationError("redemption_lock_period cannot be negative")

    @classmethod
    def from_env(cls, **overrides: Any) -> LedgerConfig:
        """Load configuration from environment variables."""
        admin = overrides.get("admin") or _get_env_var("GOLDGUARD_ADMIN", required=True)
        oracle = overrides.get("oracle") or _get_env_var("GOLDGUARD_ORACLE", default="")

        max_supply = overrides.get("max_supply")
        if max_supply is None:
            max_supply = _get_env_int("GOLDGUARD_MAX_SUPPLY", DEFAULT_MAX_SUPPLY)

        min_redemption = overrides.get("min_redemption")
        if min_redemption is None:
            min_redemption = _get_env_int("GOLDGUARD_MIN_REDEMPTION", DEFAULT_MIN_REDEMPTION)

        lock_period = overrides.get("redemption_lock_period")
        if lock_period is None:
            lock_period = _get_env_int(
                "GOLDGUARD_REDEMPTION_LOCK_PERIOD", DEFAULT_REDEMPTION_LOCK_PERIOD
            )

        log_level = overrides.get("log_level") or _get_env_var(
            "GOLDGUARD_LOG_LEVEL", default="INFO"
        )

        return cls(
            admin=admin,  # type: ignore
            oracle=oracle,  # type: ignore
            max_supply=max_supply,
            min_redemption=min_redemption,
            redemption_lock_period=lock_period,
            log_level=log_level,  # type: ignore
        )

    def with_updates(self, **updates: Any) -> LedgerConfig:
        """Create a new LedgerConfig with updated values."""
        current = {f.name: getattr(self, f.name) for f in fields(self)}
        current.update(updates)
        return LedgerConfig(**current)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for storage."""
        return {
            "admin": self.admin,
            "oracle": self.oracle,
            "max_supply": str(self.max_supply),
            "min_redemption": str(self.min_redemption),
            "redemption_lock_period": str(self.redemption_lock_period),
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LedgerConfig:
        """Create LedgerConfig from dictionary."""
        return cls(
            admin=data.get("admin", ""),
            oracle=data.get("oracle", ""),
            max_supply=int(data.get("max_supply", DEFAULT_MAX_SUPPLY)),
            min_redemption=int(data.get("min_redemption", DEFAULT_MIN_REDEMPTION)),
            redemption_lock_period=int(
                data.get("redemption_lock_period", DEFAULT_REDEMPTION_LOCK_PERIOD)
            ),
            log_level=data.get("log_level", "INFO"),
        )
