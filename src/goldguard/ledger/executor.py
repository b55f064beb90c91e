"""
Ledger Executor.

Host-side transaction layer around the ledger. Serializes calls against one
ledger with a storage lock, loads the committed state, applies a single
operation and commits the result only when the operation succeeded.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from goldguard.core.exceptions import LedgerBusyError
from goldguard.core.types import Result
from goldguard.ledger.ledger import GoldLedger
from goldguard.ledger.state import LedgerState

if TYPE_CHECKING:
    from goldguard.core.config import LedgerConfig
    from goldguard.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class LedgerExecutor:
    """
    Executes ledger operations against persisted state.

    Example:
        >>> executor = LedgerExecutor(InMemoryStorage(), config)
        >>> result = await executor.execute("mint", admin, 1000, "ST2...", 5_000_000, True)
    """

    COLLECTION = "ledger_state"

    def __init__(
        self,
        storage: StorageBackend,
        config: LedgerConfig,
        ledger_id: str = "main",
        lock_ttl: int = 30,
        retry_count: int = 3,
        retry_delay: float = 0.5,
    ) -> None:
        """
        Initialize executor.

        Args:
            storage: Storage backend (Redis/Memory)
            config: Configuration used when no state has been committed yet
            ledger_id: Key of the ledger within the storage collection
            lock_ttl: Lock time-to-live in seconds
            retry_count: Number of retries if the lock is held
            retry_delay: Delay between retries
        """
        self._storage = storage
        self._config = config
        self._ledger_id = ledger_id
        self._lock_ttl = lock_ttl
        self._retry_count = retry_count
        self._retry_delay = retry_delay

    @property
    def ledger_id(self) -> str:
        return self._ledger_id

    @property
    def _lock_key(self) -> str:
        return f"ledger:{self._ledger_id}"

    async def load(self) -> LedgerState:
        """Load committed state, or a fresh state if nothing is stored yet."""
        data = await self._storage.get(self.COLLECTION, self._ledger_id)
        if not data:
            return LedgerState(config=self._config)
        return LedgerState.from_dict(data)

    async def save(self, state: LedgerState) -> None:
        await self._storage.save(self.COLLECTION, self._ledger_id, state.to_dict())

    async def _acquire(self) -> str:
        for i in range(self._retry_count + 1):
            token = await self._storage.acquire_lock(self._lock_key, self._lock_ttl)
            if token:
                logger.debug(f"Acquired lock for ledger {self._ledger_id} (token: {token[:8]}...)")
                return token

            if i < self._retry_count:
                logger.debug(
                    f"Ledger {self._ledger_id} locked, retrying in {self._retry_delay}s..."
                )
                await asyncio.sleep(self._retry_delay)

        logger.warning(
            f"Failed to acquire lock for ledger {self._ledger_id} "
            f"after {self._retry_count} retries"
        )
        raise LedgerBusyError(
            f"Ledger {self._ledger_id} is locked by another transaction",
            ledger_id=self._ledger_id,
        )

    async def execute(
        self,
        operation: str,
        caller: str,
        block_height: int,
        *args: Any,
    ) -> Result[Any]:
        """
        Run one operation as an atomic transaction.

        Args:
            operation: Ledger operation name (e.g. "mint", "transfer")
            caller: Authenticated caller identity
            block_height: Current chain height
            *args: Operation arguments after the caller

        Returns:
            The operation result. State is committed only on Ok.

        Raises:
            LedgerBusyError: If the ledger lock cannot be acquired
        """
        token = await self._acquire()
        try:
            state = await self.load()
            ledger = GoldLedger.from_state(state, block_height=block_height)
            result = ledger.execute(operation, caller, *args)
            if result.ok:
                await self.save(ledger.state)
                logger.debug(f"Committed {operation} by {caller} on ledger {self._ledger_id}")
            return result
        finally:
            released = await self._storage.release_lock(self._lock_key, token)
            if not released:
                logger.warning(f"Lock for ledger {self._ledger_id} expired before release")
