"""
In-Memory Storage Backend.

Default storage backend that keeps committed ledger state in memory.
Suitable for development and testing, but not for production.
"""

from __future__ import annotations

import time
import uuid
from copy import deepcopy
from typing import Any

from goldguard.storage.base import StorageBackend, register_storage_backend


class InMemoryStorage(StorageBackend):
    """
    In-memory storage backend.

    Stores all data in Python dicts. Data is lost when process ends.
    Records are deep-copied on the way in and out so callers never share state.
    """

    def __init__(self) -> None:
        self._data: dict[str, dict[str, dict[str, Any]]] = {}
        # lock key -> (token, expiry timestamp)
        self._locks: dict[str, tuple[str, float]] = {}

    def _ensure_collection(self, collection: str) -> dict[str, dict[str, Any]]:
        """Ensure collection exists and return it."""
        if collection not in self._data:
            self._data[collection] = {}
        return self._data[collection]

    async def save(
        self,
        collection: str,
        key: str,
        data: dict[str, Any],
    ) -> None:
        """Save data to memory."""
        coll = self._ensure_collection(collection)
        coll[key] = deepcopy(data)

    async def get(
        self,
        collection: str,
        key: str,
    ) -> dict[str, Any] | None:
        """Get data from memory."""
        coll = self._ensure_collection(collection)
        data = coll.get(key)
        return deepcopy(data) if data else None

    async def acquire_lock(
        self,
        key: str,
        ttl: int = 30,
    ) -> str | None:
        """Acquire lock (simple in-memory implementation)."""
        now = time.time()

        held = self._locks.get(key)
        if held is not None and now < held[1]:
            return None

        token = str(uuid.uuid4())
        self._locks[key] = (token, now + ttl)
        return token

    async def release_lock(
        self,
        key: str,
        token: str,
    ) -> bool:
        """Release lock only if the token matches."""
        held = self._locks.get(key)
        if held is None or held[0] != token:
            return False
        del self._locks[key]
        return True


# Register as default backend
register_storage_backend("memory", InMemoryStorage)
