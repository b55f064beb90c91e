"""
Redis Storage Backend.

Keeps each committed ledger state as one JSON document and serializes
writers with an expiring Redis key. Keys are laid out as:

    <prefix>:<collection>:<ledger_id>   committed state (JSON)
    <prefix>:lock:<lock_key>            lock, value is the holder's token
"""

from __future__ import annotations

import json
import os
import uuid
from typing import Any

from goldguard.core.exceptions import StorageError
from goldguard.storage.base import StorageBackend, register_storage_backend

# Delete the lock only while it still holds the caller's token
_RELEASE_IF_OWNER = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
end
return 0
"""


class RedisStorage(StorageBackend):
    """
    Ledger state shared between processes through Redis.

    Requires: pip install goldguard[redis]
    """

    def __init__(self, redis_url: str | None = None, prefix: str = "goldguard") -> None:
        """
        Args:
            redis_url: Connection URL, defaults to GOLDGUARD_REDIS_URL
            prefix: Namespace for every key this backend writes
        """
        self._redis_url = redis_url or os.environ.get(
            "GOLDGUARD_REDIS_URL", "redis://localhost:6379/0"
        )
        self._prefix = prefix
        self._client = None

    def _connection(self):
        if self._client is None:
            try:
                import redis.asyncio as redis
            except ImportError:
                raise ImportError(
                    "RedisStorage needs the redis package: pip install goldguard[redis]"
                ) from None
            self._client = redis.from_url(self._redis_url, decode_responses=True)
        return self._client

    def _state_key(self, collection: str, ledger_id: str) -> str:
        return f"{self._prefix}:{collection}:{ledger_id}"

    def _lock_key(self, key: str) -> str:
        return f"{self._prefix}:lock:{key}"

    async def save(self, collection: str, key: str, data: dict[str, Any]) -> None:
        await self._connection().set(self._state_key(collection, key), json.dumps(data))

    async def get(self, collection: str, key: str) -> dict[str, Any] | None:
        state_key = self._state_key(collection, key)
        raw = await self._connection().get(state_key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(
                f"Committed state at {state_key} is not valid JSON",
                details={"error": str(e)},
            ) from e

    async def acquire_lock(self, key: str, ttl: int = 30) -> str | None:
        """Take the lock with SET NX EX; returns the owner token or None if taken."""
        token = uuid.uuid4().hex
        taken = await self._connection().set(self._lock_key(key), token, nx=True, ex=ttl)
        return token if taken else None

    async def release_lock(self, key: str, token: str) -> bool:
        released = await self._connection().eval(_RELEASE_IF_OWNER, 1, self._lock_key(key), token)
        return int(released) > 0


register_storage_backend("redis", RedisStorage)
