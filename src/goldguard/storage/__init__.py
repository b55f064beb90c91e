"""
Storage backends for GoldGuard.

Provides pluggable persistence for committed ledger state.

Configuration via environment:
    GOLDGUARD_STORAGE_BACKEND=memory  # or 'redis'
    GOLDGUARD_REDIS_URL=redis://localhost:6379/0

Example:
    >>> from goldguard.storage import get_storage, InMemoryStorage, RedisStorage
    >>>
    >>> # Get storage from environment
    >>> storage = get_storage()
    >>>
    >>> # Or create specific backend
    >>> storage = InMemoryStorage()
    >>> storage = RedisStorage(redis_url="redis://localhost:6379")
"""

from __future__ import annotations

import os

from goldguard.core.exceptions import StorageError
from goldguard.storage.base import (
    StorageBackend,
    get_storage_backend,
    list_storage_backends,
    register_storage_backend,
)
from goldguard.storage.memory import InMemoryStorage
from goldguard.storage.redis import RedisStorage


def get_storage(backend_name: str | None = None) -> StorageBackend:
    """
    Get storage backend from environment or by name.

    Args:
        backend_name: Backend name, or None to read from GOLDGUARD_STORAGE_BACKEND env

    Returns:
        StorageBackend instance

    Raises:
        StorageError: If backend name is unknown
    """
    if backend_name is None:
        backend_name = os.environ.get("GOLDGUARD_STORAGE_BACKEND", "memory")

    backend_class = get_storage_backend(backend_name)

    if backend_class is None:
        available = list_storage_backends()
        raise StorageError(
            f"Unknown storage backend: '{backend_name}'. Available: {', '.join(available)}"
        )

    return backend_class()


__all__ = [
    "StorageBackend",
    "InMemoryStorage",
    "RedisStorage",
    "get_storage",
    "get_storage_backend",
    "list_storage_backends",
    "register_storage_backend",
]
