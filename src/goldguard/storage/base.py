"""
Abstract Storage Backend for GoldGuard.

Provides the pluggable persistence layer that commits ledger state between calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class StorageBackend(ABC):
    """
    Abstract base class for storage backends.

    Stores committed ledger state by collection and key, and provides the
    expiring, token-owned lock that serializes writers to one ledger.
    """

    @abstractmethod
    async def save(
        self,
        collection: str,
        key: str,
        data: dict[str, Any],
    ) -> None:
        """
        Save data to storage.

        Args:
            collection: Collection/table name
            key: Unique key for the record
            data: Data to store (must be JSON-serializable)
        """
        ...

    @abstractmethod
    async def get(
        self,
        collection: str,
        key: str,
    ) -> dict[str, Any] | None:
        """
        Get data from storage.

        Args:
            collection: Collection/table name
            key: Record key

        Returns:
            Data dict or None if not found
        """
        ...

    @abstractmethod
    async def acquire_lock(
        self,
        key: str,
        ttl: int = 30,
    ) -> str | None:
        """
        Acquire an expiring lock.

        Args:
            key: Lock key (e.g. "ledger:main")
            ttl: TTL in seconds

        Returns:
            Ownership token if acquired, None if already held
        """
        ...

    @abstractmethod
    async def release_lock(
        self,
        key: str,
        token: str,
    ) -> bool:
        """
        Release a lock if the token still owns it.

        Returns:
            True if released, False if not held or held by another token
        """
        ...


# Storage backend registry for dependency injection
_STORAGE_BACKENDS: dict[str, type[StorageBackend]] = {}


def register_storage_backend(name: str, backend_class: type[StorageBackend]) -> None:
    """Register a storage backend by name."""
    _STORAGE_BACKENDS[name] = backend_class


def get_storage_backend(name: str) -> type[StorageBackend] | None:
    """Get a registered storage backend by name."""
    return _STORAGE_BACKENDS.get(name)


def list_storage_backends() -> list[str]:
    """List all registered storage backend names."""
    return list(_STORAGE_BACKENDS.keys())
