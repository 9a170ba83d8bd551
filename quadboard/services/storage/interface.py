"""
Abstract Storage Interface

DESIGN DECISION: The durable substrate is a plain key -> text store.
This allows us to:
1. Keep the board's two blobs independent of each other
2. Use in-memory storage for testing
3. Swap the file backend for anything with get/set semantics

The interface is intentionally tiny. The Persistence Gateway owns the
blob format; the substrate only moves text.
"""

from abc import ABC, abstractmethod
from typing import Optional

from quadboard.models.audit import AuditEvent


class KeyValueStoreInterface(ABC):
    """
    Abstract interface for the durable key-value substrate.

    Any implementation (files, memory, a database table) must implement
    these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the text stored under a key.

        Args:
            key: Blob key

        Returns:
            The stored text, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store text under a key, replacing any previous value.

        Raises:
            StorageWriteError: If the write fails
            InvalidKeyError: If the key cannot be stored by this backend
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys."""
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit event storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event.

        Returns:
            True if stored successfully
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass

    @abstractmethod
    def get_events_by_entity(self, entity_type: str, entity_id: str) -> list[AuditEvent]:
        """
        Get all events for a specific entity, in chronological order.
        """
        pass


def validate_key(key: str) -> str:
    """Reject keys that are empty or could escape a storage directory."""
    if not key or not all(c.isalnum() or c in "-_." for c in key) or key.startswith("."):
        raise InvalidKeyError(f"Invalid storage key: {key!r}")
    return key


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageWriteError(StorageError):
    """A blob could not be written. Not retried."""
    pass


class InvalidKeyError(StorageError):
    """Key not usable by the backend."""
    pass
