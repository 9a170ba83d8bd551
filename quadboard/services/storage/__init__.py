"""
Storage Services Package

Provides the key-value substrate interface, its file and in-memory
implementations, and the Persistence Gateway that maps the board onto it.
"""

from quadboard.services.storage.interface import (
    AuditStorageInterface,
    InvalidKeyError,
    KeyValueStoreInterface,
    StorageError,
    StorageWriteError,
    validate_key,
)
from quadboard.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryKeyValueStore,
)
from quadboard.services.storage.file_store import FileKeyValueStore
from quadboard.services.storage.gateway import (
    DEFAULT_ITEMS_KEY,
    DEFAULT_SETTINGS_KEY,
    PersistenceGateway,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "KeyValueStoreInterface",
    "validate_key",
    # Exceptions
    "InvalidKeyError",
    "StorageError",
    "StorageWriteError",
    # Implementations
    "FileKeyValueStore",
    "InMemoryAuditStorage",
    "InMemoryKeyValueStore",
    # Gateway
    "DEFAULT_ITEMS_KEY",
    "DEFAULT_SETTINGS_KEY",
    "PersistenceGateway",
]
