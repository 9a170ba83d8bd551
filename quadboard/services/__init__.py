"""Services package."""

from quadboard.services.storage import (
    AuditStorageInterface,
    FileKeyValueStore,
    InMemoryAuditStorage,
    InMemoryKeyValueStore,
    InvalidKeyError,
    KeyValueStoreInterface,
    PersistenceGateway,
    StorageError,
    StorageWriteError,
)

__all__ = [
    "AuditStorageInterface",
    "FileKeyValueStore",
    "InMemoryAuditStorage",
    "InMemoryKeyValueStore",
    "InvalidKeyError",
    "KeyValueStoreInterface",
    "PersistenceGateway",
    "StorageError",
    "StorageWriteError",
]
