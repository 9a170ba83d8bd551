"""
In-Memory Storage Implementations

Used for tests and for the "memory" backend, where the board lives
only as long as the process.
"""

from collections import deque
from typing import Optional

from quadboard.models.audit import AuditEvent
from quadboard.services.storage.interface import (
    AuditStorageInterface,
    KeyValueStoreInterface,
    validate_key,
)


class InMemoryKeyValueStore(KeyValueStoreInterface):
    """Dictionary-backed substrate."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[str]:
        return self._data.get(validate_key(key))

    def set(self, key: str, value: str) -> None:
        self._data[validate_key(key)] = value

    def delete(self, key: str) -> bool:
        return self._data.pop(validate_key(key), None) is not None

    def keys(self) -> list[str]:
        return sorted(self._data)


class InMemoryAuditStorage(AuditStorageInterface):
    """
    Bounded buffer of recent audit events.

    Oldest events are dropped once `max_events` is reached.
    """

    def __init__(self, max_events: int = 200):
        self._events: deque[AuditEvent] = deque(maxlen=max_events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]

    def get_events_by_entity(self, entity_type: str, entity_id: str) -> list[AuditEvent]:
        return [
            event for event in self._events
            if event.entity_type == entity_type and event.entity_id == entity_id
        ]

    def __len__(self) -> int:
        return len(self._events)
