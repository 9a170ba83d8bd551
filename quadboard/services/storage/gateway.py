"""
Persistence Gateway

Serializes the Note Store and the Quadrant Registry to two independent
blobs in the key-value substrate, and rebuilds them on start.

Blob layout:
    board-items    {"0": [note, ...], "1": [...], "2": [...], "3": [...]}
                   note = {id, description, date "YYYY-MM-DD", value (number or null), obs}
    board-settings {"0": {"name": ..., "color": ...}, ...}

DESIGN DECISION: The two blobs are recovered independently. A damaged
settings blob must not cost the user their notes, and vice versa.
Read and parse failures (including JSON nested too deeply to decode)
fall back to defaults for that blob only.

Write failures are NOT recovered: they propagate to whoever triggered
the save. There is no retry and no fallback location.
"""

import json
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Optional

import structlog
from pydantic import TypeAdapter

from quadboard.models.note import Note, QuadrantConfig
from quadboard.services.storage.interface import (
    KeyValueStoreInterface,
    StorageError,
)
from quadboard.state.notes import NoteStore
from quadboard.state.registry import QuadrantRegistry

if TYPE_CHECKING:
    from quadboard.audit.logger import AuditLogger


DEFAULT_ITEMS_KEY = "board-items"
DEFAULT_SETTINGS_KEY = "board-settings"

_ITEMS_ADAPTER = TypeAdapter(dict[int, list[Note]])
_SETTINGS_ADAPTER = TypeAdapter(dict[int, QuadrantConfig])


def _loads(text: str):
    # Numbers come back as Decimal. Bare NaN/Infinity tokens from older
    # blobs are still accepted.
    return json.loads(text, parse_float=Decimal, parse_constant=Decimal)


class PersistenceGateway:
    """
    Load-on-start and save-on-change for the board.

    Usage:
        gateway = PersistenceGateway(FileKeyValueStore(".quadboard"))
        store, registry = gateway.load()
        gateway.attach(store, registry)  # every mutation now saves
    """

    def __init__(
        self,
        substrate: KeyValueStoreInterface,
        items_key: str = DEFAULT_ITEMS_KEY,
        settings_key: str = DEFAULT_SETTINGS_KEY,
        name_prefix: str = "Quadrant",
        audit_logger: Optional["AuditLogger"] = None,
    ):
        self._substrate = substrate
        self._items_key = items_key
        self._settings_key = settings_key
        self._name_prefix = name_prefix
        self._audit_logger = audit_logger
        self._logger = structlog.get_logger(__name__)
        self.recovered_keys: list[str] = []

    @property
    def items_key(self) -> str:
        return self._items_key

    @property
    def settings_key(self) -> str:
        return self._settings_key

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    @staticmethod
    def serialize_items(store: NoteStore) -> str:
        payload = {
            str(quadrant): [note.model_dump(mode="json") for note in notes]
            for quadrant, notes in store.snapshot().items()
        }
        return json.dumps(payload, ensure_ascii=False, allow_nan=False)

    @staticmethod
    def serialize_settings(registry: QuadrantRegistry) -> str:
        payload = {
            str(quadrant): config.model_dump(mode="json")
            for quadrant, config in registry.configs().items()
        }
        return json.dumps(payload, ensure_ascii=False, allow_nan=False)

    @staticmethod
    def parse_items(text: str) -> NoteStore:
        """
        Rebuild a Note Store from blob text.

        Raises:
            ValueError: On invalid JSON, invalid notes, unknown quadrants
                or duplicate ids
            RecursionError: On JSON nested too deeply to decode
        """
        return NoteStore.from_snapshot(_ITEMS_ADAPTER.validate_python(_loads(text)))

    def parse_settings(self, text: str) -> QuadrantRegistry:
        """Rebuild a Quadrant Registry from blob text. Raises ValueError."""
        configs = _SETTINGS_ADAPTER.validate_python(_loads(text))
        return QuadrantRegistry.from_snapshot(configs, name_prefix=self._name_prefix)

    # -------------------------------------------------------------------------
    # Load
    # -------------------------------------------------------------------------

    def load(self) -> tuple[NoteStore, QuadrantRegistry]:
        """
        Read both blobs, recovering each one independently.

        Never raises for missing or damaged blobs; the keys that had to
        be replaced by defaults are listed in `recovered_keys`.
        """
        self.recovered_keys = []
        store = self.load_items()
        registry = self.load_settings()

        self._logger.info(
            "board_loaded",
            note_count=len(store),
            recovered_keys=self.recovered_keys,
        )
        if self._audit_logger:
            self._audit_logger.log_board_loaded(
                note_count=len(store),
                recovered_blobs=list(self.recovered_keys),
            )
        return store, registry

    def load_items(self) -> NoteStore:
        text = self._read(self._items_key)
        if text is None:
            return NoteStore()
        try:
            return self.parse_items(text)
        except (ValueError, RecursionError) as e:
            self._recovered(self._items_key, e)
            return NoteStore()

    def load_settings(self) -> QuadrantRegistry:
        text = self._read(self._settings_key)
        if text is None:
            return QuadrantRegistry.defaults(self._name_prefix)
        try:
            return self.parse_settings(text)
        except (ValueError, RecursionError) as e:
            self._recovered(self._settings_key, e)
            return QuadrantRegistry.defaults(self._name_prefix)

    def _read(self, key: str) -> Optional[str]:
        try:
            return self._substrate.get(key)
        except StorageError as e:
            self._recovered(key, e)
            return None

    def _recovered(self, key: str, error: Exception) -> None:
        self.recovered_keys.append(key)
        self._logger.warning(
            "blob_recovered",
            key=key,
            error_type=type(error).__name__,
            error=str(error),
        )
        if self._audit_logger:
            self._audit_logger.log_blob_recovered(key=key, reason=str(error))

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    def save_items(self, store: NoteStore) -> None:
        """Overwrite the notes blob. Failures propagate."""
        self._write(self._items_key, self.serialize_items(store))

    def save_settings(self, registry: QuadrantRegistry) -> None:
        """Overwrite the settings blob. Failures propagate."""
        self._write(self._settings_key, self.serialize_settings(registry))

    def _write(self, key: str, text: str) -> None:
        try:
            self._substrate.set(key, text)
        except StorageError as e:
            self._logger.error("blob_save_failed", key=key, error=str(e))
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"key": key},
                )
            raise
        self._logger.debug("blob_saved", key=key, size=len(text))

    def attach(self, store: NoteStore, registry: QuadrantRegistry) -> Callable[[], None]:
        """
        Save each structure whenever it changes.

        Returns a function that detaches both listeners.
        """
        unsubscribe_items = store.subscribe(self.save_items)
        unsubscribe_settings = registry.subscribe(self.save_settings)

        def detach() -> None:
            unsubscribe_items()
            unsubscribe_settings()

        return detach
