"""
Main Orchestrator for Quadboard

This module ties the components together and implements the contract
consumed by the presentation layer:
1. Add note      (raw form fields → validate → create → save)
2. Configure     (raw name + color → registry → save)
3. Drop note     (drag payload + target → transfer → move → save)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches the Note Store without passing validation
- Saving is never called directly; it follows from change notification
- Every mutation is audited
"""

from decimal import Decimal
from typing import Optional, Union

from quadboard.audit import AuditLogger, configure_logging, create_correlation_id
from quadboard.config import Settings, get_settings
from quadboard.models.audit import AuditEvent
from quadboard.models.note import (
    Note,
    QuadrantColor,
    QuadrantConfig,
    check_quadrant,
)
from quadboard.queries import AggregateCalculator, BoardSummary
from quadboard.services.storage import (
    AuditStorageInterface,
    FileKeyValueStore,
    InMemoryAuditStorage,
    InMemoryKeyValueStore,
    KeyValueStoreInterface,
    PersistenceGateway,
)
from quadboard.state import (
    MoveOutcome,
    NoteStore,
    QuadrantRegistry,
    TransferProtocol,
)
from quadboard.validation import InputValidationError, NoteInputValidator
from quadboard.validation.validator import RawDate, RawValue


class Board:
    """
    The board as seen by the presentation layer.

    Holds the single Note Store and Quadrant Registry of the process.
    If a gateway is given, both are saved on every change.
    """

    def __init__(
        self,
        store: Optional[NoteStore] = None,
        registry: Optional[QuadrantRegistry] = None,
        gateway: Optional[PersistenceGateway] = None,
        validator: Optional[NoteInputValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store if store is not None else NoteStore()
        self._registry = registry if registry is not None else QuadrantRegistry()
        self._gateway = gateway
        self._validator = validator or NoteInputValidator()
        self._audit_logger = audit_logger
        self._transfer = TransferProtocol(self._store)
        self._calculator = AggregateCalculator(self._store, self._registry)
        self._detach = gateway.attach(self._store, self._registry) if gateway else None

    @property
    def store(self) -> NoteStore:
        return self._store

    @property
    def registry(self) -> QuadrantRegistry:
        return self._registry

    @property
    def gateway(self) -> Optional[PersistenceGateway]:
        return self._gateway

    # -------------------------------------------------------------------------
    # Input-layer operations
    # -------------------------------------------------------------------------

    def add_item(
        self,
        quadrant: int,
        raw_description: Optional[str],
        raw_date: RawDate,
        raw_value: RawValue,
        raw_obs: Optional[str] = "",
    ) -> Note:
        """
        Validate form input and add the note to the end of a quadrant.

        Raises:
            InvalidQuadrantError: If the quadrant index is out of range
            InputValidationError: If the input is not acceptable.
                The board is left unchanged.
        """
        check_quadrant(quadrant)

        result = self._validator.validate(raw_description, raw_date, raw_value, raw_obs)
        if not result.is_valid:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    issues=[
                        {"field": i.field, "type": i.issue_type, "message": i.message}
                        for i in result.issues
                    ],
                    quadrant=quadrant,
                )
            raise InputValidationError(result.issues)

        note = result.note
        self._store.create(quadrant, note)

        if self._audit_logger:
            self._audit_logger.log_note_created(
                note_id=note.id,
                quadrant=quadrant,
                description=note.description,
                value=str(note.value),
            )
        return note

    def update_quadrant_config(
        self,
        quadrant: int,
        raw_name: Optional[str],
        color: Union[QuadrantColor, str],
    ) -> QuadrantConfig:
        """
        Replace a quadrant's name and color.

        A blank name keeps the current one; the color is applied anyway.

        Raises:
            InvalidQuadrantError: If the quadrant index is out of range
            InputValidationError: If the color is not a palette token
        """
        check_quadrant(quadrant)
        try:
            color = QuadrantColor(color)
        except ValueError:
            raise InputValidationError.single("color", "invalid_value", "invalid color") from None

        name_rejected = not (raw_name or "").strip()
        config = self._registry.set(quadrant, raw_name or "", color)

        if self._audit_logger:
            self._audit_logger.log_quadrant_configured(
                quadrant=quadrant,
                name=config.name,
                color=config.color.value,
                name_rejected=name_rejected,
            )
        return config

    def drop_note(
        self,
        note_id: Optional[str],
        source_quadrant: int,
        target_quadrant: int,
    ) -> MoveOutcome:
        """
        Apply a drop event.

        Stale or duplicate drops change nothing and are not errors;
        the returned outcome says what happened.
        """
        outcome = self._transfer.drop(note_id, source_quadrant, target_quadrant)

        if self._audit_logger:
            if outcome is MoveOutcome.MOVED:
                self._audit_logger.log_note_moved(
                    note_id=note_id,
                    from_quadrant=source_quadrant,
                    to_quadrant=target_quadrant,
                )
            else:
                self._audit_logger.log_move_ignored(
                    note_id=note_id or "",
                    from_quadrant=source_quadrant,
                    to_quadrant=target_quadrant,
                    outcome=outcome.value,
                    actual_quadrant=self._store.locate(note_id) if note_id else None,
                )
        return outcome

    def delete_note(self, note_id: str) -> Optional[Note]:
        """Remove a note from the board. Returns None if it is not there."""
        quadrant = self._store.locate(note_id)
        note = self._store.delete(note_id)

        if note is not None and self._audit_logger:
            self._audit_logger.log_note_deleted(note_id=note_id, quadrant=quadrant)
        return note

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def notes(self, quadrant: int) -> tuple[Note, ...]:
        return self._store.read(quadrant)

    def config(self, quadrant: int) -> QuadrantConfig:
        return self._registry.get(quadrant)

    def total(self, quadrant: int) -> Decimal:
        return self._calculator.total(quadrant)

    def summary(self) -> BoardSummary:
        return self._calculator.board_summary()

    def recent_events(self, limit: int = 50) -> list[AuditEvent]:
        """Most recent audit events, newest first (empty without audit storage)."""
        if self._audit_logger is None or self._audit_logger.storage is None:
            return []
        return self._audit_logger.storage.get_recent_events(limit)

    def close(self) -> None:
        """Stop saving on change. The board stays readable."""
        if self._detach:
            self._detach()
            self._detach = None


def create_substrate(settings: Settings) -> KeyValueStoreInterface:
    """Build the key-value substrate selected by configuration."""
    storage_settings = settings.storage
    if storage_settings.backend == "memory":
        return InMemoryKeyValueStore()
    return FileKeyValueStore(storage_settings.data_dir)


def create_board(
    settings: Optional[Settings] = None,
    substrate: Optional[KeyValueStoreInterface] = None,
    audit_storage: Optional[AuditStorageInterface] = None,
) -> Board:
    """
    Factory function to create a fully wired board.

    Loads persisted state (recovering each blob independently) and
    attaches save-on-change.

    Args:
        settings: Settings to use; defaults to get_settings()
        substrate: Overrides the configured key-value substrate
        audit_storage: Overrides the in-memory audit buffer

    Returns:
        A Board ready for input-layer calls
    """
    settings = settings or get_settings()
    board_settings = settings.board
    storage_settings = settings.storage

    configure_logging(settings.app.effective_log_level)

    audit_logger = AuditLogger(
        audit_storage if audit_storage is not None
        else InMemoryAuditStorage(board_settings.audit_buffer_size),
        correlation_id=create_correlation_id(),
    )
    gateway = PersistenceGateway(
        substrate or create_substrate(settings),
        items_key=storage_settings.items_key,
        settings_key=storage_settings.settings_key,
        name_prefix=board_settings.default_name_prefix,
        audit_logger=audit_logger,
    )
    store, registry = gateway.load()

    return Board(
        store=store,
        registry=registry,
        gateway=gateway,
        audit_logger=audit_logger,
    )
