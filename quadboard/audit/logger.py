"""
Audit Logger

DESIGN DECISION: Every board mutation is logged.
This provides:
1. Traceability of notes moving between quadrants
2. Debugging capability when a blob had to be recovered
3. A recent-history view for the presentation layer

The audit logger:
- Always logs locally through structlog
- Appends to an audit storage when one is configured
- Gracefully handles storage failures (never breaks a board mutation)
- Supports correlation IDs to trace one session's events
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from quadboard.models.audit import AuditEvent, AuditEventBuilder
from quadboard.services.storage.interface import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Set the stdlib level that structlog's level filter checks against.

    Output goes to stderr as one JSON object per line.
    """
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("quadboard").setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage, if configured (for in-app history)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
        correlation_id: Optional[UUID] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for events.
                    If None, only logs locally.
            correlation_id: Attached to every event this logger builds.
        """
        self._storage = storage
        self._correlation_id = correlation_id
        self._logger = structlog.get_logger("quadboard.audit")

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    @property
    def correlation_id(self) -> Optional[UUID]:
        return self._correlation_id

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage is not None:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_note_created(self, note_id: str, quadrant: int, description: str,
                         value: str) -> None:
        """Log note creation."""
        self.log(AuditEventBuilder.note_created(
            note_id=note_id,
            quadrant=quadrant,
            description=description,
            value=value,
            correlation_id=self._correlation_id,
        ))

    def log_note_moved(self, note_id: str, from_quadrant: int, to_quadrant: int) -> None:
        """Log a successful move."""
        self.log(AuditEventBuilder.note_moved(
            note_id=note_id,
            from_quadrant=from_quadrant,
            to_quadrant=to_quadrant,
            correlation_id=self._correlation_id,
        ))

    def log_move_ignored(
        self,
        note_id: str,
        from_quadrant: int,
        to_quadrant: int,
        outcome: str,
        actual_quadrant: Optional[int] = None,
    ) -> None:
        """Log a move request that changed nothing."""
        self.log(AuditEventBuilder.move_ignored(
            note_id=note_id,
            from_quadrant=from_quadrant,
            to_quadrant=to_quadrant,
            outcome=outcome,
            actual_quadrant=actual_quadrant,
            correlation_id=self._correlation_id,
        ))

    def log_note_deleted(self, note_id: str, quadrant: int) -> None:
        self.log(AuditEventBuilder.note_deleted(
            note_id=note_id,
            quadrant=quadrant,
            correlation_id=self._correlation_id,
        ))

    def log_quadrant_configured(self, quadrant: int, name: str, color: str,
                                name_rejected: bool) -> None:
        self.log(AuditEventBuilder.quadrant_configured(
            quadrant=quadrant,
            name=name,
            color=color,
            name_rejected=name_rejected,
            correlation_id=self._correlation_id,
        ))

    def log_validation_failed(self, issues: list[dict], quadrant: int) -> None:
        self.log(AuditEventBuilder.validation_failed(
            issues=issues,
            quadrant=quadrant,
            correlation_id=self._correlation_id,
        ))

    def log_board_loaded(self, note_count: int, recovered_blobs: list[str]) -> None:
        self.log(AuditEventBuilder.board_loaded(
            note_count=note_count,
            recovered_blobs=recovered_blobs,
            correlation_id=self._correlation_id,
        ))

    def log_blob_recovered(self, key: str, reason: str) -> None:
        self.log(AuditEventBuilder.blob_recovered(
            key=key,
            reason=reason,
            correlation_id=self._correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=self._correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this once per board session and pass it to the AuditLogger.
    """
    return uuid4()
