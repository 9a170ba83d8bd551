"""
Audit Models for Quadboard

Every board mutation, and every time persisted state had to be recovered,
is recorded as an audit event. This provides:
1. Traceability of how notes moved between quadrants
2. Debugging information when a saved blob was found damaged
3. A short in-process history the presentation layer can show

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Note lifecycle
    NOTE_CREATED = "note_created"
    NOTE_MOVED = "note_moved"
    MOVE_IGNORED = "move_ignored"
    NOTE_DELETED = "note_deleted"

    # Quadrant configuration
    QUADRANT_CONFIGURED = "quadrant_configured"

    # Input validation
    VALIDATION_FAILED = "validation_failed"

    # Persistence
    BOARD_LOADED = "board_loaded"
    BLOB_RECOVERED = "blob_recovered"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'note', 'quadrant', 'blob')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one board session)"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    # User action tracking
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.note_created(note_id, quadrant, value)
        event = AuditEventBuilder.note_moved(note_id, 0, 2)
    """

    @staticmethod
    def note_created(
        note_id: str,
        quadrant: int,
        description: str,
        value: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTE_CREATED,
            entity_type="note",
            entity_id=note_id,
            correlation_id=correlation_id,
            description=f"Note created in quadrant {quadrant}: {description}"[:500],
            details={
                "quadrant": quadrant,
                "value": value,
            },
            is_user_action=True,
        )

    @staticmethod
    def note_moved(
        note_id: str,
        from_quadrant: int,
        to_quadrant: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTE_MOVED,
            entity_type="note",
            entity_id=note_id,
            correlation_id=correlation_id,
            description=f"Note moved from quadrant {from_quadrant} to {to_quadrant}",
            details={
                "from_quadrant": from_quadrant,
                "to_quadrant": to_quadrant,
            },
            is_user_action=True,
        )

    @staticmethod
    def move_ignored(
        note_id: str,
        from_quadrant: int,
        to_quadrant: int,
        outcome: str,
        actual_quadrant: Optional[int] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MOVE_IGNORED,
            severity=AuditSeverity.DEBUG,
            entity_type="note",
            entity_id=note_id or None,
            correlation_id=correlation_id,
            description=f"Move ignored: {outcome}",
            details={
                "from_quadrant": from_quadrant,
                "to_quadrant": to_quadrant,
                "actual_quadrant": actual_quadrant,
                "outcome": outcome,
            },
            is_user_action=True,
        )

    @staticmethod
    def note_deleted(
        note_id: str,
        quadrant: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTE_DELETED,
            entity_type="note",
            entity_id=note_id,
            correlation_id=correlation_id,
            description=f"Note deleted from quadrant {quadrant}",
            details={"quadrant": quadrant},
            is_user_action=True,
        )

    @staticmethod
    def quadrant_configured(
        quadrant: int,
        name: str,
        color: str,
        name_rejected: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.QUADRANT_CONFIGURED,
            entity_type="quadrant",
            entity_id=str(quadrant),
            correlation_id=correlation_id,
            description=f"Quadrant {quadrant} configured: {name}"[:500],
            details={
                "name": name,
                "color": color,
                "name_rejected": name_rejected,
            },
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        issues: list[dict],
        quadrant: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="quadrant",
            entity_id=str(quadrant),
            correlation_id=correlation_id,
            description=f"Note input rejected with {len(issues)} issues",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def board_loaded(
        note_count: int,
        recovered_blobs: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BOARD_LOADED,
            entity_type="board",
            correlation_id=correlation_id,
            description=f"Board loaded with {note_count} notes",
            details={
                "note_count": note_count,
                "recovered_blobs": recovered_blobs,
            },
        )

    @staticmethod
    def blob_recovered(
        key: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BLOB_RECOVERED,
            severity=AuditSeverity.WARNING,
            entity_type="blob",
            entity_id=key,
            correlation_id=correlation_id,
            description=f"Blob {key} unreadable, defaults used",
            error_message=reason,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
