"""
Data Models Package

This package contains all Pydantic models used by the board.
Everything the board holds or persists conforms to these schemas.
"""

from quadboard.models.note import (
    QUADRANT_COUNT,
    QUADRANT_INDICES,
    InvalidQuadrantError,
    Note,
    NoteTiming,
    QuadrantColor,
    QuadrantConfig,
    ValidationIssue,
    ValidationResult,
    check_quadrant,
    default_quadrant_configs,
    new_note_id,
)
from quadboard.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Board models
    "QUADRANT_COUNT",
    "QUADRANT_INDICES",
    "InvalidQuadrantError",
    "Note",
    "NoteTiming",
    "QuadrantColor",
    "QuadrantConfig",
    "ValidationIssue",
    "ValidationResult",
    "check_quadrant",
    "default_quadrant_configs",
    "new_note_id",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
