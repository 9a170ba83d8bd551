"""
Tests for Quadboard data models

Test strategy:
1. Unit tests for models and the quadrant index check
2. Component tests for store, registry, aggregates and persistence
3. Board-level tests for the input-layer contract
"""

import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from quadboard.models.note import (
    QUADRANT_COUNT,
    InvalidQuadrantError,
    Note,
    NoteTiming,
    QuadrantColor,
    QuadrantConfig,
    ValidationIssue,
    ValidationResult,
    check_quadrant,
    default_quadrant_configs,
)
from quadboard.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestNoteModel:
    """Tests for the Note model."""

    def test_note_creation(self):
        """Test Note model creation."""
        note = Note(
            description="Rent",
            date=date(2024, 3, 1),
            value=Decimal("1500.50"),
            obs="March",
        )
        assert note.description == "Rent"
        assert note.value == Decimal("1500.50")
        assert note.obs == "March"

    def test_note_generates_unique_ids(self):
        """Each note gets its own id when none is given."""
        first = Note(description="A", date=date(2024, 1, 1), value=Decimal("1"))
        second = Note(description="A", date=date(2024, 1, 1), value=Decimal("1"))
        assert first.id
        assert first.id != second.id

    def test_note_obs_defaults_to_empty(self):
        note = Note(description="A", date=date(2024, 1, 1), value=Decimal("1"))
        assert note.obs == ""

    def test_note_strips_whitespace(self):
        """Test that whitespace is stripped from text fields."""
        note = Note(description="  Rent  ", date=date(2024, 1, 1), value=Decimal("1"))
        assert note.description == "Rent"

    def test_note_rejects_blank_description(self):
        with pytest.raises(ValueError):
            Note(description="   ", date=date(2024, 1, 1), value=Decimal("1"))

    def test_note_is_immutable(self):
        """Notes cannot be edited once created."""
        note = Note(description="Rent", date=date(2024, 1, 1), value=Decimal("1"))
        with pytest.raises(ValidationError):
            note.value = Decimal("2")

    def test_note_accepts_negative_value(self):
        note = Note(description="Refund", date=date(2024, 1, 1), value=Decimal("-20.10"))
        assert note.value == Decimal("-20.10")

    def test_note_tolerates_non_finite_value(self):
        """A damaged value is kept on the note, flagged as not finite."""
        note = Note(description="Broken", date=date(2024, 1, 1), value=Decimal("NaN"))
        assert note.value.is_nan()
        assert note.is_finite is False

    def test_note_json_dump_shape(self):
        """The JSON dump is the blob shape: ISO date, numeric value."""
        note = Note(
            id="n-1",
            description="Rent",
            date=date(2024, 3, 1),
            value=Decimal("1500.50"),
        )
        dumped = note.model_dump(mode="json")
        assert dumped == {
            "id": "n-1",
            "description": "Rent",
            "date": "2024-03-01",
            "value": 1500.5,
            "obs": "",
        }

    def test_non_finite_value_dumps_as_null(self):
        """Blobs stay strict JSON: damaged values are written as null."""
        for raw in ("NaN", "Infinity", "-Infinity"):
            note = Note(description="Broken", date=date(2024, 1, 1), value=Decimal(raw))
            assert note.model_dump(mode="json")["value"] is None

    def test_null_value_loads_as_nan(self):
        note = Note(description="Broken", date=date(2024, 1, 1), value=None)
        assert note.value.is_nan()
        assert note.is_finite is False

    def test_note_timing(self):
        """Notes are classified against a reference date."""
        today = date(2024, 3, 10)
        make = lambda d: Note(description="X", date=d, value=Decimal("1"))
        assert make(date(2024, 3, 9)).timing(today) == NoteTiming.PAST
        assert make(date(2024, 3, 10)).timing(today) == NoteTiming.TODAY
        assert make(date(2024, 3, 11)).timing(today) == NoteTiming.UPCOMING


class TestQuadrantModels:
    """Tests for quadrant configuration and index checks."""

    def test_palette_has_eight_distinct_tokens(self):
        tokens = [color.value for color in QuadrantColor]
        assert len(tokens) == 8
        assert len(set(tokens)) == 8

    def test_palette_values(self):
        assert QuadrantColor.BLUE.value == "bg-blue-50"
        assert QuadrantColor("bg-lime-50") is QuadrantColor.LIME

    def test_default_configs(self):
        """Defaults cover every slot with distinct colors."""
        configs = default_quadrant_configs()
        assert sorted(configs) == [0, 1, 2, 3]
        assert [c.name for c in configs.values()] == [
            "Quadrant 1", "Quadrant 2", "Quadrant 3", "Quadrant 4",
        ]
        assert len({c.color for c in configs.values()}) == QUADRANT_COUNT

    def test_default_configs_custom_prefix(self):
        configs = default_quadrant_configs("Zone")
        assert configs[3].name == "Zone 4"

    def test_quadrant_config_rejects_unknown_color(self):
        with pytest.raises(ValueError):
            QuadrantConfig(name="Bills", color="bg-black")

    @pytest.mark.parametrize("quadrant", [0, 1, 2, 3])
    def test_check_quadrant_accepts_valid(self, quadrant):
        assert check_quadrant(quadrant) == quadrant

    @pytest.mark.parametrize("quadrant", [-1, 4, 10, True, "1", None, 1.0])
    def test_check_quadrant_rejects_invalid(self, quadrant):
        with pytest.raises(InvalidQuadrantError):
            check_quadrant(quadrant)


class TestValidationModels:
    """Tests for ValidationResult."""

    def test_result_with_issues_is_invalid(self):
        result = ValidationResult(issues=[
            ValidationIssue(field="date", issue_type="missing", message="missing date"),
        ])
        assert result.is_valid is False
        assert result.first_message == "missing date"

    def test_result_with_note_is_valid(self):
        note = Note(description="A", date=date(2024, 1, 1), value=Decimal("1"))
        result = ValidationResult(note=note)
        assert result.is_valid is True
        assert result.first_message is None


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.NOTE_CREATED,
            description="Note created",
        )
        assert event.event_type == AuditEventType.NOTE_CREATED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.NOTE_MOVED,
            description="Note moved",
            details={"from_quadrant": 0, "to_quadrant": 2},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "note_moved"
        assert log_dict["details"]["to_quadrant"] == 2

    def test_builder_note_moved(self):
        event = AuditEventBuilder.note_moved(note_id="n-1", from_quadrant=0, to_quadrant=3)
        assert event.event_type == AuditEventType.NOTE_MOVED
        assert event.entity_id == "n-1"
        assert event.is_user_action is True

    def test_builder_move_ignored_is_debug(self):
        """Ignored moves are not errors."""
        event = AuditEventBuilder.move_ignored(
            note_id="n-1",
            from_quadrant=0,
            to_quadrant=1,
            outcome="stale_source",
            actual_quadrant=2,
        )
        assert event.severity == AuditSeverity.DEBUG
        assert event.details["actual_quadrant"] == 2

    def test_builder_blob_recovered_is_warning(self):
        event = AuditEventBuilder.blob_recovered(key="board-settings", reason="bad json")
        assert event.event_type == AuditEventType.BLOB_RECOVERED
        assert event.severity == AuditSeverity.WARNING
        assert event.error_message == "bad json"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
