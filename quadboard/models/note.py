"""
Core Data Models for Quadboard

These models define the schemas for everything the board holds and persists.
They are designed to:
1. Enforce type safety at runtime
2. Be immutable once created (zone membership lives outside the note)
3. Serialize to the exact JSON shape of the durable blobs

DESIGN DECISION: A note never knows which quadrant it is in.
The Note Store owns membership, so moving a note never rewrites it.
"""

import datetime as dt
import math
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


QUADRANT_COUNT = 4
QUADRANT_INDICES = tuple(range(QUADRANT_COUNT))


class InvalidQuadrantError(ValueError):
    """Quadrant index outside 0-3. Always a programming error."""

    def __init__(self, quadrant: object):
        self.quadrant = quadrant
        super().__init__(
            f"Invalid quadrant {quadrant!r}: expected an index in 0..{QUADRANT_COUNT - 1}"
        )


def check_quadrant(quadrant: object) -> int:
    """Return the quadrant index unchanged, or raise InvalidQuadrantError."""
    if isinstance(quadrant, bool) or not isinstance(quadrant, int):
        raise InvalidQuadrantError(quadrant)
    if quadrant not in QUADRANT_INDICES:
        raise InvalidQuadrantError(quadrant)
    return quadrant


def new_note_id() -> str:
    return str(uuid4())


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class QuadrantColor(str, Enum):
    """
    Background palette for quadrants.

    DESIGN DECISION: The tokens are opaque to the core. They are the
    values already present in saved boards, so existing state loads as-is.
    """
    BLUE = "bg-blue-50"
    GREEN = "bg-green-50"
    VIOLET = "bg-violet-50"
    ORANGE = "bg-orange-50"
    ROSE = "bg-rose-50"
    TEAL = "bg-teal-50"
    SKY = "bg-sky-50"
    LIME = "bg-lime-50"


class NoteTiming(str, Enum):
    """Where a note's date falls relative to today."""
    PAST = "past"
    TODAY = "today"
    UPCOMING = "upcoming"


# =============================================================================
# NOTE
# =============================================================================

class Note(BaseModel):
    """
    A labeled monetary entry.

    `value` may be non-finite when it comes from a damaged blob; such a
    note is kept but contributes nothing to totals.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        default_factory=new_note_id,
        min_length=1,
        description="Opaque unique identifier"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What this entry is"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the entry"
    )
    value: Decimal = Field(
        ...,
        allow_inf_nan=True,
        description="Signed amount"
    )
    obs: str = Field(
        default="",
        description="Free-text remark"
    )

    @field_validator("value", mode="before")
    @classmethod
    def null_value_is_nan(cls, v):
        # Damaged values are stored as JSON null.
        return Decimal("NaN") if v is None else v

    @field_serializer("value", when_used="json")
    def serialize_value(self, value: Decimal) -> Optional[float]:
        """
        Blobs store the value as a JSON number, or null when it is not finite.

        Values round-trip exactly up to 15 significant digits, the limit
        enforced by input validation.
        """
        number = float(value)
        return number if math.isfinite(number) else None

    @property
    def is_finite(self) -> bool:
        return self.value.is_finite()

    def timing(self, today: Optional[dt.date] = None) -> NoteTiming:
        """Classify the note date against today (or the given date)."""
        today = today or dt.date.today()
        if self.date < today:
            return NoteTiming.PAST
        if self.date == today:
            return NoteTiming.TODAY
        return NoteTiming.UPCOMING


# =============================================================================
# QUADRANT CONFIGURATION
# =============================================================================

class QuadrantConfig(BaseModel):
    """Display configuration for one quadrant slot."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Quadrant title"
    )
    color: QuadrantColor = Field(
        ...,
        description="Palette token"
    )


def default_quadrant_configs(name_prefix: str = "Quadrant") -> dict[int, QuadrantConfig]:
    """
    Build the initial configuration for all four slots.

    Names are "<prefix> 1".."<prefix> 4"; colors are the first four
    palette entries, so every slot starts distinct.
    """
    palette = list(QuadrantColor)
    return {
        quadrant: QuadrantConfig(
            name=f"{name_prefix} {quadrant + 1}",
            color=palette[quadrant],
        )
        for quadrant in QUADRANT_INDICES
    }


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in raw note input."""

    field: str = Field(
        ...,
        description="Input field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating raw note input.

    `note` is set only when there are no issues.
    """

    issues: list[ValidationIssue] = Field(default_factory=list)
    note: Optional[Note] = None

    @property
    def is_valid(self) -> bool:
        return not self.issues and self.note is not None

    @property
    def first_message(self) -> Optional[str]:
        return self.issues[0].message if self.issues else None
