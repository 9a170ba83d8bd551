"""
Aggregate Calculator

DESIGN DECISION: Totals are DERIVED, never stored.
Every read walks the quadrant's notes again. At the expected scale
(tens of notes per quadrant) this is cheaper than keeping a cache
consistent with every move.

A note whose value is NaN or Infinity contributes zero. It stays on the
board and is counted in `skipped_count` so the damage stays visible.
"""

from decimal import Decimal
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from quadboard.models.note import (
    QUADRANT_INDICES,
    Note,
    QuadrantColor,
)
from quadboard.state.notes import NoteStore
from quadboard.state.registry import QuadrantRegistry


def sum_values(notes: Iterable[Note]) -> Decimal:
    """Sum of finite note values."""
    return sum((note.value for note in notes if note.is_finite), Decimal("0"))


class QuadrantSummary(BaseModel):
    """Derived figures for one quadrant."""

    quadrant: int
    name: str
    color: QuadrantColor
    note_count: int = Field(ge=0)
    total: Decimal
    skipped_count: int = Field(
        default=0,
        ge=0,
        description="Notes left out of the total because their value is not finite"
    )


class BoardSummary(BaseModel):
    """Derived figures for the whole board."""

    quadrants: list[QuadrantSummary]
    grand_total: Decimal
    note_count: int = Field(ge=0)


class AggregateCalculator:
    """
    Computes per-quadrant totals on demand.

    GUARANTEES:
    - Only reads current store state
    - Never mutates anything
    - Never returns a non-finite total
    """

    def __init__(self, store: NoteStore, registry: Optional[QuadrantRegistry] = None):
        self._store = store
        self._registry = registry

    def total(self, quadrant: int) -> Decimal:
        """Sum of `value` over the notes currently in the quadrant."""
        return sum_values(self._store.read(quadrant))

    def summary(self, quadrant: int) -> QuadrantSummary:
        notes = self._store.read(quadrant)
        config = (self._registry or QuadrantRegistry()).get(quadrant)
        return QuadrantSummary(
            quadrant=quadrant,
            name=config.name,
            color=config.color,
            note_count=len(notes),
            total=sum_values(notes),
            skipped_count=sum(1 for note in notes if not note.is_finite),
        )

    def board_summary(self) -> BoardSummary:
        quadrants = [self.summary(q) for q in QUADRANT_INDICES]
        return BoardSummary(
            quadrants=quadrants,
            grand_total=sum((s.total for s in quadrants), Decimal("0")),
            note_count=sum(s.note_count for s in quadrants),
        )
