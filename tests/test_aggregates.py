"""
Tests for the Aggregate Calculator
"""

from decimal import Decimal

import pytest

from quadboard.queries import AggregateCalculator
from quadboard.queries.aggregates import sum_values
from quadboard.state import NoteStore, QuadrantRegistry


class TestAggregateCalculator:
    """Totals are derived from current store state."""

    def test_empty_quadrant_totals_zero(self):
        calculator = AggregateCalculator(NoteStore())
        assert calculator.total(0) == Decimal("0")

    def test_total_sums_values(self, note_factory):
        store = NoteStore()
        store.create(1, note_factory(value=Decimal("10.25")))
        store.create(1, note_factory(value=Decimal("-0.25")))
        store.create(2, note_factory(value=Decimal("99")))
        calculator = AggregateCalculator(store)
        assert calculator.total(1) == Decimal("10.00")
        assert calculator.total(2) == Decimal("99")

    def test_total_follows_moves(self, note_factory):
        store = NoteStore()
        store.create(0, note_factory(id="a", value=Decimal("1500.50")))
        calculator = AggregateCalculator(store)
        store.move("a", 0, 3)
        assert calculator.total(0) == Decimal("0")
        assert calculator.total(3) == Decimal("1500.50")

    def test_non_finite_values_contribute_zero(self, note_factory):
        store = NoteStore()
        store.create(0, note_factory(value=Decimal("NaN")))
        store.create(0, note_factory(value=Decimal("Infinity")))
        store.create(0, note_factory(value=Decimal("5")))
        calculator = AggregateCalculator(store)
        assert calculator.total(0) == Decimal("5")
        assert calculator.total(0).is_finite()

    def test_summary_counts_skipped_notes(self, note_factory):
        store = NoteStore()
        registry = QuadrantRegistry()
        registry.set(0, "Bills", "bg-rose-50")
        store.create(0, note_factory(value=Decimal("NaN")))
        store.create(0, note_factory(value=Decimal("2")))

        summary = AggregateCalculator(store, registry).summary(0)
        assert summary.name == "Bills"
        assert summary.note_count == 2
        assert summary.skipped_count == 1
        assert summary.total == Decimal("2")

    def test_board_summary(self, note_factory):
        store = NoteStore()
        store.create(0, note_factory(value=Decimal("1")))
        store.create(3, note_factory(value=Decimal("2.5")))

        summary = AggregateCalculator(store, QuadrantRegistry()).board_summary()
        assert [q.quadrant for q in summary.quadrants] == [0, 1, 2, 3]
        assert summary.grand_total == Decimal("3.5")
        assert summary.note_count == 2

    def test_sum_values_of_nothing(self):
        assert sum_values([]) == Decimal("0")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
