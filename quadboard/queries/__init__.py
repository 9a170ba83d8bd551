"""Aggregate queries package."""

from quadboard.queries.aggregates import (
    AggregateCalculator,
    BoardSummary,
    QuadrantSummary,
    sum_values,
)

__all__ = [
    "AggregateCalculator",
    "BoardSummary",
    "QuadrantSummary",
    "sum_values",
]
