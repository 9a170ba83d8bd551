"""
Tests for the Quadrant Registry
"""

import pytest

from quadboard.models.note import InvalidQuadrantError, QuadrantColor, QuadrantConfig
from quadboard.state import QuadrantRegistry


class TestQuadrantRegistry:
    """Tests for per-quadrant configuration."""

    def test_defaults(self):
        registry = QuadrantRegistry.defaults()
        assert registry.get(0).name == "Quadrant 1"
        assert registry.get(0).color == QuadrantColor.BLUE
        assert len(registry.configs()) == 4

    def test_set_replaces_name_and_color(self):
        registry = QuadrantRegistry()
        config = registry.set(1, "  Bills  ", QuadrantColor.ROSE)
        assert config == QuadrantConfig(name="Bills", color=QuadrantColor.ROSE)
        assert registry.get(1) == config

    def test_set_accepts_color_token(self):
        registry = QuadrantRegistry()
        assert registry.set(2, "Savings", "bg-teal-50").color == QuadrantColor.TEAL

    def test_blank_name_keeps_previous_but_applies_color(self):
        registry = QuadrantRegistry()
        registry.set(0, "Fixed", QuadrantColor.BLUE)
        config = registry.set(0, "   ", QuadrantColor.ORANGE)
        assert config.name == "Fixed"
        assert config.color == QuadrantColor.ORANGE

    def test_unknown_color_rejected(self):
        registry = QuadrantRegistry()
        with pytest.raises(ValueError):
            registry.set(0, "Bills", "bg-black-50")
        assert registry.get(0).name == "Quadrant 1"

    def test_invalid_quadrant_rejected(self):
        registry = QuadrantRegistry()
        with pytest.raises(InvalidQuadrantError):
            registry.set(4, "Bills", QuadrantColor.BLUE)
        with pytest.raises(InvalidQuadrantError):
            registry.get(-1)

    def test_set_notifies(self):
        registry = QuadrantRegistry()
        calls = []
        registry.subscribe(calls.append)
        registry.set(3, "", QuadrantColor.SKY)
        assert calls == [registry]

    def test_from_snapshot_fills_missing_slots(self):
        registry = QuadrantRegistry.from_snapshot(
            {2: QuadrantConfig(name="Travel", color=QuadrantColor.LIME)},
            name_prefix="Zone",
        )
        assert registry.get(2).name == "Travel"
        assert registry.get(0).name == "Zone 1"
        assert registry.get(3).name == "Zone 4"

    def test_configs_is_a_copy(self):
        registry = QuadrantRegistry()
        configs = registry.configs()
        configs.pop(0)
        assert registry.get(0).name == "Quadrant 1"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
