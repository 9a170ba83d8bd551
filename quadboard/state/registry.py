"""
Quadrant Registry

Owns the display configuration (name, color) of the four quadrant slots,
independently of which notes they hold. Every slot always has a config.
"""

from typing import Mapping, Optional, Union

from quadboard.models.note import (
    QUADRANT_INDICES,
    QuadrantColor,
    QuadrantConfig,
    check_quadrant,
    default_quadrant_configs,
)
from quadboard.state.observable import Observable


class QuadrantRegistry(Observable):
    """
    Per-quadrant configuration.

    Updates replace name and color together. A blank name is not an
    error: the previous name is kept and the color still applies.
    """

    def __init__(self, configs: Optional[Mapping[int, QuadrantConfig]] = None,
                 name_prefix: str = "Quadrant"):
        super().__init__()
        self._configs = default_quadrant_configs(name_prefix)
        for quadrant, config in (configs or {}).items():
            check_quadrant(quadrant)
            self._configs[quadrant] = config

    @classmethod
    def defaults(cls, name_prefix: str = "Quadrant") -> "QuadrantRegistry":
        return cls(name_prefix=name_prefix)

    @classmethod
    def from_snapshot(cls, snapshot: Mapping[int, QuadrantConfig],
                      name_prefix: str = "Quadrant") -> "QuadrantRegistry":
        """Rebuild from a quadrant -> config mapping; missing slots get defaults."""
        return cls(snapshot, name_prefix=name_prefix)

    def get(self, quadrant: int) -> QuadrantConfig:
        check_quadrant(quadrant)
        return self._configs[quadrant]

    def set(
        self,
        quadrant: int,
        name: str,
        color: Union[QuadrantColor, str],
    ) -> QuadrantConfig:
        """
        Replace the configuration of a quadrant.

        Args:
            quadrant: Slot index (0-3)
            name: New name; blank after trimming keeps the current name
            color: Palette entry or its token

        Returns:
            The configuration now in effect

        Raises:
            InvalidQuadrantError: If the index is out of range
            ValueError: If the color is not a palette token
        """
        check_quadrant(quadrant)
        color = QuadrantColor(color)

        name = (name or "").strip() or self._configs[quadrant].name
        config = QuadrantConfig(name=name, color=color)
        self._configs[quadrant] = config

        self._notify()
        return config

    def configs(self) -> dict[int, QuadrantConfig]:
        return {q: self._configs[q] for q in QUADRANT_INDICES}
