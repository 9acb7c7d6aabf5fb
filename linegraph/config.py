from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


DEFAULT_MAX_DIVISIONS = 50
DEFAULT_MARGIN_FRACTION = 0.05
DEFAULT_MAX_MARKERS_PER_WALK = 10_000


@dataclass(frozen=True)
class LayoutConfig:
    """Tuning values for one chart's layout pass.

    ``max_divisions`` caps the number of gridlines along a dimension and
    ``margin_fraction`` is the share of each canvas dimension kept free on
    the low side of an all-positive axis.
    """

    max_divisions: float = DEFAULT_MAX_DIVISIONS
    margin_fraction: float = DEFAULT_MARGIN_FRACTION
    max_markers_per_walk: int = DEFAULT_MAX_MARKERS_PER_WALK

    def __post_init__(self) -> None:
        if self.max_divisions <= 0:
            raise ValueError("max_divisions must be > 0")
        if not 0.0 <= self.margin_fraction < 0.5:
            raise ValueError("margin_fraction must be in [0, 0.5)")
        if self.max_markers_per_walk <= 0:
            raise ValueError("max_markers_per_walk must be > 0")

    def with_overrides(self, **changes: Any) -> "LayoutConfig":
        return replace(self, **changes)
