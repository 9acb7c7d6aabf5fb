from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Any, Callable, Sequence

import numpy as np

from linegraph.adapters import coerce_values
from linegraph.config import LayoutConfig
from linegraph.errors import PlotDataError
from linegraph.layout import DrawingData, PlotMarkers, compute_layout
from linegraph.renderer import Renderer
from linegraph.series import LIGHT_BLUE, RGBA, Axis, AxisLocation, Pair, Point, Series, Size


LOGGER = logging.getLogger(__name__)

DEFAULT_SAMPLE_COUNT = 400
DEFAULT_LINE_THICKNESS = 1.5


@dataclass(frozen=True)
class GraphSnapshot:
    """Frozen view of a graph's series taken at the start of a layout pass."""

    primary: tuple[Series, ...]
    secondary: tuple[Series, ...] | None
    config: LayoutConfig

    def layout(self, size: Size) -> tuple[DrawingData, PlotMarkers]:
        return compute_layout(self.primary, self.secondary, size, self.config)


class LineGraph:
    """Line chart with a primary and an optional secondary y axis.

    Series are appended first; :meth:`layout_data` then works on a frozen
    snapshot so later additions never affect a layout already computed.
    """

    def __init__(
        self,
        points: Sequence[Pair] | None = None,
        *,
        enable_primary_axis_grid: bool = False,
        enable_secondary_axis_grid: bool = False,
        config: LayoutConfig | None = None,
    ) -> None:
        self.enable_primary_axis_grid = enable_primary_axis_grid
        self.enable_secondary_axis_grid = enable_secondary_axis_grid
        self.plot_line_thickness = DEFAULT_LINE_THICKNESS
        self.config = config or LayoutConfig()
        self.primary_axis: Axis = Axis(location=AxisLocation.PRIMARY)
        self.secondary_axis: Axis | None = None
        if points is not None:
            self.primary_axis.append(Series(values=tuple(points), label="Plot"))

    # Setting data.

    def add_series(self, series: Series, axis: AxisLocation = AxisLocation.PRIMARY) -> None:
        if axis is AxisLocation.PRIMARY:
            self.primary_axis.append(series)
            return
        if self.secondary_axis is None:
            self.secondary_axis = Axis(location=AxisLocation.SECONDARY)
        self.secondary_axis.append(series)

    def add_points(
        self,
        points: Sequence[Pair],
        *,
        label: str,
        color: RGBA = LIGHT_BLUE,
        axis: AxisLocation = AxisLocation.PRIMARY,
    ) -> None:
        self.add_series(Series(values=tuple(points), label=label, color=color), axis=axis)

    def add_values(
        self,
        y: Any,
        *,
        label: str,
        color: RGBA = LIGHT_BLUE,
        axis: AxisLocation = AxisLocation.PRIMARY,
    ) -> None:
        """Add ``y`` against x positions 1, 2, ... n."""
        ys = coerce_values(y, label="y")
        points = tuple(Pair(i + 1, v) for i, v in enumerate(ys))
        self.add_series(Series(values=points, label=label, color=color), axis=axis)

    def add_xy(
        self,
        x: Any,
        y: Any,
        *,
        label: str,
        color: RGBA = LIGHT_BLUE,
        axis: AxisLocation = AxisLocation.PRIMARY,
    ) -> None:
        xs = coerce_values(x, label="x")
        ys = coerce_values(y, label="y")
        if len(xs) != len(ys):
            raise PlotDataError(f"x and y length mismatch: {len(xs)} != {len(ys)}")
        points = tuple(Pair(a, b) for a, b in zip(xs, ys))
        self.add_series(Series(values=points, label=label, color=color), axis=axis)

    def add_function(
        self,
        function: Callable[[Any], Any],
        *,
        min_x: Any,
        max_x: Any,
        number_of_samples: int = DEFAULT_SAMPLE_COUNT,
        clamp_y: tuple[Any, Any] | None = None,
        label: str,
        color: RGBA = LIGHT_BLUE,
        axis: AxisLocation = AxisLocation.PRIMARY,
    ) -> None:
        """Sample ``function`` from ``min_x`` through ``max_x``.

        Samples that are not finite, fall outside ``clamp_y`` or cannot be
        evaluated (domain or arithmetic errors) are left out of the series.
        """
        if number_of_samples <= 0:
            raise PlotDataError("number_of_samples must be > 0")
        lo = float(min_x)
        hi = float(max_x)
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise PlotDataError("min_x/max_x must be finite")
        if hi < lo:
            raise PlotDataError("max_x must be >= min_x")

        x_type = type(min_x)
        points: list[Pair] = []
        skipped = 0
        for raw in np.linspace(lo, hi, number_of_samples + 1).tolist():
            x = x_type(raw)
            try:
                result = function(x)
                y = float(result)
            except (ArithmeticError, ValueError):
                skipped += 1
                continue
            if not math.isfinite(y):
                skipped += 1
                continue
            if clamp_y is not None and not (clamp_y[0] <= result <= clamp_y[1]):
                skipped += 1
                continue
            points.append(Pair(x, result))
        if skipped:
            LOGGER.debug("function series %r: skipped %d of %d samples", label, skipped, number_of_samples + 1)
        self.add_series(Series(values=tuple(points), label=label, color=color), axis=axis)

    # Layout and drawing.

    @property
    def legend_labels(self) -> list[tuple[str, RGBA]]:
        series = list(self.primary_axis.series)
        if self.secondary_axis is not None:
            series.extend(self.secondary_axis.series)
        return [(s.label, s.color) for s in series]

    def snapshot(self) -> GraphSnapshot:
        secondary = tuple(self.secondary_axis.series) if self.secondary_axis is not None else None
        return GraphSnapshot(primary=tuple(self.primary_axis.series), secondary=secondary, config=self.config)

    def layout_data(self, size: Size, renderer: Renderer | None = None) -> tuple[DrawingData, PlotMarkers]:
        # The renderer is accepted for interface parity; no metrics are needed.
        return self.snapshot().layout(size)

    def draw_data(self, data: DrawingData, size: Size, renderer: Renderer) -> None:
        self._draw_axis(self.primary_axis.series, data.primary_series_points, renderer, is_dashed=False)
        if self.secondary_axis is not None:
            self._draw_axis(self.secondary_axis.series, data.secondary_series_points, renderer, is_dashed=True)

    def draw(self, size: Size, renderer: Renderer) -> PlotMarkers:
        data, markers = self.layout_data(size, renderer)
        self.draw_data(data, size, renderer)
        return markers

    def _draw_axis(
        self,
        series: Sequence[Series],
        scaled: Sequence[Sequence[Point]],
        renderer: Renderer,
        *,
        is_dashed: bool,
    ) -> None:
        # An empty layout carries no scaled points; nothing to draw then.
        for s, points in zip(series, scaled):
            renderer.draw_plot_lines(
                points=list(points),
                stroke_width=self.plot_line_thickness,
                stroke_color=s.color,
                is_dashed=is_dashed,
            )
