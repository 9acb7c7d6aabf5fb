from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Sequence

import numpy as np

from linegraph.config import LayoutConfig
from linegraph.scales import (
    AxisScale,
    DataBounds,
    WalkPolicy,
    compute_bounds,
    generate_markers,
    merge_x_bounds,
    project_points,
    resolve_degenerate,
    scale_and_origin,
    series_arrays,
    tick_increment,
    x_tick_increment,
)
from linegraph.series import Point, Series, Size


LOGGER = logging.getLogger(__name__)

SeriesPoints = tuple[tuple[Point, ...], ...]


@dataclass(frozen=True)
class DrawingData:
    primary_scale_x: float = 1.0
    primary_scale_y: float = 1.0
    primary_series_points: SeriesPoints = ()
    primary_origin: Point | None = None

    secondary_scale_x: float = 1.0
    secondary_scale_y: float = 1.0
    secondary_series_points: SeriesPoints = ()
    secondary_origin: Point | None = None


@dataclass
class PlotMarkers:
    x_markers: list[float] = field(default_factory=list)
    x_markers_text: list[str] = field(default_factory=list)
    y_markers: list[float] = field(default_factory=list)
    y_markers_text: list[str] = field(default_factory=list)
    y2_markers: list[float] = field(default_factory=list)
    y2_markers_text: list[str] = field(default_factory=list)

    def extend_x(self, markers: Sequence[tuple[float, str]]) -> None:
        for pos, text in markers:
            self.x_markers.append(pos)
            self.x_markers_text.append(text)

    def extend_y(self, markers: Sequence[tuple[float, str]]) -> None:
        for pos, text in markers:
            self.y_markers.append(pos)
            self.y_markers_text.append(text)

    def extend_y2(self, markers: Sequence[tuple[float, str]]) -> None:
        for pos, text in markers:
            self.y2_markers.append(pos)
            self.y2_markers_text.append(text)


def compute_layout(
    primary: Sequence[Series],
    secondary: Sequence[Series] | None,
    size: Size,
    config: LayoutConfig | None = None,
) -> tuple[DrawingData, PlotMarkers]:
    """Scale, tick and project a primary and optional secondary axis.

    Both axes share one x bound (the union of their x ranges); each keeps its
    own y bound. The result depends only on the arguments.
    """
    config = config or LayoutConfig()
    markers = PlotMarkers()
    if not primary or len(primary[0]) == 0:
        LOGGER.debug("primary axis has no data; returning empty layout")
        return DrawingData(), markers
    if size.width <= 0 or size.height <= 0:
        LOGGER.debug("non-positive canvas size %sx%s; returning empty layout", size.width, size.height)
        return DrawingData(), markers

    primary_arrays = [series_arrays(s.values) for s in primary]
    primary_bounds = compute_bounds(primary_arrays)
    if primary_bounds is None:
        LOGGER.debug("primary axis has no finite points; returning empty layout")
        return DrawingData(), markers

    secondary = secondary or ()
    secondary_arrays = [series_arrays(s.values) for s in secondary]
    secondary_bounds = compute_bounds(secondary_arrays)
    if secondary and secondary_bounds is None:
        LOGGER.debug("secondary axis has no finite points; ignoring it")
    if secondary_bounds is not None:
        primary_bounds = merge_x_bounds(primary_bounds, secondary_bounds)

    resolved = resolve_degenerate(primary_bounds)
    bounds = resolved.bounds
    axis = scale_and_origin(bounds, size, config)

    y_inc = tick_increment(
        bounds.min_y, bounds.max_y, axis.scale_y, size.height, config, degenerate=resolved.degenerate_y
    )
    x_inc = x_tick_increment(
        bounds.min_x, bounds.max_x, axis.scale_x, size.width, y_inc, config, degenerate=resolved.degenerate_x
    )
    markers.extend_x(
        generate_markers(axis.origin.x, x_inc.pixels, size.width, axis.scale_x, x_inc.decimals, config, policy=WalkPolicy.X)
    )
    markers.extend_y(
        generate_markers(axis.origin.y, y_inc.pixels, size.height, axis.scale_y, y_inc.decimals, config, policy=WalkPolicy.Y)
    )
    primary_points = _project_axis(primary, primary_arrays, axis, axis, size)
    data = DrawingData(
        primary_scale_x=axis.scale_x,
        primary_scale_y=axis.scale_y,
        primary_series_points=primary_points,
        primary_origin=axis.origin,
    )

    if secondary and secondary_bounds is not None:
        data = _layout_secondary(data, secondary, secondary_arrays, secondary_bounds, bounds, axis, size, config, markers)
    return data, markers


def _layout_secondary(
    data: DrawingData,
    secondary: Sequence[Series],
    arrays: Sequence[tuple[np.ndarray, np.ndarray]],
    secondary_bounds: DataBounds,
    bounds: DataBounds,
    axis: AxisScale,
    size: Size,
    config: LayoutConfig,
    markers: PlotMarkers,
) -> DrawingData:
    """Independent y scale and ticks for the secondary axis on the shared x axis."""
    resolved = resolve_degenerate(
        DataBounds(
            min_x=bounds.min_x,
            max_x=bounds.max_x,
            min_y=secondary_bounds.min_y,
            max_y=secondary_bounds.max_y,
        )
    )
    secondary_y = resolved.bounds
    secondary_axis = scale_and_origin(secondary_y, size, config)
    y2_inc = tick_increment(
        secondary_y.min_y,
        secondary_y.max_y,
        secondary_axis.scale_y,
        size.height,
        config,
        degenerate=resolved.degenerate_y,
    )
    markers.extend_y2(
        generate_markers(
            secondary_axis.origin.y,
            y2_inc.pixels,
            size.height,
            secondary_axis.scale_y,
            y2_inc.decimals,
            config,
            policy=WalkPolicy.Y,
        )
    )
    return replace(
        data,
        secondary_scale_x=axis.scale_x,
        secondary_scale_y=secondary_axis.scale_y,
        secondary_series_points=_project_axis(secondary, arrays, axis, secondary_axis, size),
        secondary_origin=secondary_axis.origin,
    )


def _project_axis(
    series: Sequence[Series],
    arrays: Sequence[tuple[np.ndarray, np.ndarray]],
    x_axis: AxisScale,
    y_axis: AxisScale,
    size: Size,
) -> SeriesPoints:
    out = []
    for s, (xs, ys) in zip(series, arrays):
        projected = project_points(
            xs,
            ys,
            scale_x=x_axis.scale_x,
            origin_x=x_axis.origin.x,
            scale_y=y_axis.scale_y,
            origin_y=y_axis.origin.y,
            size=size,
        )
        dropped = len(s) - len(projected)
        if dropped:
            LOGGER.debug("series %r: dropped %d out-of-canvas points", s.label, dropped)
        out.append(projected)
    return tuple(out)
