from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
import logging
import math
from typing import Iterable, Sequence

import numpy as np

from linegraph.config import LayoutConfig
from linegraph.series import Pair, Point, Size, point


LOGGER = logging.getLogger(__name__)

# Sentinel carried by an increment that was never set by the small-range cases.
UNSET_INCREMENT = -1.0


@dataclass(frozen=True)
class DataBounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def x_range(self) -> float:
        return self.max_x - self.min_x

    @property
    def y_range(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class ResolvedBounds:
    bounds: DataBounds
    degenerate_x: bool = False
    degenerate_y: bool = False


@dataclass(frozen=True)
class AxisScale:
    scale_x: float
    scale_y: float
    origin: Point


@dataclass(frozen=True)
class TickIncrement:
    pixels: float
    decimals: int | None = None
    small_range: bool = False


class WalkPolicy(Enum):
    # x walks skip out-of-canvas positions in both directions; y walks only
    # skip on the way up.
    X = "x"
    Y = "y"


def series_arrays(values: Iterable[Pair]) -> tuple[np.ndarray, np.ndarray]:
    """x and y coordinates of ``values`` as float64 arrays, in order."""
    values = tuple(values)
    xs = np.fromiter((float(v.x) for v in values), dtype=np.float64, count=len(values))
    ys = np.fromiter((float(v.y) for v in values), dtype=np.float64, count=len(values))
    return xs, ys


def compute_bounds(arrays: Sequence[tuple[np.ndarray, np.ndarray]]) -> DataBounds | None:
    """Coordinate-wise min/max over every finite point of every series.

    ``arrays`` holds one ``(xs, ys)`` pair per series, as built by
    :func:`series_arrays`. Returns ``None`` when no series holds a finite
    point, which callers treat as nothing to draw.
    """
    if not arrays:
        return None
    xs = np.concatenate([x for x, _ in arrays])
    ys = np.concatenate([y for _, y in arrays])
    mask = np.isfinite(xs) & np.isfinite(ys)
    if not np.any(mask):
        return None
    xs = xs[mask]
    ys = ys[mask]
    return DataBounds(
        min_x=float(np.min(xs)),
        max_x=float(np.max(xs)),
        min_y=float(np.min(ys)),
        max_y=float(np.max(ys)),
    )


def merge_x_bounds(primary: DataBounds, secondary: DataBounds) -> DataBounds:
    return DataBounds(
        min_x=min(primary.min_x, secondary.min_x),
        max_x=max(primary.max_x, secondary.max_x),
        min_y=primary.min_y,
        max_y=primary.max_y,
    )


def resolve_degenerate(bounds: DataBounds) -> ResolvedBounds:
    """Replace a zero-width dimension with a unit range centred on its value."""
    min_x, max_x = bounds.min_x, bounds.max_x
    min_y, max_y = bounds.min_y, bounds.max_y
    degenerate_x = not max_x > min_x
    degenerate_y = not max_y > min_y
    if degenerate_x:
        LOGGER.warning("zero x range at %r; substituting a unit range", min_x)
        min_x, max_x = min_x - 0.5, min_x + 0.5
    if degenerate_y:
        LOGGER.warning("zero y range at %r; substituting a unit range", min_y)
        min_y, max_y = min_y - 0.5, min_y + 0.5
    return ResolvedBounds(
        bounds=DataBounds(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y),
        degenerate_x=degenerate_x,
        degenerate_y=degenerate_y,
    )


def scale_and_origin(bounds: DataBounds, size: Size, config: LayoutConfig) -> AxisScale:
    """Data units per pixel and the pixel position of data value zero.

    ``bounds`` must have a strictly positive range on both dimensions; run it
    through :func:`resolve_degenerate` first.
    """
    margin_x = size.width * config.margin_fraction
    margin_y = size.height * config.margin_fraction
    # min / range first: size / range overflows for subnormal ranges.
    origin_x = size.width * (-bounds.min_x / bounds.x_range)
    origin_y = size.height * (-bounds.min_y / bounds.y_range)
    if bounds.min_x >= 0.0:
        origin_x += margin_x
    if bounds.min_y >= 0.0:
        origin_y += margin_y
    scale_x = bounds.x_range / (size.width - 2 * margin_x)
    scale_y = bounds.y_range / (size.height - 2 * margin_y)
    return AxisScale(scale_x=scale_x, scale_y=scale_y, origin=point(origin_x, origin_y))


def count_digits(value: float) -> int:
    """Number of decimal digits in the integer part of ``value`` (0 below 1)."""
    n = abs(int(value))
    count = 0
    while n != 0:
        n //= 10
        count += 1
    return count


def power_of_ten_step(lo: float, hi: float) -> float:
    digits = max(count_digits(hi), count_digits(lo))
    if digits > 1 and hi <= 10.0 ** (digits - 1):
        return 10.0 ** (digits - 2)
    if digits > 1:
        return 10.0 ** (digits - 1)
    return 1.0


def small_range_candidate(value_range: float) -> float | None:
    """Tick step in data units for ranges up to 2, ``None`` for wider ranges."""
    if 1.0 <= value_range <= 2.0:
        return 0.5 / value_range
    if value_range < 1.0:
        return value_range / 10.0
    return None


def decimal_shift(candidate: float) -> int:
    """Smallest ``c >= 0`` with ``|candidate| * 10**c >= 1``."""
    if candidate == 0.0 or not math.isfinite(candidate):
        raise ValueError("candidate must be finite and non-zero")
    return max(0, math.ceil(-math.log10(abs(candidate))))


def _pixel_step(step: float, scale: float) -> float:
    if not (math.isfinite(scale) and scale > 0.0):
        return math.inf
    return step / scale


def tick_increment(
    lo: float,
    hi: float,
    scale: float,
    dimension_size: float,
    config: LayoutConfig,
    *,
    degenerate: bool = False,
) -> TickIncrement:
    if degenerate:
        return TickIncrement(pixels=math.inf)

    candidate = small_range_candidate(hi - lo)
    if candidate is not None:
        pixels = _pixel_step(candidate, scale)
        if not (math.isfinite(pixels) and pixels > 0.0):
            LOGGER.warning("tick increment %r unusable for range [%r, %r]; emitting origin only", pixels, lo, hi)
            return TickIncrement(pixels=math.inf)
        return TickIncrement(
            pixels=pixels,
            decimals=decimal_shift(candidate) + 1,
            small_range=True,
        )

    pixels = _pixel_step(power_of_ten_step(lo, hi), scale)
    if not (math.isfinite(pixels) and pixels > 0.0):
        LOGGER.warning("tick increment %r unusable for range [%r, %r]; emitting origin only", pixels, lo, hi)
        return TickIncrement(pixels=math.inf)
    divisions = dimension_size / pixels
    if divisions > config.max_divisions:
        pixels = divisions * pixels / config.max_divisions
    return TickIncrement(pixels=pixels)


def coupled_x_increment(x_candidate: float, y_candidate_pixels: float, scale_x: float) -> float:
    """Pixel increment for a small x range.

    Reuses the y dimension's pixel candidate rather than ``x_candidate``;
    return ``x_candidate / scale_x`` here to decouple the two dimensions.
    """
    return y_candidate_pixels / scale_x


def x_tick_increment(
    lo: float,
    hi: float,
    scale_x: float,
    width: float,
    y_increment: TickIncrement,
    config: LayoutConfig,
    *,
    degenerate: bool = False,
) -> TickIncrement:
    if degenerate:
        return TickIncrement(pixels=math.inf)

    candidate = small_range_candidate(hi - lo)
    if candidate is None:
        return tick_increment(lo, hi, scale_x, width, config)

    y_pixels = y_increment.pixels if y_increment.small_range else UNSET_INCREMENT
    pixels = coupled_x_increment(candidate, y_pixels, scale_x) if scale_x > 0.0 else math.inf
    if not (math.isfinite(pixels) and pixels > 0.0):
        LOGGER.warning("x increment %r unusable; falling back to the x candidate", pixels)
        pixels = _pixel_step(candidate, scale_x)
    if not (math.isfinite(pixels) and pixels > 0.0):
        return TickIncrement(pixels=math.inf)
    return TickIncrement(pixels=pixels, decimals=decimal_shift(candidate) + 1, small_range=True)


def generate_markers(
    origin: float,
    increment: float,
    dimension_size: float,
    scale: float,
    decimals: int | None,
    config: LayoutConfig,
    *,
    policy: WalkPolicy = WalkPolicy.X,
) -> list[tuple[float, str]]:
    """Walk outward from ``origin`` emitting ``(pixel, label)`` pairs."""
    if dimension_size <= 0 or not math.isfinite(origin):
        return []

    step = increment * scale
    if math.isnan(increment) or increment <= 0.0:
        LOGGER.warning("non-positive tick increment %r; emitting origin only", increment)
        return _origin_marker(origin, dimension_size)
    if math.isinf(increment):
        return _origin_marker(origin, dimension_size)

    limit = config.max_markers_per_walk
    positions: list[float] = []

    # Upward: stop past the far edge, skip (but keep walking) below zero.
    k = _steps_to_cover(-origin, increment) if origin < 0.0 else 0
    visited = 0
    while k is not None and visited < limit:
        pos = origin + k * increment
        if pos > dimension_size:
            break
        k += 1
        visited += 1
        if pos >= 0.0:
            positions.append(pos)
    capped = visited >= limit

    # Downward: stop at zero; only x walks skip positions past the far edge.
    skip_above = policy is WalkPolicy.X
    k = 1
    if skip_above and origin - increment > dimension_size:
        k = _steps_to_cover(origin - dimension_size, increment)
    visited = 0
    while k is not None and visited < limit:
        pos = origin - k * increment
        if pos <= 0.0:
            break
        k += 1
        visited += 1
        if not (skip_above and pos > dimension_size):
            positions.append(pos)

    if capped or visited >= limit:
        LOGGER.warning("marker walk capped at %d positions", limit)
    return [(pos, format_label(scale * (pos - origin), decimals, step=step)) for pos in positions]


def _steps_to_cover(distance: float, increment: float) -> int | None:
    steps = distance / increment
    if not math.isfinite(steps):
        return None
    return max(1, math.ceil(steps))


def _origin_marker(origin: float, dimension_size: float) -> list[tuple[float, str]]:
    if 0.0 <= origin <= dimension_size:
        return [(origin, "0")]
    return []


def project_points(
    xs: np.ndarray,
    ys: np.ndarray,
    *,
    scale_x: float,
    origin_x: float,
    scale_y: float,
    origin_y: float,
    size: Size,
) -> tuple[Point, ...]:
    """Map data coordinates to pixels, dropping anything off the canvas.

    Non-finite coordinates never pass the canvas mask. Surviving points keep
    their input order.
    """
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        px = np.asarray(xs, dtype=np.float64) / scale_x + origin_x
        py = np.asarray(ys, dtype=np.float64) / scale_y + origin_y
        keep = (px >= 0.0) & (px <= size.width) & (py >= 0.0) & (py <= size.height)
    return tuple(point(x, y) for x, y in zip(px[keep].tolist(), py[keep].tolist()))


def format_label(value: float, decimals: int | None, *, step: float | None = None) -> str:
    """Round ``value`` to ``decimals`` places and render it as plain decimal text.

    Without an explicit place count the precision follows ``step`` to three
    significant digits, so steps of one or more produce whole numbers.
    """
    if not math.isfinite(value):
        return str(value)
    if decimals is None:
        decimals = _decimals_from_step(step)
    d = Decimal(repr(value))
    try:
        q = d.quantize(Decimal("1").scaleb(-decimals))
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _decimals_from_step(step: float | None) -> int:
    if step is None or not math.isfinite(step) or step <= 0:
        return 0
    d = Decimal(f"{step:.3g}").normalize()
    exp = d.as_tuple().exponent
    return min(12, max(0, -int(exp)))
