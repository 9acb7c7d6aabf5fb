from __future__ import annotations

import numpy as np

from linegraph.raster.canvas import RGBA, draw_pixel


DEFAULT_DASH_PATTERN = (6, 4)


def draw_polyline(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, width: int = 1) -> None:
    if xs.size < 2:
        return
    for i in range(xs.size - 1):
        for x, y in _segment_pixels(int(xs[i]), int(ys[i]), int(xs[i + 1]), int(ys[i + 1])):
            _draw_square_brush(dst, x, y, color=color, width=width)


def draw_dashed_polyline(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: RGBA,
    width: int = 1,
    pattern: tuple[int, int] = DEFAULT_DASH_PATTERN,
) -> None:
    """Like :func:`draw_polyline` but alternating ``pattern`` on/off pixel runs.

    The dash phase carries across segment joins.
    """
    if xs.size < 2:
        return
    on, off = pattern
    if on <= 0:
        return
    period = on + max(0, off)
    phase = 0
    for i in range(xs.size - 1):
        for x, y in _segment_pixels(int(xs[i]), int(ys[i]), int(xs[i + 1]), int(ys[i + 1])):
            if phase < on:
                _draw_square_brush(dst, x, y, color=color, width=width)
            phase = (phase + 1) % period


def _segment_pixels(x0: int, y0: int, x1: int, y1: int) -> list[tuple[int, int]]:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    out: list[tuple[int, int]] = []
    while True:
        out.append((x0, y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
    return out


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    radius = max(0, width // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
