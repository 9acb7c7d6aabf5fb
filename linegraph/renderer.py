from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

import numpy as np
from PIL import Image

from linegraph.raster import draw_dashed_polyline, draw_polyline, new_canvas, to_image
from linegraph.raster.draw_lines import DEFAULT_DASH_PATTERN
from linegraph.series import RGBA, Point


class Renderer(Protocol):
    def draw_plot_lines(
        self,
        points: Sequence[Point],
        stroke_width: float,
        stroke_color: RGBA,
        is_dashed: bool,
    ) -> None: ...


class RasterRenderer:
    """Draws plot lines onto an RGBA numpy canvas.

    Pixel-space y grows upward, so rows are flipped when rasterizing.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        background: RGBA = (255, 255, 255, 255),
        dash_pattern: tuple[int, int] = DEFAULT_DASH_PATTERN,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.dash_pattern = dash_pattern
        self.canvas = new_canvas(self.width, self.height, background)

    def draw_plot_lines(
        self,
        points: Sequence[Point],
        stroke_width: float,
        stroke_color: RGBA,
        is_dashed: bool,
    ) -> None:
        if len(points) < 2:
            return
        xs = np.rint([p.x for p in points]).astype(np.int32)
        ys = (self.height - 1) - np.rint([p.y for p in points]).astype(np.int32)
        width = max(1, int(round(stroke_width)))
        if is_dashed:
            draw_dashed_polyline(self.canvas, xs, ys, stroke_color, width=width, pattern=self.dash_pattern)
        else:
            draw_polyline(self.canvas, xs, ys, stroke_color, width=width)

    def to_image(self) -> Image.Image:
        return to_image(self.canvas)

    def save_png(self, path: str | Path) -> Path:
        out = Path(path)
        self.to_image().save(out, format="PNG")
        return out
