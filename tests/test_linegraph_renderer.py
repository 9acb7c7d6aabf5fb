from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

import numpy as np
from PIL import Image

from linegraph import LineGraph, Pair, RasterRenderer, Size
from linegraph.raster.canvas import new_canvas
from linegraph.series import point


RED = (255, 0, 0, 255)


class RasterRendererTests(unittest.TestCase):
    def test_new_canvas_fills_background(self) -> None:
        canvas = new_canvas(4, 3, color=(1, 2, 3, 255))
        self.assertEqual(canvas.shape, (3, 4, 4))
        self.assertTrue(np.all(canvas[:, :, 2] == 3))

    def test_solid_line_is_flipped_to_bottom_origin(self) -> None:
        renderer = RasterRenderer(100, 50, background=(0, 0, 0, 255))
        renderer.draw_plot_lines([point(0, 10), point(99, 10)], stroke_width=1.0, stroke_color=RED, is_dashed=False)
        row = renderer.canvas[49 - 10]
        self.assertTrue(np.all(row[:, 0] == 255))
        self.assertEqual(int(renderer.canvas[10, 50, 0]), 0)

    def test_dashed_line_leaves_gaps(self) -> None:
        solid = RasterRenderer(100, 20, background=(0, 0, 0, 255))
        dashed = RasterRenderer(100, 20, background=(0, 0, 0, 255))
        pts = [point(0, 5), point(99, 5)]
        solid.draw_plot_lines(pts, stroke_width=1.0, stroke_color=RED, is_dashed=False)
        dashed.draw_plot_lines(pts, stroke_width=1.0, stroke_color=RED, is_dashed=True)
        solid_count = int(np.count_nonzero(solid.canvas[:, :, 0]))
        dashed_count = int(np.count_nonzero(dashed.canvas[:, :, 0]))
        self.assertEqual(solid_count, 100)
        self.assertEqual(dashed_count, 60)

    def test_single_point_draws_nothing(self) -> None:
        renderer = RasterRenderer(10, 10, background=(0, 0, 0, 255))
        renderer.draw_plot_lines([point(5, 5)], stroke_width=1.0, stroke_color=RED, is_dashed=False)
        self.assertEqual(int(np.count_nonzero(renderer.canvas[:, :, 0])), 0)

    def test_graph_renders_to_png(self) -> None:
        graph = LineGraph(points=[Pair(0, 0), Pair(5, 40), Pair(10, 100)])
        renderer = RasterRenderer(200, 120)
        graph.draw(Size(200, 120), renderer)
        with tempfile.TemporaryDirectory() as tmp:
            out = renderer.save_png(Path(tmp) / "plot.png")
            with Image.open(out) as img:
                self.assertEqual(img.size, (200, 120))
                self.assertEqual(img.mode, "RGBA")


if __name__ == "__main__":
    unittest.main()
