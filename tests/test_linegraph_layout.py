from __future__ import annotations

import unittest

import numpy as np

from linegraph.config import LayoutConfig
from linegraph.layout import DrawingData, PlotMarkers, compute_layout
from linegraph.series import Pair, Series, Size


def _series(points: list[tuple[float, float]], label: str = "s") -> Series:
    return Series(values=tuple(Pair(x, y) for x, y in points), label=label)


class ComputeLayoutTests(unittest.TestCase):
    def test_empty_primary_returns_defaults(self) -> None:
        data, markers = compute_layout([], None, Size(500, 500))
        self.assertEqual(data, DrawingData())
        self.assertEqual(markers, PlotMarkers())

        data, markers = compute_layout([_series([]), _series([(1, 1), (2, 2)])], None, Size(500, 500))
        self.assertEqual(data, DrawingData())
        self.assertEqual(markers, PlotMarkers())

    def test_non_positive_size_returns_defaults(self) -> None:
        data, markers = compute_layout([_series([(0, 0), (1, 1)])], None, Size(0, 500))
        self.assertEqual(data, DrawingData())
        self.assertEqual(markers.x_markers, [])

    def test_single_series_ticks_and_scale(self) -> None:
        s = _series([(0, 0), (5, 50), (10, 100)])
        data, markers = compute_layout([s], None, Size(500, 500))
        self.assertAlmostEqual(data.primary_scale_x, 10.0 / 450.0)
        self.assertAlmostEqual(data.primary_scale_y, 100.0 / 450.0)
        self.assertEqual(markers.x_markers_text, [str(i) for i in range(11)])
        self.assertEqual(markers.y_markers_text, [str(i * 10) for i in range(11)])
        self.assertEqual(len(markers.x_markers), len(markers.x_markers_text))
        for count in (len(markers.x_markers), len(markers.y_markers)):
            self.assertGreater(count, 0)
            self.assertLessEqual(count, 50)
        self.assertEqual(markers.y2_markers, [])
        self.assertEqual(data.secondary_series_points, ())
        self.assertEqual(data.secondary_scale_y, 1.0)

    def test_projected_points_stay_on_canvas(self) -> None:
        rng = np.random.default_rng(7)
        xs = rng.uniform(-50.0, 300.0, size=200).tolist()
        ys = rng.uniform(-3.0, 40.0, size=200).tolist()
        s = _series(list(zip(xs, ys)))
        size = Size(640, 360)
        data, _ = compute_layout([s], None, size)
        for p in data.primary_series_points[0]:
            self.assertTrue(0.0 <= p.x <= size.width)
            self.assertTrue(0.0 <= p.y <= size.height)

    def test_tick_labels_round_trip_to_pixels(self) -> None:
        cases = [
            [(0, 0), (10, 100)],
            [(-10, -5), (10, 15)],
            [(0, 0), (1.5, 1.5)],
            [(0, 0.0), (40, 0.4)],
        ]
        for points in cases:
            data, markers = compute_layout([_series(points)], None, Size(500, 500))
            origin = data.primary_origin
            assert origin is not None
            for pos, text in zip(markers.x_markers, markers.x_markers_text):
                back = float(text) / data.primary_scale_x + origin.x
                self.assertAlmostEqual(back, pos, delta=2.0)
            for pos, text in zip(markers.y_markers, markers.y_markers_text):
                back = float(text) / data.primary_scale_y + origin.y
                self.assertAlmostEqual(back, pos, delta=2.0)

    def test_degenerate_inputs_terminate_with_at_most_one_marker(self) -> None:
        single = _series([(3, 7)])
        data, markers = compute_layout([single], None, Size(500, 500))
        self.assertLessEqual(len(markers.x_markers), 1)
        self.assertLessEqual(len(markers.y_markers), 1)
        self.assertGreater(data.primary_scale_x, 0.0)

        flat = _series([(0, 0), (5, 0), (10, 0)])
        data, markers = compute_layout([flat], None, Size(500, 500))
        self.assertLessEqual(len(markers.y_markers), 1)
        self.assertEqual(len(data.primary_series_points[0]), 3)
        self.assertGreater(len(markers.x_markers), 1)

    def test_small_x_range_reuses_y_candidate(self) -> None:
        s = _series([(0, 0), (1.5, 1.5)])
        _, markers = compute_layout([s], None, Size(500, 500))
        self.assertEqual(len(markers.x_markers), 1)
        self.assertAlmostEqual(markers.x_markers[0], 25.0)
        self.assertEqual(len(markers.y_markers), 5)
        self.assertEqual(markers.y_markers_text, ["0", "0.33", "0.67", "1", "1.33"])

    def test_dual_axis_shares_merged_x(self) -> None:
        primary = _series([(0, 0), (10, 10)], label="p")
        secondary = _series([(5, 0), (20, 50)], label="s")
        data, markers = compute_layout([primary], [secondary], Size(500, 500))

        self.assertAlmostEqual(data.primary_scale_x, 20.0 / 450.0)
        self.assertAlmostEqual(data.secondary_scale_x, data.primary_scale_x)
        self.assertAlmostEqual(data.secondary_scale_y, 50.0 / 450.0)

        p_last = data.primary_series_points[0][-1]
        self.assertAlmostEqual(p_last.x, 250.0)
        self.assertAlmostEqual(p_last.y, 475.0)
        s_pts = data.secondary_series_points[0]
        self.assertAlmostEqual(s_pts[0].x, 137.5)
        self.assertAlmostEqual(s_pts[1].x, 475.0)
        self.assertAlmostEqual(s_pts[1].y, 475.0)

        self.assertEqual(markers.x_markers_text, ["0", "10", "20"])
        self.assertEqual(markers.y2_markers_text, [str(i * 10) for i in range(6)])

    def test_secondary_small_range_uses_tenth_steps(self) -> None:
        primary = _series([(0, 0), (10, 10)])
        secondary = _series([(0, 0), (10, 0.5)])
        data, markers = compute_layout([primary], [secondary], Size(500, 500))
        self.assertAlmostEqual(data.secondary_scale_y, 0.5 / 450.0)
        self.assertEqual(len(markers.y2_markers), 11)
        self.assertEqual(
            markers.y2_markers_text,
            ["0", "0.05", "0.1", "0.15", "0.2", "0.25", "0.3", "0.35", "0.4", "0.45", "0.5"],
        )
        self.assertAlmostEqual(markers.y2_markers[1] - markers.y2_markers[0], 45.0)
        self.assertEqual(markers.y_markers_text, [str(i) for i in range(11)])

    def test_subnormal_y_range_still_lays_out(self) -> None:
        data, markers = compute_layout([_series([(0, 0), (10, 1e-310)])], None, Size(500, 500))
        self.assertEqual(markers.x_markers_text, [str(i) for i in range(11)])
        self.assertGreater(len(markers.y_markers), 1)
        self.assertLessEqual(len(markers.y_markers), 50)
        for pos in markers.y_markers:
            self.assertTrue(np.isfinite(pos))
            self.assertTrue(0.0 <= pos <= 500.0)
        self.assertEqual(markers.y_markers_text[0], "0")
        self.assertEqual(len(data.primary_series_points[0]), 2)

    def test_overflowing_y_range_emits_origin_marker_only(self) -> None:
        data, markers = compute_layout([_series([(0, -1e308), (10, 1e308)])], None, Size(500, 500))
        self.assertTrue(np.isinf(data.primary_scale_y))
        self.assertLessEqual(len(markers.y_markers), 1)
        self.assertEqual(markers.x_markers_text, [str(i) for i in range(11)])

    def test_secondary_without_points_is_ignored(self) -> None:
        primary = _series([(0, 0), (10, 10)])
        data, markers = compute_layout([primary], [_series([])], Size(500, 500))
        self.assertAlmostEqual(data.primary_scale_x, 10.0 / 450.0)
        self.assertEqual(markers.y2_markers, [])
        self.assertIsNone(data.secondary_origin)

    def test_layout_is_idempotent(self) -> None:
        primary = _series([(0, 1), (3, 9), (7, -2)])
        secondary = _series([(1, 100), (12, 340)])
        first = compute_layout([primary], [secondary], Size(800, 600))
        second = compute_layout([primary], [secondary], Size(800, 600))
        self.assertEqual(first, second)

    def test_density_cap_is_configurable(self) -> None:
        s = _series([(0, 0), (10, 100)])
        _, markers = compute_layout([s], None, Size(500, 500), LayoutConfig(max_divisions=5))
        self.assertEqual(len(markers.x_markers), 5)
        self.assertEqual(markers.x_markers_text[1], "2.22")


if __name__ == "__main__":
    unittest.main()
