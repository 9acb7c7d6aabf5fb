from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path

from linegraph import AxisLocation, LineGraph, RasterRenderer, Size
from linegraph.series import ORANGE


def main() -> None:
    parser = argparse.ArgumentParser(description="Render a dual-axis line graph to PNG.")
    parser.add_argument("--width", type=int, default=640)
    parser.add_argument("--height", type=int, default=400)
    parser.add_argument("--out", type=Path, default=Path("dual_axis.png"))
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    graph = LineGraph(enable_primary_axis_grid=True)
    graph.add_function(math.sin, min_x=0.0, max_x=10.0, label="sin")
    graph.add_function(
        lambda x: 1.0 / (x - 12.0),
        min_x=5.0,
        max_x=20.0,
        clamp_y=(-5.0, 5.0),
        label="1/(x-12)",
        color=ORANGE,
        axis=AxisLocation.SECONDARY,
    )

    size = Size(args.width, args.height)
    renderer = RasterRenderer(args.width, args.height)
    markers = graph.draw(size, renderer)
    renderer.save_png(args.out)
    print(f"wrote {args.out}")
    print("x ticks:", ", ".join(markers.x_markers_text))
    print("y ticks:", ", ".join(markers.y_markers_text))
    print("y2 ticks:", ", ".join(markers.y2_markers_text))


if __name__ == "__main__":
    main()
