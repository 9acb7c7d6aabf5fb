from .canvas import new_canvas, to_image
from .draw_lines import draw_dashed_polyline, draw_polyline

__all__ = [
    "draw_dashed_polyline",
    "draw_polyline",
    "new_canvas",
    "to_image",
]
