from linegraph.config import LayoutConfig
from linegraph.errors import PlotDataError
from linegraph.graph import GraphSnapshot, LineGraph
from linegraph.layout import DrawingData, PlotMarkers, compute_layout
from linegraph.renderer import RasterRenderer, Renderer
from linegraph.series import Axis, AxisLocation, Pair, Point, Series, Size

__all__ = [
    "Axis",
    "AxisLocation",
    "DrawingData",
    "GraphSnapshot",
    "LayoutConfig",
    "LineGraph",
    "Pair",
    "PlotDataError",
    "PlotMarkers",
    "Point",
    "RasterRenderer",
    "Renderer",
    "Series",
    "Size",
    "compute_layout",
]
