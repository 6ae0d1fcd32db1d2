from charplot.config import OutputType, PlotConfig, PlotMode
from charplot.errors import DegenerateRangeError, DomainError, EmptyDatasetError, FrameSkipped, PlotDataError
from charplot.palette import ColorScheme
from charplot.plot import Plot
from charplot.regression import RegressionLine, linear_regression
from charplot.render import render_plot
from charplot.scales import AxisPlacement, Bounds, ScaledPoint, Transform, compute_bounds, map_to_cells, place_axes
from charplot.series import EMPTY_VALUE, DataSet, Point

__all__ = [
    "AxisPlacement",
    "Bounds",
    "ColorScheme",
    "DataSet",
    "DegenerateRangeError",
    "DomainError",
    "EMPTY_VALUE",
    "EmptyDatasetError",
    "FrameSkipped",
    "OutputType",
    "Plot",
    "PlotConfig",
    "PlotDataError",
    "PlotMode",
    "Point",
    "RegressionLine",
    "ScaledPoint",
    "Transform",
    "compute_bounds",
    "linear_regression",
    "map_to_cells",
    "place_axes",
    "render_plot",
]
