from __future__ import annotations

from collections.abc import Sequence
import math

from charplot.plot import Plot


def format_value(value: float) -> str:
    if math.isfinite(value) and value == int(value) and abs(value) < 1e16:
        return str(int(value))
    return repr(float(value))


def _axis_range(name: str, vmin: float, vmax: float, log: bool) -> str:
    if log:
        return f"    {name}: log [{format_value(math.exp(vmin))} - {format_value(math.exp(vmax))}]"
    return f"    {name}: [{format_value(vmin)} - {format_value(vmax)}]"


def format_header(plot: Plot, legend: Sequence[str] | None = None) -> str:
    """One-line summary of the plotted ranges, plus an optional series legend.

    Log axes report their range mapped back to data units.
    """
    b = plot.bounds
    line = _axis_range("x", b.x_min, b.x_max, plot.transform.log_x) + _axis_range("y", b.y_min, b.y_max, plot.transform.log_y)
    if legend is not None:
        line += " -- " + ", ".join(legend)
    return line
