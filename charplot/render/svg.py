from __future__ import annotations

import math

import numpy as np
import svgwrite

from charplot.config import PlotMode
from charplot.palette import DEFAULT_SVG_THEME, SvgTheme
from charplot.plot import Plot
from charplot.scales import ScaledPoint, Transform, scale_tick


POINT_SIZE = 3.0
REGRESSION_WIDTH = 2


def contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    """Half-open ``(start, end)`` index ranges where ``mask`` is true."""
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    gaps = np.flatnonzero(np.diff(idx) != 1)
    starts = np.concatenate(([idx[0]], idx[gaps + 1]))
    ends = np.concatenate((idx[gaps], [idx[-1]])) + 1
    return [(int(s), int(e)) for s, e in zip(starts.tolist(), ends.tolist(), strict=False)]


def tick_positions(origin: float, step: float, limit: float) -> list[float]:
    """Tick offsets walking outwards from ``origin`` in both directions, inside ``(0, limit)``."""
    if step <= 0 or not math.isfinite(step):
        return []
    out: list[float] = []
    pos = origin + step
    while pos < limit:
        out.append(pos)
        pos += step
    pos = origin - step
    while pos > 0:
        out.append(pos)
        pos -= step
    return out


def marker_radius(count: int, *, log_count: bool) -> float:
    if log_count:
        return math.log(count) + POINT_SIZE
    return count + POINT_SIZE


def render_svg(plot: Plot, theme: SvgTheme = DEFAULT_SVG_THEME) -> str:
    cfg = plot.config
    w, h = plot.width, plot.height
    dwg = svgwrite.Drawing(size=(w, h))
    dwg.add(
        dwg.rect(
            insert=(0, 0),
            size=(w, h),
            fill=theme.bg_color,
            stroke=theme.border_color,
            stroke_width=theme.border_width,
        )
    )

    if cfg.axis:
        _draw_axes(dwg, plot, theme)

    for c in range(plot.columns):
        color = theme.series_color(c)
        cols, rows, mask = plot.cells(c)
        if cfg.mode is PlotMode.LINE:
            for start, end in contiguous_true_runs(mask):
                points = list(zip(cols[start:end].tolist(), rows[start:end].tolist(), strict=False))
                dwg.add(dwg.polyline(points=points, fill="none", stroke=color, stroke_width=theme.line_width))
        else:
            for x, y in zip(cols[mask].tolist(), rows[mask].tolist(), strict=False):
                radius = POINT_SIZE
                if cfg.count_mode:
                    radius = marker_radius(plot.count_at(c, (x, y)), log_count=cfg.log_count)
                dwg.add(dwg.circle(center=(x, y), r=radius, stroke=color))

        line = plot.regression(c)
        if line is not None:
            p0, p1 = line.endpoints(plot.bounds)
            s0 = ScaledPoint.from_point(p0, plot.bounds, w, h, Transform.NONE)
            s1 = ScaledPoint.from_point(p1, plot.bounds, w, h, Transform.NONE)
            dwg.add(
                dwg.line(
                    start=(s0.col, s0.row),
                    end=(s1.col, s1.row),
                    stroke=color,
                    stroke_width=REGRESSION_WIDTH,
                    stroke_dasharray="5",
                )
            )

    return dwg.tostring()


def _draw_axes(dwg: svgwrite.Drawing, plot: Plot, theme: SvgTheme) -> None:
    w, h = plot.width, plot.height
    axes = plot.axes
    tick_half = 3.0 * theme.axis_width

    if axes.draw_y_axis:
        dwg.add(
            dwg.line(
                start=(axes.column, 0),
                end=(axes.column, h),
                stroke=theme.axis_color,
                stroke_width=theme.axis_width,
                stroke_dasharray="2.5",
            )
        )
        x0 = max(0.0, axes.column - tick_half)
        x1 = axes.column + tick_half
        for hy in tick_positions(axes.row, scale_tick(h, plot.bounds.y_range), h):
            dwg.add(dwg.line(start=(x0, hy), end=(x1, hy), stroke=theme.axis_color, stroke_width=1))

    if axes.draw_x_axis:
        dwg.add(
            dwg.line(
                start=(0, axes.row),
                end=(w, axes.row),
                stroke=theme.axis_color,
                stroke_width=theme.axis_width,
                stroke_dasharray="2.5",
            )
        )
        y0 = max(0.0, axes.row - tick_half)
        y1 = axes.row + tick_half
        for wx in tick_positions(axes.column, scale_tick(w, plot.bounds.x_range), w):
            dwg.add(dwg.line(start=(wx, y0), end=(wx, y1), stroke=theme.axis_color, stroke_width=1))
