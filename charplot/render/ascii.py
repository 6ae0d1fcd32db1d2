from __future__ import annotations

from charplot.counts import count_glyph
from charplot.palette import colorize
from charplot.plot import Plot
from charplot.render.canvas import AxisCell, axis_cells, canvas_lines, new_text_canvas, put_glyph
from charplot.render.header import format_header


COL_MARKS = "#@*^!~%ABCDEFGHIJKLMNOPQRSTUVWXYZ"

AXIS_GLYPHS: dict[AxisCell, str] = {
    AxisCell.CROSS: "+",
    AxisCell.TICK: "+",
    AxisCell.VERTICAL: "|",
    AxisCell.HORIZONTAL: "─",
    AxisCell.PHANTOM: ".",
}


def col_mark(col: int) -> str:
    if col < len(COL_MARKS):
        return COL_MARKS[col]
    return "*"


def render_ascii(plot: Plot) -> str:
    cfg = plot.config
    scheme = cfg.color_scheme
    canvas = new_text_canvas(plot.width, plot.height)

    if cfg.axis:
        axis_color = scheme.axis_color()
        for col, row, kind in axis_cells(plot.axes, plot.width, plot.height):
            put_glyph(canvas, col, row, AXIS_GLYPHS[kind], axis_color)

    for c in range(plot.columns):
        cols, rows, mask = plot.cells(c)
        color = scheme.series_color(c)
        mark = col_mark(c)
        for x, y in zip(cols[mask].tolist(), rows[mask].tolist(), strict=False):
            if cfg.count_mode:
                mark = count_glyph(plot.count_at(c, (x, y)))
            put_glyph(canvas, x, y, mark, color)

    legend = None
    if not cfg.count_mode:
        legend = [
            colorize(col_mark(c), scheme.series_color(c)) if cfg.color else col_mark(c)
            for c in range(plot.columns)
        ]

    lines = [format_header(plot, legend)]
    lines.extend(canvas_lines(canvas, colored=cfg.color))
    return "\n".join(lines) + "\n"
