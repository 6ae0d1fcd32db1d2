from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

import numpy as np

from charplot.palette import RGB, colorize
from charplot.scales import AxisPlacement


TICK_EVERY = 5


class AxisCell(Enum):
    CROSS = "cross"
    TICK = "tick"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    PHANTOM = "phantom"


def axis_cells(axes: AxisPlacement, width: int, height: int) -> Iterator[tuple[int, int, AxisCell]]:
    """Cells of the axis overlay as ``(col, row, kind)``.

    A visible axis is solid with a tick every ``TICK_EVERY`` cells; an axis
    that is off the data is drawn as a sparse phantom line at the plot edge.
    """
    for row in range(height):
        if axes.draw_y_axis:
            yield axes.column, row, AxisCell.TICK if row % TICK_EVERY == 0 else AxisCell.VERTICAL
        elif row % TICK_EVERY == 0:
            yield axes.column, row, AxisCell.PHANTOM
    for col in range(width):
        if axes.draw_x_axis:
            yield col, axes.row, AxisCell.TICK if col % TICK_EVERY == 0 else AxisCell.HORIZONTAL
        elif col % TICK_EVERY == 0:
            yield col, axes.row, AxisCell.PHANTOM
    yield axes.column, axes.row, AxisCell.CROSS


@dataclass
class TextCanvas:
    glyphs: np.ndarray
    colors: np.ndarray
    tinted: np.ndarray

    @property
    def width(self) -> int:
        return int(self.glyphs.shape[1])

    @property
    def height(self) -> int:
        return int(self.glyphs.shape[0])


def new_text_canvas(width: int, height: int, fill: str = " ") -> TextCanvas:
    return TextCanvas(
        glyphs=np.full((height, width), fill, dtype="<U1"),
        colors=np.zeros((height, width, 3), dtype=np.uint8),
        tinted=np.zeros((height, width), dtype=bool),
    )


def put_glyph(canvas: TextCanvas, col: int, row: int, glyph: str, color: RGB | None = None) -> None:
    if row < 0 or row >= canvas.height or col < 0 or col >= canvas.width:
        return
    canvas.glyphs[row, col] = glyph
    if color is None:
        canvas.tinted[row, col] = False
        return
    canvas.colors[row, col] = color
    canvas.tinted[row, col] = True


def canvas_lines(canvas: TextCanvas, *, colored: bool = False, blank: str = " ") -> list[str]:
    if not colored:
        return ["".join(row) for row in canvas.glyphs.tolist()]
    lines: list[str] = []
    for row in range(canvas.height):
        out: list[str] = []
        for col in range(canvas.width):
            glyph = str(canvas.glyphs[row, col])
            if canvas.tinted[row, col] and glyph != blank:
                r, g, b = (int(v) for v in canvas.colors[row, col])
                glyph = colorize(glyph, (r, g, b))
            out.append(glyph)
        lines.append("".join(out))
    return lines
