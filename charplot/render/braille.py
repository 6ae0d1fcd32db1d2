"""Braille output.

Each character packs a 2x4 block of dots. Dot ``(x, y)`` is zero-indexed from
the bottom-left of the block and maps onto the Unicode braille bit layout::

    (0,3) bit0   (1,3) bit3
    (0,2) bit1   (1,2) bit4
    (0,1) bit2   (1,1) bit5
    (0,0) bit6   (1,0) bit7

The code point is ``0x2800 + mask``.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from charplot.palette import RGB, colorize
from charplot.plot import Plot
from charplot.render.canvas import axis_cells
from charplot.render.header import format_header


BRAILLE_BASE = 0x2800
BRAILLE_BLANK = chr(BRAILLE_BASE)
BRAILLE_FULL = chr(BRAILLE_BASE + 0xFF)
DOTS_X = 2
DOTS_Y = 4

_DOT_BITS: dict[tuple[int, int], int] = {
    (0, 0): 6,
    (1, 0): 7,
    (0, 1): 2,
    (1, 1): 5,
    (0, 2): 1,
    (1, 2): 4,
    (0, 3): 0,
    (1, 3): 3,
}


def dot_mask(x: int, y: int) -> int:
    try:
        return 1 << _DOT_BITS[(x, y)]
    except KeyError:
        raise ValueError(f"invalid braille dot position: ({x}, {y})") from None


@dataclass
class BrailleCell:
    value: int = 0

    def set(self, x: int, y: int) -> None:
        self.value |= dot_mask(x, y)

    @property
    def char(self) -> str:
        return chr(BRAILLE_BASE + self.value)


@dataclass
class BrailleCanvas:
    masks: np.ndarray
    colors: np.ndarray
    tinted: np.ndarray

    @property
    def width(self) -> int:
        return int(self.masks.shape[1])

    @property
    def height(self) -> int:
        return int(self.masks.shape[0])


def new_braille_canvas(width: int, height: int) -> BrailleCanvas:
    """Canvas of ``width x height`` characters, i.e. ``2*width x 4*height`` dots."""
    return BrailleCanvas(
        masks=np.zeros((height, width), dtype=np.uint8),
        colors=np.zeros((height, width, 3), dtype=np.uint8),
        tinted=np.zeros((height, width), dtype=bool),
    )


def set_dot(canvas: BrailleCanvas, dot_col: int, dot_row: int, color: RGB | None = None) -> None:
    # dot_row counts down from the top of the dot grid
    col, sub_x = divmod(dot_col, DOTS_X)
    row, sub_row = divmod(dot_row, DOTS_Y)
    if dot_col < 0 or dot_row < 0 or row >= canvas.height or col >= canvas.width:
        return
    canvas.masks[row, col] |= dot_mask(sub_x, DOTS_Y - 1 - sub_row)
    if color is not None:
        canvas.colors[row, col] = color
        canvas.tinted[row, col] = True


def braille_lines(canvas: BrailleCanvas, *, colored: bool = False) -> list[str]:
    lines: list[str] = []
    for row in range(canvas.height):
        out: list[str] = []
        for col in range(canvas.width):
            mask = int(canvas.masks[row, col])
            glyph = BrailleCell(mask).char
            if colored and mask and canvas.tinted[row, col]:
                r, g, b = (int(v) for v in canvas.colors[row, col])
                glyph = colorize(glyph, (r, g, b))
            out.append(glyph)
        lines.append("".join(out))
    return lines


def render_braille(plot: Plot) -> str:
    cfg = plot.config
    scheme = cfg.color_scheme
    canvas = new_braille_canvas(cfg.width, cfg.height)

    if cfg.axis:
        axis_color = scheme.axis_color()
        for col, row, _ in axis_cells(plot.axes, plot.width, plot.height):
            set_dot(canvas, col, row, axis_color)

    for c in range(plot.columns):
        cols, rows, mask = plot.cells(c)
        color = scheme.series_color(c)
        for x, y in zip(cols[mask].tolist(), rows[mask].tolist(), strict=False):
            set_dot(canvas, x, y, color)

    legend = None
    if not cfg.count_mode:
        legend = [
            colorize(BRAILLE_FULL, scheme.series_color(c)) if cfg.color else BRAILLE_FULL
            for c in range(plot.columns)
        ]

    lines = [format_header(plot, legend)]
    lines.extend(braille_lines(canvas, colored=cfg.color))
    return "\n".join(lines) + "\n"
