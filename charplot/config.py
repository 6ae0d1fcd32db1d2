from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from charplot.palette import ColorScheme
from charplot.scales import PAD, Transform


DEFAULT_DIMENSIONS = (80, 40)


class PlotMode(Enum):
    DOT = "dot"
    LINE = "line"
    COUNT = "count"


class OutputType(Enum):
    ASCII = "ascii"
    BRAILLE = "braille"
    SVG = "svg"


def parse_dimensions(text: str) -> tuple[int, int]:
    """Parse ``<width>x<height>``."""
    w, sep, h = text.strip().lower().partition("x")
    if not sep:
        raise ValueError(f"invalid dimensions: {text!r}, expected <width>x<height>")
    try:
        width = int(w)
    except ValueError:
        raise ValueError(f"invalid width: {w!r}, expected an integer") from None
    try:
        height = int(h)
    except ValueError:
        raise ValueError(f"invalid height: {h!r}, expected an integer") from None
    return width, height


@dataclass(frozen=True)
class PlotConfig:
    width: int = DEFAULT_DIMENSIONS[0]
    height: int = DEFAULT_DIMENSIONS[1]
    log_x: bool = False
    log_y: bool = False
    axis: bool = True
    mode: PlotMode = PlotMode.DOT
    output: OutputType = OutputType.ASCII
    flip_xy: bool = False
    x_column: bool = False
    color_scheme: ColorScheme = ColorScheme.BANK_WONG
    color: bool = False
    regression: bool = False
    log_count: bool = False
    stream: bool = False

    def __post_init__(self) -> None:
        if self.width <= PAD or self.height <= PAD:
            raise ValueError(f"width and height must be > {PAD}")

    @property
    def transform(self) -> Transform:
        return Transform.from_flags(self.log_x, self.log_y)

    @property
    def count_mode(self) -> bool:
        return self.mode is PlotMode.COUNT

    def grid_size(self) -> tuple[int, int]:
        """Size of the drawing grid the scaler maps into.

        Braille packs 2x4 dots into each character, so its grid is finer than
        the character budget.
        """
        if self.output is OutputType.BRAILLE:
            return self.width * 2, self.height * 4
        return self.width, self.height
