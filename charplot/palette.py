from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Palette:
    axis: RGB
    series: tuple[RGB, ...]


_PALETTES: dict[str, Palette] = {
    # Bang Wong's colour-blind safe set.
    "bank-wong": Palette(
        axis=(123, 123, 125),
        series=(
            (0, 114, 178),
            (230, 159, 0),
            (86, 180, 233),
            (0, 158, 115),
            (240, 228, 66),
            (0, 0, 0),
            (213, 94, 0),
            (204, 121, 167),
        ),
    ),
    "mono-light": Palette(axis=(255, 255, 255), series=((255, 255, 255),)),
    "mono-dark": Palette(axis=(0, 0, 0), series=((0, 0, 0),)),
}


class ColorScheme(Enum):
    BANK_WONG = "bank-wong"
    MONO_LIGHT = "mono-light"
    MONO_DARK = "mono-dark"

    @classmethod
    def parse(cls, name: str) -> "ColorScheme":
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"unknown color scheme: {name!r} (expected one of: {choices})") from None

    @property
    def palette(self) -> Palette:
        return _PALETTES[self.value]

    def series_color(self, index: int) -> RGB:
        colors = self.palette.series
        return colors[index % len(colors)]

    def axis_color(self) -> RGB:
        return self.palette.axis


def colorize(text: str, rgb: RGB) -> str:
    r, g, b = rgb
    return f"\x1b[38;2;{r};{g};{b}m{text}\x1b[0m"


@dataclass(frozen=True)
class SvgTheme:
    bg_color: str = "black"
    border_color: str = "white"
    axis_color: str = "lightgray"
    colors: tuple[str, ...] = (
        "#377eb8",
        "#e41a1c",
        "#4daf4a",
        "#984ea3",
        "#ff7f00",
        "#ffff33",
        "#a65628",
        "#f781bf",
        "#999999",
    )
    line_width: float = 2.0
    axis_width: float = 2.0
    border_width: float = 2.0

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("SvgTheme needs at least one series color")

    def series_color(self, index: int) -> str:
        if index < len(self.colors):
            return self.colors[index]
        return self.colors[-1]


DEFAULT_SVG_THEME = SvgTheme()
