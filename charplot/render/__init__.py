from __future__ import annotations

from collections.abc import Callable
import logging

from charplot.config import OutputType
from charplot.plot import Plot

from .ascii import render_ascii
from .braille import render_braille
from .svg import render_svg

LOGGER = logging.getLogger(__name__)

RENDERERS: dict[OutputType, Callable[[Plot], str]] = {
    OutputType.ASCII: render_ascii,
    OutputType.BRAILLE: render_braille,
    OutputType.SVG: render_svg,
}


def render_plot(plot: Plot) -> str:
    output = plot.config.output
    if plot.config.regression and output is not OutputType.SVG:
        LOGGER.debug("regression lines are only drawn in svg output, ignoring for %s", output.value)
    return RENDERERS[output](plot)


__all__ = [
    "RENDERERS",
    "render_ascii",
    "render_braille",
    "render_plot",
    "render_svg",
]
