from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
import os
from pathlib import Path
import sys
from typing import TextIO

from charplot.adapters import read_frames
from charplot.config import PlotConfig, OutputType, PlotMode, parse_dimensions
from charplot.errors import DomainError, FrameSkipped
from charplot.palette import ColorScheme
from charplot.plot import Plot
from charplot.render import render_plot


LOGGER = logging.getLogger(__name__)

DEFAULT_TEXT_DIMENSIONS = (80, 40)
DEFAULT_SVG_DIMENSIONS = (640, 480)


def _dimensions(text: str) -> tuple[int, int]:
    try:
        return parse_dimensions(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _color_scheme(text: str) -> ColorScheme:
    try:
        return ColorScheme.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="charplot",
        description="Plot numeric columns from text input as ascii, braille or svg.",
    )
    parser.add_argument("input", nargs="?", type=Path, default=None, help="Input file. Default: stdin.")
    parser.add_argument(
        "-d",
        "--dimensions",
        type=_dimensions,
        default=None,
        help="Plot size as <width>x<height>. Default: 80x40 characters, 640x480 pixels for svg.",
    )
    parser.add_argument("-m", "--mode", choices=[m.value for m in PlotMode], default=PlotMode.DOT.value)
    parser.add_argument("-o", "--output", choices=[o.value for o in OutputType], default=OutputType.ASCII.value)
    parser.add_argument("-A", "--no-axis", dest="axis", action="store_false", help="Do not draw axis lines.")
    parser.add_argument("--log-x", action="store_true")
    parser.add_argument("--log-y", action="store_true")
    parser.add_argument("--flip-xy", action="store_true", help="Swap x and y of every sample.")
    parser.add_argument("--x-column", action="store_true", help="First number of each line is the x value.")
    parser.add_argument(
        "--colors",
        type=_color_scheme,
        default=ColorScheme.BANK_WONG,
        help="Color scheme: " + ", ".join(s.value for s in ColorScheme) + ".",
    )
    parser.add_argument("--color", action="store_true", help="Emit 24-bit ANSI colors in text output.")
    parser.add_argument("--regression", action="store_true", help="Overlay a least-squares trend line (svg).")
    parser.add_argument("--log-count", action="store_true", help="Scale count-mode markers by ln(count).")
    parser.add_argument(
        "-s",
        "--stream",
        action="store_true",
        help="Draw one plot per blank-line separated block instead of stopping at the first blank line.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr.")
    return parser


def config_from_args(args: argparse.Namespace) -> PlotConfig:
    output = OutputType(args.output)
    dims = args.dimensions
    if dims is None:
        dims = DEFAULT_SVG_DIMENSIONS if output is OutputType.SVG else DEFAULT_TEXT_DIMENSIONS
    width, height = dims
    return PlotConfig(
        width=width,
        height=height,
        log_x=args.log_x,
        log_y=args.log_y,
        axis=args.axis,
        mode=PlotMode(args.mode),
        output=output,
        flip_xy=args.flip_xy,
        x_column=args.x_column,
        color_scheme=args.colors,
        color=args.color,
        regression=args.regression,
        log_count=args.log_count,
        stream=args.stream,
    )


def run(source: TextIO, out: TextIO, config: PlotConfig) -> int:
    """Plot every frame read from ``source``; returns the number of frames drawn.

    ``DomainError`` propagates to the caller.
    """
    drawn = 0
    for dataset in read_frames(source, config):
        try:
            plot = Plot.build(dataset, config)
        except FrameSkipped as exc:
            LOGGER.debug("skipping frame: %s", exc)
            continue
        if drawn:
            out.write("\n")
        out.write(render_plot(plot))
        out.flush()
        drawn += 1
    return drawn


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="charplot: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        if args.input is None:
            run(sys.stdin, sys.stdout, config)
        else:
            with args.input.open("r", encoding="utf-8") as source:
                run(source, sys.stdout, config)
    except DomainError as exc:
        LOGGER.error("%s", exc)
        return 1
    except BrokenPipeError:
        # Keep the interpreter from complaining again while flushing at exit.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        LOGGER.error("output closed before the plot was written")
        return 1
    except UnicodeDecodeError as exc:
        LOGGER.error("cannot decode %s: %s", args.input or "stdin", exc.reason)
        return 1
    except OSError as exc:
        LOGGER.error("i/o error on %s: %s", exc.filename or args.input or "stdin", exc.strerror or exc)
        return 1
    return 0
