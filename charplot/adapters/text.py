from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum
import logging
import math
import re

from charplot.config import PlotConfig
from charplot.series import EMPTY_VALUE, MAX_COLUMNS, DataSet, Point


LOGGER = logging.getLogger(__name__)

COMMENT_MARKERS = ("#", "//")

_NUMBER = re.compile(r"[0-9+\-.eE]+")
_FIELD_SPLIT = re.compile(r"\s*,\s*|\s+")


class LineResult(Enum):
    OK = "ok"
    EMPTY = "empty"
    COMMENT = "comment"


def strip_comment(line: str) -> str:
    cut = len(line)
    for marker in COMMENT_MARKERS:
        idx = line.find(marker)
        if idx != -1:
            cut = min(cut, idx)
    return line[:cut]


def parse_value(token: str) -> float:
    """Decode one field; anything that is not a finite number becomes NaN."""
    if not _NUMBER.fullmatch(token):
        return math.nan
    try:
        value = float(token)
    except ValueError:
        return math.nan
    if not math.isfinite(value):
        return math.nan
    return value


def parse_line(line: str, row: int, dataset: DataSet, config: PlotConfig) -> LineResult:
    stripped = line.strip()
    if not stripped:
        return LineResult.EMPTY
    body = strip_comment(stripped).strip()
    if not body:
        return LineResult.COMMENT

    tokens = _FIELD_SPLIT.split(body)
    x = float(row)
    if config.x_column:
        x = _decode(tokens[0], row)
        tokens = tokens[1:]

    col = 0
    for token in tokens:
        if col >= MAX_COLUMNS:
            LOGGER.debug("row %d: ignoring fields beyond column %d", row, MAX_COLUMNS)
            break
        y = _decode(token, row)
        point = Point(y, x) if config.flip_xy else Point(x, y)
        dataset.add_pair(row, col, point)
        col += 1

    while col < dataset.columns:
        dataset.add_pair(row, col, EMPTY_VALUE)
        col += 1
    return LineResult.OK


def _decode(token: str, row: int) -> float:
    value = parse_value(token)
    if math.isnan(value):
        LOGGER.debug("row %d: treating %r as an empty sample", row, token)
    return value


def read_frames(lines: Iterable[str], config: PlotConfig) -> Iterator[DataSet]:
    """Group input lines into one DataSet per frame.

    Without streaming a blank line ends the input. With streaming every
    blank-line separated block is its own frame; blocks without data rows are
    dropped.
    """
    dataset = DataSet()
    row = 0
    for line in lines:
        result = parse_line(line, row, dataset, config)
        if result is LineResult.OK:
            row += 1
            continue
        if result is LineResult.COMMENT:
            continue
        if not config.stream:
            break
        if dataset.rows:
            yield dataset
        dataset = DataSet()
        row = 0
    if dataset.rows:
        yield dataset
