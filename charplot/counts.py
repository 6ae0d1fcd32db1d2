from __future__ import annotations

from collections import Counter

import numpy as np

from charplot.scales import Bounds, Transform, map_to_cells
from charplot.series import SeriesData


CellCounts = dict[tuple[int, int], int]

_LETTER_LIMIT = 36


def count_points(
    series: SeriesData,
    bounds: Bounds,
    width: int,
    height: int,
    transform: Transform = Transform.NONE,
) -> CellCounts:
    """Histogram of a series' samples over drawing cells."""
    if not np.any(series.mask):
        return {}
    cols, rows = map_to_cells(series.x[series.mask], series.y[series.mask], bounds, width, height, transform)
    return dict(Counter(zip(cols.tolist(), rows.tolist(), strict=False)))


def count_glyph(count: int) -> str:
    if count < 10:
        return chr(ord("0") + count)
    if count < _LETTER_LIMIT:
        return chr(ord("a") + count - 10)
    return "#"
