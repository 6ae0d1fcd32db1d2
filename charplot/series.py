from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np


MAX_COLUMNS = 255


@dataclass(frozen=True, eq=False)
class Point:
    x: float
    y: float

    def is_empty(self) -> bool:
        return math.isnan(self.x) or math.isnan(self.y)

    def __eq__(self, other: object) -> bool:
        # NaN matches anything so sentinel comparisons work.
        if not isinstance(other, Point):
            return NotImplemented
        return _wild_eq(self.x, other.x) and _wild_eq(self.y, other.y)

    __hash__ = None  # type: ignore[assignment]


def _wild_eq(a: float, b: float) -> bool:
    return math.isnan(a) or math.isnan(b) or a == b


EMPTY_VALUE = Point(math.nan, math.nan)


@dataclass(frozen=True)
class SeriesData:
    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray

    def points(self) -> list[Point]:
        return [Point(float(x), float(y)) for x, y in zip(self.x.tolist(), self.y.tolist(), strict=False)]


class DataSet:
    """Columnar sample table addressed as ``[column][row]``.

    Columns and rows only grow; every cell that was never written holds
    ``EMPTY_VALUE``.
    """

    def __init__(self) -> None:
        self._x: list[list[float]] = []
        self._y: list[list[float]] = []
        self._rows = 0

    @property
    def columns(self) -> int:
        return len(self._x)

    @property
    def rows(self) -> int:
        return self._rows

    def add_pair(self, row: int, col: int, point: Point) -> None:
        if row < 0 or col < 0:
            raise IndexError("row and col must be >= 0")
        if col >= MAX_COLUMNS:
            raise IndexError(f"col must be < {MAX_COLUMNS}")
        while col >= self.columns:
            self._x.append([math.nan] * self._rows)
            self._y.append([math.nan] * self._rows)
        if row >= self._rows:
            pad = row + 1 - self._rows
            for xs, ys in zip(self._x, self._y, strict=False):
                xs.extend([math.nan] * pad)
                ys.extend([math.nan] * pad)
            self._rows = row + 1
        self._x[col][row] = float(point.x)
        self._y[col][row] = float(point.y)

    def point(self, col: int, row: int) -> Point:
        return Point(self._x[col][row], self._y[col][row])

    def points(self, col: int) -> list[Point]:
        return [Point(x, y) for x, y in zip(self._x[col], self._y[col], strict=False)]

    def series(self, col: int) -> SeriesData:
        x = np.asarray(self._x[col], dtype=np.float64)
        y = np.asarray(self._y[col], dtype=np.float64)
        mask = ~(np.isnan(x) | np.isnan(y))
        return SeriesData(x=x, y=y, mask=mask)

    def iter_series(self):
        for col in range(self.columns):
            yield col, self.series(col)

    def non_empty_count(self) -> int:
        return sum(int(np.count_nonzero(s.mask)) for _, s in self.iter_series())

    def __repr__(self) -> str:
        return f"DataSet(columns={self.columns}, rows={self.rows})"
