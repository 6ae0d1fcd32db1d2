from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math

import numpy as np

from charplot.errors import DegenerateRangeError, DomainError, EmptyDatasetError
from charplot.series import DataSet, Point


CROSS_PAD = 2.0
PAD = 2
_EPS = float(np.finfo(np.float64).eps)


class Transform(Enum):
    NONE = "none"
    LOG_X = "log-x"
    LOG_Y = "log-y"
    LOG_XY = "log-xy"

    @classmethod
    def from_flags(cls, log_x: bool, log_y: bool) -> "Transform":
        if log_x and log_y:
            return cls.LOG_XY
        if log_x:
            return cls.LOG_X
        if log_y:
            return cls.LOG_Y
        return cls.NONE

    @property
    def log_x(self) -> bool:
        return self in (Transform.LOG_X, Transform.LOG_XY)

    @property
    def log_y(self) -> bool:
        return self in (Transform.LOG_Y, Transform.LOG_XY)


def apply_transform(x: np.ndarray, y: np.ndarray, transform: Transform) -> tuple[np.ndarray, np.ndarray]:
    """Map raw coordinates into the transformed plotting space.

    Non-positive values on a log axis are passed through untouched so a stray
    sample cannot turn the whole frame into NaNs.
    """
    tx = np.asarray(x, dtype=np.float64)
    ty = np.asarray(y, dtype=np.float64)
    if transform.log_x:
        tx = _safe_log(tx)
    if transform.log_y:
        ty = _safe_log(ty)
    return tx, ty


def transform_point(point: Point, transform: Transform) -> Point:
    x, y = point.x, point.y
    if transform.log_x and x > 0:
        x = math.log(x)
    if transform.log_y and y > 0:
        y = math.log(y)
    return Point(x, y)


def _safe_log(values: np.ndarray) -> np.ndarray:
    out = values.copy()
    np.log(values, out=out, where=values > 0)
    return out


@dataclass(frozen=True)
class Bounds:
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def x_range(self) -> float:
        return self.x_max - self.x_min

    @property
    def y_range(self) -> float:
        return self.y_max - self.y_min


def compute_bounds(dataset: DataSet, transform: Transform = Transform.NONE) -> Bounds:
    """Derive the visible data rectangle for one frame.

    Raises ``DomainError`` for non-positive values on a log axis,
    ``EmptyDatasetError`` when no sample is present and
    ``DegenerateRangeError`` when an axis has no finite, non-zero extent.
    """
    x_min = y_min = math.inf
    x_max = y_max = -math.inf

    for _, series in dataset.iter_series():
        if not np.any(series.mask):
            continue
        vx = series.x[series.mask]
        vy = series.y[series.mask]
        if transform.log_x and np.any(vx <= 0.0):
            raise DomainError("log scale requires positive values (x)")
        if transform.log_y and np.any(vy <= 0.0):
            raise DomainError("log scale requires positive values (y)")
        # Same log as map_to_cells so extrema land exactly on the bounds.
        vx, vy = apply_transform(vx, vy, transform)
        x_min = min(x_min, float(np.min(vx)))
        x_max = max(x_max, float(np.max(vx)))
        y_min = min(y_min, float(np.min(vy)))
        y_max = max(y_max, float(np.max(vy)))

    if x_min == math.inf or y_min == math.inf:
        raise EmptyDatasetError("frame contains no samples")

    if x_min == x_max:
        x_max += 1.0
    if y_min == y_max:
        y_max += 1.0

    x_min, x_max = _clamp_to_zero(x_min, x_max)
    y_min, y_max = _clamp_to_zero(y_min, y_max)

    bounds = Bounds(x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max)
    ranges = (bounds.x_range, bounds.y_range)
    if not all(r > 0.0 and math.isfinite(r) for r in ranges):
        raise DegenerateRangeError(f"insufficient range: x={bounds.x_range!r} y={bounds.y_range!r}")
    return bounds


def _clamp_to_zero(vmin: float, vmax: float) -> tuple[float, float]:
    # Snap the bound nearest the origin to zero when the data sits close to it.
    if vmin <= 0.0 <= vmax:
        return vmin, vmax
    span = vmax - vmin
    if 0.0 < vmin and vmin - span * CROSS_PAD < 0.0:
        return 0.0, vmax
    if vmax < 0.0 and vmax + span * CROSS_PAD > 0.0:
        return vmin, 0.0
    return vmin, vmax


@dataclass(frozen=True)
class ScaledPoint:
    col: int
    row: int

    @classmethod
    def from_point(
        cls,
        point: Point,
        bounds: Bounds,
        width: int,
        height: int,
        transform: Transform = Transform.NONE,
    ) -> "ScaledPoint":
        cols, rows = map_to_cells(
            np.asarray([point.x], dtype=np.float64),
            np.asarray([point.y], dtype=np.float64),
            bounds,
            width,
            height,
            transform,
        )
        return cls(col=int(cols[0]), row=int(rows[0]))


def map_to_cells(
    x: np.ndarray,
    y: np.ndarray,
    bounds: Bounds,
    width: int,
    height: int,
    transform: Transform = Transform.NONE,
) -> tuple[np.ndarray, np.ndarray]:
    """Scale samples into integer ``(col, row)`` drawing cells.

    Row 0 is the top of the grid. Points on a bound land inside the first or
    last cell thanks to the half-cell offset.
    """
    tx, ty = apply_transform(x, y, transform)
    assert np.all((tx >= bounds.x_min - _EPS) & (tx <= bounds.x_max + _EPS)), "x outside plot bounds"

    cell_w = bounds.x_range / width
    cell_h = bounds.y_range / height

    cols = ((width - PAD) * ((tx - bounds.x_min + cell_w / 2.0) / bounds.x_range)).astype(np.int64)
    rows = ((height - PAD) * ((ty - bounds.y_min + cell_h / 2.0) / bounds.y_range)).astype(np.int64)
    rows = (height - 1) - rows
    return cols, rows


@dataclass(frozen=True)
class AxisPlacement:
    draw_x_axis: bool
    draw_y_axis: bool
    # grid column of the vertical (y) axis and grid row of the horizontal (x) axis
    column: int
    row: int


def place_axes(bounds: Bounds, width: int, height: int) -> AxisPlacement:
    draw_y_axis = bounds.x_min <= 0.0 <= bounds.x_max
    draw_x_axis = bounds.y_min <= 0.0 <= bounds.y_max

    origin_x = 0.0 if draw_y_axis else _nearest_to_zero(bounds.x_min, bounds.x_max)
    origin_y = 0.0 if draw_x_axis else _nearest_to_zero(bounds.y_min, bounds.y_max)

    # Bounds already live in transformed space.
    sp = ScaledPoint.from_point(Point(origin_x, origin_y), bounds, width, height, Transform.NONE)
    return AxisPlacement(draw_x_axis=draw_x_axis, draw_y_axis=draw_y_axis, column=sp.col, row=sp.row)


def _nearest_to_zero(vmin: float, vmax: float) -> float:
    return vmin if 0.0 < vmin else vmax


def scale_tick(size: int, value_range: float) -> float:
    """Pixel spacing between axis ticks for an axis ``size`` pixels long."""
    rung = 10.0 ** math.ceil(math.log10(value_range))
    div = 20.0 if value_range < rung / 2.0 else 10.0
    step = rung / div
    return size * (step / value_range)
