from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from charplot.scales import Bounds, Transform, apply_transform
from charplot.series import Point


@dataclass(frozen=True)
class RegressionLine:
    slope: float
    intercept: float

    def at(self, x: float) -> float:
        return self.intercept + self.slope * x

    def endpoints(self, bounds: Bounds) -> tuple[Point, Point]:
        """Line endpoints at the plot's x extent, in transformed space."""
        return (
            Point(bounds.x_min, self.at(bounds.x_min)),
            Point(bounds.x_max, self.at(bounds.x_max)),
        )


def linear_regression(points: Sequence[Point], transform: Transform = Transform.NONE) -> RegressionLine | None:
    """Ordinary least squares fit over the non-empty points.

    Returns ``None`` when there is nothing to fit: no non-empty points, or every
    point shares one x value.
    """
    usable = [p for p in points if not p.is_empty()]
    if not usable:
        return None
    x, y = apply_transform(
        np.asarray([p.x for p in usable], dtype=np.float64),
        np.asarray([p.y for p in usable], dtype=np.float64),
        transform,
    )
    mx = float(np.mean(x))
    my = float(np.mean(y))
    dx = x - mx
    denominator = float(np.sum(dx * dx))
    if denominator == 0.0:
        return None
    numerator = float(np.sum(dx * (y - my)))
    slope = numerator / denominator
    return RegressionLine(slope=slope, intercept=my - slope * mx)
