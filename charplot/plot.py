from __future__ import annotations

from dataclasses import dataclass
import logging

import numpy as np

from charplot.config import PlotConfig
from charplot.counts import CellCounts, count_points
from charplot.regression import RegressionLine, linear_regression
from charplot.scales import AxisPlacement, Bounds, Transform, compute_bounds, map_to_cells, place_axes
from charplot.series import DataSet, SeriesData


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Plot:
    """Everything a renderer needs for one frame, computed once.

    Build it with ``Plot.build``; the value is never mutated afterwards.
    """

    config: PlotConfig
    series: tuple[SeriesData, ...]
    bounds: Bounds
    width: int
    height: int
    axes: AxisPlacement
    counters: tuple[CellCounts, ...] | None = None
    regressions: tuple[RegressionLine | None, ...] | None = None

    @classmethod
    def build(cls, dataset: DataSet, config: PlotConfig) -> "Plot":
        transform = config.transform
        bounds = compute_bounds(dataset, transform)
        width, height = config.grid_size()
        series = tuple(s for _, s in dataset.iter_series())

        counters = None
        if config.count_mode:
            counters = tuple(count_points(s, bounds, width, height, transform) for s in series)

        regressions = None
        if config.regression:
            regressions = tuple(linear_regression(s.points(), transform) for s in series)

        LOGGER.debug(
            "plot built: series=%d rows=%d samples=%d bounds=%s grid=%dx%d",
            len(series),
            dataset.rows,
            dataset.non_empty_count(),
            bounds,
            width,
            height,
        )
        return cls(
            config=config,
            series=series,
            bounds=bounds,
            width=width,
            height=height,
            axes=place_axes(bounds, width, height),
            counters=counters,
            regressions=regressions,
        )

    @property
    def transform(self) -> Transform:
        return self.config.transform

    @property
    def columns(self) -> int:
        return len(self.series)

    def cells(self, col: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Drawing cells of one series as ``(cols, rows, mask)``.

        Entries where ``mask`` is false are empty samples and hold -1.
        """
        data = self.series[col]
        cols = np.full(data.x.shape, -1, dtype=np.int64)
        rows = np.full(data.x.shape, -1, dtype=np.int64)
        if np.any(data.mask):
            c, r = map_to_cells(data.x[data.mask], data.y[data.mask], self.bounds, self.width, self.height, self.transform)
            cols[data.mask] = c
            rows[data.mask] = r
        return cols, rows, data.mask

    def count_at(self, col: int, cell: tuple[int, int]) -> int:
        if self.counters is None:
            return 0
        return self.counters[col].get(cell, 0)

    def regression(self, col: int) -> RegressionLine | None:
        if self.regressions is None:
            return None
        return self.regressions[col]
