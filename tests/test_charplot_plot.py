from __future__ import annotations

import dataclasses
import math
import unittest

import numpy as np

from charplot.adapters import read_frames
from charplot.config import OutputType, PlotConfig, PlotMode, parse_dimensions
from charplot.counts import count_glyph, count_points
from charplot.errors import DomainError
from charplot.palette import ColorScheme, SvgTheme, colorize
from charplot.plot import Plot
from charplot.regression import RegressionLine, linear_regression
from charplot.scales import Bounds, Transform
from charplot.series import EMPTY_VALUE, MAX_COLUMNS, DataSet, Point


def _plot(lines: list[str], **overrides) -> Plot:
    cfg = PlotConfig(**overrides)
    return Plot.build(next(read_frames(lines, cfg)), cfg)


class DataSetTests(unittest.TestCase):
    def test_point_equality_treats_nan_as_wildcard(self) -> None:
        self.assertEqual(Point(1.0, 2.0), Point(1.0, 2.0))
        self.assertNotEqual(Point(1.0, 2.0), Point(1.0, 3.0))
        self.assertEqual(Point(math.nan, 2.0), Point(5.0, 2.0))
        self.assertTrue(EMPTY_VALUE.is_empty())
        self.assertFalse(Point(0.0, 0.0).is_empty())

    def test_add_pair_grows_and_pads(self) -> None:
        ds = DataSet()
        ds.add_pair(2, 1, Point(4.0, 5.0))
        self.assertEqual((ds.columns, ds.rows), (2, 3))
        self.assertTrue(ds.point(0, 0).is_empty())
        self.assertTrue(ds.point(1, 1).is_empty())
        self.assertEqual(ds.point(1, 2), Point(4.0, 5.0))

        ds.add_pair(0, 0, Point(1.0, 1.0))
        self.assertEqual((ds.columns, ds.rows), (2, 3))
        self.assertEqual(ds.non_empty_count(), 2)

    def test_add_pair_rejects_bad_indexes(self) -> None:
        ds = DataSet()
        with self.assertRaises(IndexError):
            ds.add_pair(-1, 0, Point(0.0, 0.0))
        with self.assertRaises(IndexError):
            ds.add_pair(0, MAX_COLUMNS, Point(0.0, 0.0))

    def test_series_mask_marks_empty_samples(self) -> None:
        ds = DataSet()
        ds.add_pair(0, 0, Point(0.0, 1.0))
        ds.add_pair(2, 0, Point(2.0, 3.0))
        s = ds.series(0)
        self.assertEqual(s.mask.tolist(), [True, False, True])
        self.assertEqual(len(ds.points(0)), 3)


class CountTests(unittest.TestCase):
    def test_counts_sum_to_non_empty_samples(self) -> None:
        plot = _plot(["0 1 5", "0 1", "0 x 5", "2 2 2"], x_column=True, mode=PlotMode.COUNT, width=10, height=6)
        self.assertIsNotNone(plot.counters)
        for col, series in enumerate(plot.series):
            with self.subTest(col=col):
                self.assertEqual(sum(plot.counters[col].values()), int(np.count_nonzero(series.mask)))

    def test_collisions_share_a_cell(self) -> None:
        ds = DataSet()
        for row in range(5):
            ds.add_pair(row, 0, Point(1.0, 1.0))
        ds.add_pair(5, 0, Point(3.0, 3.0))
        counts = count_points(ds.series(0), Bounds(0.0, 3.0, 0.0, 3.0), 20, 10)
        self.assertEqual(sorted(counts.values()), [1, 5])

    def test_empty_series_has_no_counts(self) -> None:
        ds = DataSet()
        ds.add_pair(0, 0, EMPTY_VALUE)
        self.assertEqual(count_points(ds.series(0), Bounds(0.0, 1.0, 0.0, 1.0), 10, 10), {})

    def test_count_glyph(self) -> None:
        self.assertEqual(count_glyph(1), "1")
        self.assertEqual(count_glyph(9), "9")
        self.assertEqual(count_glyph(10), "a")
        self.assertEqual(count_glyph(35), "z")
        self.assertEqual(count_glyph(36), "#")
        self.assertEqual(count_glyph(400), "#")


class RegressionTests(unittest.TestCase):
    def test_empty_input(self) -> None:
        self.assertIsNone(linear_regression([]))
        self.assertIsNone(linear_regression([EMPTY_VALUE, EMPTY_VALUE]))

    def test_simple_line(self) -> None:
        points = [Point(float(x), 10.0 + 5.0 * x) for x in range(5)]
        line = linear_regression(points)
        self.assertEqual(line, RegressionLine(slope=5.0, intercept=10.0))

    def test_off_axis(self) -> None:
        points = [
            Point(1000.0, 1000.0),
            Point(1010.0, 1010.0),
            Point(1020.0, 1020.0),
            Point(1030.0, 1035.0),
            Point(1040.0, 1080.0),
        ]
        line = linear_regression(points)
        self.assertAlmostEqual(line.slope, 1.85, places=9)
        self.assertAlmostEqual(line.intercept, -858.0, places=6)

    def test_mixed_quadrants(self) -> None:
        points = [Point(-3.0, -2.0), Point(-2.0, -1.0), Point(0.0, 1.0), Point(3.0, 3.0), Point(9.0, 9.0)]
        line = linear_regression(points)
        self.assertAlmostEqual(line.slope, 0.901, delta=0.001)
        self.assertAlmostEqual(line.intercept, 0.738197, delta=0.001)

    def test_log_x(self) -> None:
        points = [Point(math.exp(i), i + 50.0) for i in range(5)]
        line = linear_regression(points, Transform.LOG_X)
        self.assertAlmostEqual(line.slope, 1.0, delta=0.001)
        self.assertAlmostEqual(line.intercept, 50.0, delta=0.001)

    def test_log_y(self) -> None:
        points = [Point(float(i), math.exp(i)) for i in range(5)]
        line = linear_regression(points, Transform.LOG_Y)
        self.assertAlmostEqual(line.slope, 1.0, delta=0.001)
        self.assertAlmostEqual(line.intercept, 0.0, delta=0.001)

    def test_log_y_with_offset(self) -> None:
        points = [Point(float(i), math.exp(i) + 10.0) for i in range(5)]
        line = linear_regression(points, Transform.LOG_Y)
        self.assertAlmostEqual(line.slope, 0.440159, delta=0.001)
        self.assertAlmostEqual(line.intercept, 2.19348, delta=0.001)

    def test_empty_samples_are_ignored(self) -> None:
        points = [Point(float(x), 10.0 + 5.0 * x) for x in range(5)]
        self.assertEqual(linear_regression(points + [EMPTY_VALUE]), linear_regression(points))

    def test_vertical_data_has_no_fit(self) -> None:
        self.assertIsNone(linear_regression([Point(2.0, 1.0), Point(2.0, 5.0)]))

    def test_endpoints_span_x_bounds(self) -> None:
        p0, p1 = RegressionLine(slope=2.0, intercept=1.0).endpoints(Bounds(0.0, 10.0, 0.0, 30.0))
        self.assertEqual(p0, Point(0.0, 1.0))
        self.assertEqual(p1, Point(10.0, 21.0))


class ConfigTests(unittest.TestCase):
    def test_parse_dimensions(self) -> None:
        self.assertEqual(parse_dimensions("120x30"), (120, 30))
        self.assertEqual(parse_dimensions(" 640X480 "), (640, 480))
        for bad in ("120", "ax30", "120xb", ""):
            with self.subTest(text=bad):
                with self.assertRaises(ValueError):
                    parse_dimensions(bad)

    def test_too_small_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            PlotConfig(width=2, height=40)
        with self.assertRaises(ValueError):
            PlotConfig(width=80, height=1)

    def test_braille_grid_is_finer(self) -> None:
        self.assertEqual(PlotConfig(width=80, height=40, output=OutputType.BRAILLE).grid_size(), (160, 160))
        self.assertEqual(PlotConfig(width=80, height=40).grid_size(), (80, 40))

    def test_color_scheme_parse(self) -> None:
        self.assertIs(ColorScheme.parse("Mono-Dark"), ColorScheme.MONO_DARK)
        with self.assertRaises(ValueError):
            ColorScheme.parse("rainbow")

    def test_series_colors_cycle(self) -> None:
        scheme = ColorScheme.BANK_WONG
        n = len(scheme.palette.series)
        self.assertEqual(scheme.series_color(n + 1), scheme.series_color(1))
        self.assertEqual(ColorScheme.MONO_LIGHT.series_color(5), (255, 255, 255))

    def test_colorize(self) -> None:
        self.assertEqual(colorize("#", (1, 2, 3)), "\x1b[38;2;1;2;3m#\x1b[0m")

    def test_svg_theme_falls_back_to_last_color(self) -> None:
        theme = SvgTheme(colors=("red", "blue"))
        self.assertEqual(theme.series_color(0), "red")
        self.assertEqual(theme.series_color(9), "blue")
        with self.assertRaises(ValueError):
            SvgTheme(colors=())


class PlotBuildTests(unittest.TestCase):
    def test_build_computes_bounds_and_axes(self) -> None:
        plot = _plot(["0", "1", "2"], width=10, height=6)
        self.assertEqual(plot.bounds, Bounds(0.0, 2.0, 0.0, 2.0))
        self.assertEqual((plot.width, plot.height), (10, 6))
        self.assertEqual((plot.axes.column, plot.axes.row), (0, 5))
        self.assertIsNone(plot.counters)
        self.assertIsNone(plot.regressions)

    def test_plot_is_frozen(self) -> None:
        plot = _plot(["0", "1", "2"], width=10, height=6)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            plot.width = 20  # type: ignore[misc]

    def test_cells_mark_empty_samples(self) -> None:
        plot = _plot(["0", "1", "x", "2"], width=10, height=6)
        cols, rows, mask = plot.cells(0)
        self.assertEqual(mask.tolist(), [True, True, False, True])
        self.assertEqual((int(cols[2]), int(rows[2])), (-1, -1))
        self.assertTrue(np.all(cols[mask] >= 0))

    def test_braille_plot_uses_dot_grid(self) -> None:
        plot = _plot(["0", "1", "2"], width=5, height=3, output=OutputType.BRAILLE)
        self.assertEqual((plot.width, plot.height), (10, 12))

    def test_regressions_only_when_requested(self) -> None:
        plot = _plot(["10", "15", "20", "25"], regression=True)
        line = plot.regression(0)
        self.assertIsNotNone(line)
        self.assertAlmostEqual(line.slope, 5.0)
        self.assertAlmostEqual(line.intercept, 10.0)

    def test_count_mode_builds_counters(self) -> None:
        plot = _plot(["0 1", "0 1", "0 1", "2 2"], x_column=True, mode=PlotMode.COUNT, width=10, height=6)
        self.assertEqual(plot.count_at(0, (0, 3)), 3)
        self.assertEqual(plot.count_at(0, (8, 1)), 1)
        self.assertEqual(plot.count_at(0, (5, 5)), 0)

    def test_domain_error_propagates(self) -> None:
        with self.assertRaises(DomainError):
            _plot(["1", "0"], log_y=True)


if __name__ == "__main__":
    unittest.main()
