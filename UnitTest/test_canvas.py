import contextlib
import io
import os
import sys
import tempfile
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import numpy as np

try:
    from PyQt5.QtWidgets import QAction, QApplication
    from PyQt5.QtTest import QTest
    import pyqtgraph as pg
    HAS_QT = True
except Exception:
    HAS_QT = False

if HAS_QT:
    from VehicleViz.App import build_windows
    from VehicleViz.DataSource import DataSource
    from VehicleViz.canvas.Canvas import Canvas, Margin
    from VehicleViz.canvas.VehicleCanvases import (
        PARALLEL_MARGIN,
        SCATTER_MARGIN,
        SCATTER_TITLE,
        ParallelCoordinatesCanvas,
        ProfitScatterCanvas,
    )
    from VehicleViz.graphs.ParallelCoordinatesPlot import ParallelCoordinatesPlot
    from VehicleViz.graphs.ScatterPlot import ScatterPlot
    from VehicleViz.widgets.AxisItem import TickAxisItem
    from VehicleViz.widgets.GraphWidget import TOOLBAR_HEIGHT

SAMPLE_CSV = os.path.join(THIS_DIR, "data", "car_prices_sample.csv")
MISSING_CSV = os.path.join(THIS_DIR, "data", "does_not_exist.csv")


@unittest.skipUnless(HAS_QT, "Qt / pyqtgraph not available")
class QtTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        # Only one QApplication per process
        cls._app = QApplication.instance() or QApplication([])

    def setUp(self):
        self._windows = []

    def tearDown(self):
        for w in self._windows:
            w.close()

    def track(self, widget):
        self._windows.append(widget)
        return widget


class TestProfitScatterCanvas(QtTestCase):
    def test_loads_and_draws_points(self):
        canvas = self.track(ProfitScatterCanvas(SAMPLE_CSV))
        self.assertIsNone(canvas.load_error)
        self.assertEqual(canvas.data_source.size(), 4)
        self.assertEqual(canvas.scatter.point_count(), 4)

    def test_point_colours_follow_profit(self):
        canvas = self.track(ProfitScatterCanvas(SAMPLE_CSV))
        brushes = [spot.brush().color().name() for spot in canvas.scatter._scatter.points()]
        green = pg.mkColor("green").name()
        red = pg.mkColor("red").name()
        # profits: 1000, -1900, -500, 0
        self.assertEqual(brushes, [green, red, red, red])

    def test_marker_size_is_twice_radius(self):
        canvas = self.track(ProfitScatterCanvas(SAMPLE_CSV))
        self.assertEqual(canvas.scatter.marker_size(), 4)

    def test_view_matches_data_extent(self):
        canvas = self.track(ProfitScatterCanvas(SAMPLE_CSV))
        self.assertEqual(canvas.data_bounds(), (2012.0, 2015.0, -1900.0, 1000.0))
        (x0, x1), (y0, y1) = canvas.view_box.viewRange()
        self.assertAlmostEqual(x0, 2012.0)
        self.assertAlmostEqual(x1, 2015.0)
        self.assertAlmostEqual(y0, -1900.0)
        self.assertAlmostEqual(y1, 1000.0)

    def test_labels_title_and_margin(self):
        canvas = self.track(ProfitScatterCanvas(SAMPLE_CSV))
        self.assertEqual(canvas.axis_label("x"), "Year")
        self.assertEqual(canvas.axis_label("y"), "Profit (Selling Price - MMR)")
        self.assertEqual(canvas.title(), SCATTER_TITLE)
        self.assertEqual(canvas.margin, SCATTER_MARGIN)

    def test_year_axis_uses_integer_ticks(self):
        canvas = self.track(ProfitScatterCanvas(SAMPLE_CSV))
        axis = canvas.plot_item.getAxis("bottom")
        self.assertIsInstance(axis, TickAxisItem)
        levels = axis.tickValues(2012.0, 2015.0, 600)
        self.assertEqual(levels[0][1][0], 2012.0)
        self.assertEqual(axis.tickStrings([2012.0, 2013.0], 1.0, levels[0][0]), ["2012", "2013"])

    def test_missing_file_leaves_chart_empty(self):
        canvas = self.track(ProfitScatterCanvas(MISSING_CSV))
        self.assertIsNotNone(canvas.load_error)
        self.assertEqual(canvas.data_source.size(), 0)
        self.assertEqual(canvas.scatter.point_count(), 0)
        self.assertIsNone(canvas.data_bounds())

    def test_load_error_is_reported(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            self.track(ProfitScatterCanvas(MISSING_CSV))
        self.assertIn("[ProfitScatterCanvas] Error loading CSV file: no such file", out.getvalue())

    def test_chart_area_excludes_toolbar(self):
        canvas = self.track(ProfitScatterCanvas(SAMPLE_CSV))
        self.assertEqual((canvas.width(), canvas.height()), (800, 400 + TOOLBAR_HEIGHT))

    def test_axis_label_toggle(self):
        canvas = self.track(ProfitScatterCanvas(SAMPLE_CSV))
        action = next(a for a in canvas.findChildren(QAction) if a.text() == "Show Axis Labels")
        bottom = canvas.plot_item.getAxis("bottom")
        self.assertEqual(bottom.labelText, "Year")

        action.trigger()
        self.assertFalse(action.isChecked())
        self.assertEqual(bottom.labelText, "")
        self.assertEqual(canvas.axis_label("x"), "Year")

        action.trigger()
        self.assertEqual(bottom.labelText, "Year")

    def test_reload_from_another_path(self):
        canvas = self.track(ProfitScatterCanvas(MISSING_CSV))
        self.assertTrue(canvas.load_data(SAMPLE_CSV))
        self.assertEqual(canvas.scatter.point_count(), 4)

    def test_export_svg(self):
        canvas = self.track(ProfitScatterCanvas(SAMPLE_CSV))
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "scatter.svg")
            canvas.export_svg(path)
            with open(path, "r", encoding="utf-8") as f:
                self.assertIn("<svg", f.read())


class TestParallelCoordinatesCanvas(QtTestCase):
    def test_loads_and_draws_polylines(self):
        canvas = self.track(ParallelCoordinatesCanvas(SAMPLE_CSV))
        self.assertEqual(canvas.data_source.size(), 3)
        self.assertEqual(canvas.parallel.polyline_count(), 3)
        # one curve per colour (loss and profit) plus one per axis
        self.assertEqual(len(canvas.parallel._curves), 2 + 3)
        self.assertEqual(canvas.margin, PARALLEL_MARGIN)

    def test_axis_labels(self):
        canvas = self.track(ParallelCoordinatesCanvas(SAMPLE_CSV))
        self.assertEqual(canvas.parallel.axis_labels(), ["Profit", "Condition", "Odometer"])

    def test_built_in_axes_are_hidden(self):
        canvas = self.track(ParallelCoordinatesCanvas(SAMPLE_CSV))
        self.assertFalse(canvas.plot_item.getAxis("left").isVisible())
        self.assertFalse(canvas.plot_item.getAxis("bottom").isVisible())

    def test_empty_data_draws_nothing(self):
        canvas = self.track(ParallelCoordinatesCanvas(MISSING_CSV))
        self.assertEqual(canvas.parallel._curves, [])
        self.assertEqual(canvas.parallel._labels, [])

    def test_line_opacity(self):
        canvas = self.track(ParallelCoordinatesCanvas(SAMPLE_CSV))
        self.assertAlmostEqual(canvas.parallel._curves[0].opacity(), 0.7)


class TestCanvas(QtTestCase):
    def test_plot_rejects_non_layers(self):
        canvas = self.track(Canvas())
        with self.assertRaises(TypeError):
            canvas.plot(object())

    def test_plot_twice_is_a_no_op(self):
        canvas = self.track(Canvas())
        layer = ScatterPlot(DataSource([[2010, 5]], columns=["year", "profit"]))
        canvas.plot(layer)
        canvas.plot(layer)
        self.assertEqual(canvas.layers(), [layer])

    def test_layer_bound_elsewhere_is_cloned(self):
        ds = DataSource([[2010, 5]], columns=["year", "profit"])
        a = self.track(Canvas())
        b = self.track(Canvas())
        layer = a.plot(ScatterPlot(ds))
        other = b.plot(layer)
        self.assertIsNot(layer, other)
        self.assertEqual(other.point_count(), 1)

    def test_unplot(self):
        canvas = self.track(Canvas())
        layer = canvas.plot(ScatterPlot(DataSource([[2010, 5]], columns=["year", "profit"])))
        canvas.unplot(layer)
        self.assertEqual(canvas.layers(), [])
        self.assertIsNone(layer._plot_item)

    def test_data_update_redraws(self):
        ds = DataSource(np.empty((0, 2)), columns=["year", "profit"])
        canvas = self.track(Canvas())
        layer = canvas.plot(ScatterPlot(ds))
        self.assertEqual(layer.point_count(), 0)
        ds.set([[2010, 5], [2011, -3]], columns=["year", "profit"])
        self.assertEqual(layer.point_count(), 2)

    def test_axis_label_validation(self):
        canvas = self.track(Canvas())
        with self.assertRaises(ValueError):
            canvas.set_axis_label("z", "Depth")

    def test_margin(self):
        canvas = self.track(Canvas(margin=Margin(1, 2, 3, 4)))
        self.assertEqual(canvas.margin, Margin(top=1, right=2, bottom=3, left=4))

    def test_set_view_port(self):
        canvas = self.track(Canvas())
        canvas.set_view_port(0, -5, 10, 5)
        (x0, x1), (y0, y1) = canvas.view_box.viewRange()
        self.assertAlmostEqual(x0, 0.0)
        self.assertAlmostEqual(x1, 10.0)
        self.assertAlmostEqual(y0, -5.0)
        self.assertAlmostEqual(y1, 5.0)
        self.assertFalse(any(canvas.view_box.autoRangeEnabled()))


class TestDebouncedResize(QtTestCase):
    def test_resize_is_committed_after_quiet_period(self):
        canvas = self.track(Canvas(resize_debounce_ms=50))
        committed = []
        canvas.on_size_committed = committed.append
        canvas.show()
        QTest.qWait(120)
        committed.clear()

        canvas.resize(640, 480)
        canvas.resize(650, 490)
        canvas.resize(660, 500)
        self.assertEqual(committed, [])
        QTest.qWait(200)
        self.assertEqual(committed, [(660, 500)])
        self.assertEqual(canvas.committed_size, (660, 500))

    def test_flush_resize_commits_immediately(self):
        canvas = self.track(Canvas(resize_debounce_ms=10000))
        canvas.show()
        canvas.resize(500, 300)
        QTest.qWait(50)
        canvas.flush_resize()
        self.assertEqual(canvas.committed_size, (500, 300))

    def test_parallel_tick_length_tracks_view_width(self):
        canvas = self.track(ParallelCoordinatesCanvas(SAMPLE_CSV, resize_debounce_ms=10))
        canvas.show()
        canvas.resize(800, 600)
        QTest.qWait(100)
        wide = canvas.parallel.tick_length()
        canvas.resize(400, 600)
        QTest.qWait(100)
        narrow = canvas.parallel.tick_length()
        self.assertGreater(wide, 0)
        self.assertGreater(narrow, wide)


class TestApp(QtTestCase):
    def test_parallel_window_sits_below_scatter(self):
        scatter, parallel = build_windows(SAMPLE_CSV)
        self.track(scatter)
        self.track(parallel)
        self.assertTrue(scatter.isVisible())
        self.assertTrue(parallel.isVisible())
        above = scatter.frameGeometry()
        self.assertEqual(parallel.x(), above.x())
        # no overlap with the scatter window, title bar included
        self.assertGreaterEqual(parallel.frameGeometry().top(), above.y() + above.height())


if __name__ == "__main__":
    unittest.main(verbosity=2)
