# graphs/ScatterPlot.py

from typing import Any, Optional, Tuple
import numpy as np
import pyqtgraph as pg
from VehicleViz.BasePlot import GraphBase
from VehicleViz.Marks import NEGATIVE_COLOR, POSITIVE_COLOR, scatter_marks
from VehicleViz.Scales import extent

class ScatterPlot(GraphBase):
    def __init__(
        self,
        data_source: Any,
        *,
        x_field: str = "year",
        y_field: str = "profit",
        color_field: Optional[str] = None,
        marker_radius: float = 2,
        positive_color: str = POSITIVE_COLOR,
        negative_color: str = NEGATIVE_COLOR,
        name: Optional[str] = None,
        opacity: float = 1.0,
        z: int = 10,
    ) -> None:
        self.x_field = x_field
        self.y_field = y_field
        self.color_field = color_field if color_field is not None else y_field
        self._marker_radius = marker_radius
        self.positive_color = positive_color
        self.negative_color = negative_color
        self.name = name

        self._plot_item = None
        self._view_box = None
        self._scatter = None
        self._opacity = opacity
        self._z = z

        self._connect_source(data_source)

    def add_to(self, plot_item: Any, view_box: Any) -> None:
        self._plot_item = plot_item
        self._view_box = view_box
        self._scatter = pg.ScatterPlotItem(pen=None, size=self.marker_size())
        self._plot_item.addItem(self._scatter)
        self._scatter.setOpacity(self._opacity)
        self._scatter.setZValue(self._z)
        self._update_plot()

    def remove_from(self, plot_item: Any) -> None:
        if self._scatter is not None and self._scatter.scene() is not None:
            plot_item.removeItem(self._scatter)
        self._scatter = None
        self._plot_item = None
        self._view_box = None

    def set_opacity(self, alpha: float) -> None:
        self._opacity = alpha
        if self._scatter is not None:
            self._scatter.setOpacity(self._opacity)

    def set_z(self, z: int) -> None:
        self._z = z
        if self._scatter is not None:
            self._scatter.setZValue(self._z)

    def marker_size(self) -> float:
        # pyqtgraph sizes are diameters
        return 2 * self._marker_radius

    def _fields_available(self) -> bool:
        ds = self.data_source
        return all(ds.has_column(f) for f in (self.x_field, self.y_field, self.color_field))

    def marks(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        if self.data_source.size() == 0 or not self._fields_available():
            empty = np.empty(0, dtype=float)
            return empty, empty, np.empty(0, dtype=bool)
        ds = self.data_source
        return scatter_marks(ds.column(self.x_field), ds.column(self.y_field), ds.column(self.color_field))

    def bounds(self) -> Optional[Tuple[float, float, float, float]]:
        x, y, _ = self.marks()
        ex, ey = extent(x), extent(y)
        if ex is None or ey is None:
            return None
        return (ex[0], ex[1], ey[0], ey[1])

    def _update_plot(self) -> None:
        """
        Redraw every point from the current data source.
        Points keep data order; each one is filled with the positive or
        negative colour depending on its colour field.
        """
        if self._plot_item is None or self._scatter is None:
            return

        x, y, positive = self.marks()
        pos_brush = pg.mkBrush(self.positive_color)
        neg_brush = pg.mkBrush(self.negative_color)
        brushes = [pos_brush if p else neg_brush for p in positive]

        self._scatter.setData(
            x=x,
            y=y,
            brush=brushes,
            size=self.marker_size(),
            pen=None,
        )

    def point_count(self) -> int:
        if self._scatter is None:
            return 0
        return len(self._scatter.data)

    def clone(self) -> "ScatterPlot":
        dup = ScatterPlot(
            self.data_source,
            x_field=self.x_field,
            y_field=self.y_field,
            color_field=self.color_field,
            marker_radius=self._marker_radius,
            positive_color=self.positive_color,
            negative_color=self.negative_color,
            name=self.name,
            opacity=self._opacity,
            z=self._z,
        )
        return dup
