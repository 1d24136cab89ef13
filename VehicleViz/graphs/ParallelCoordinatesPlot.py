# graphs/ParallelCoordinatesPlot.py

from typing import Any, List, Optional, Sequence, Tuple
import numpy as np
import pyqtgraph as pg
from VehicleViz.BasePlot import GraphBase
from VehicleViz.Marks import (
    NEGATIVE_COLOR,
    POSITIVE_COLOR,
    ParallelLayout,
    dimension_label,
    profit_mask,
)

DEFAULT_DIMENSIONS = ("profit", "condition", "odometer")

class ParallelCoordinatesPlot(GraphBase):
    def __init__(
        self,
        data_source: Any,
        *,
        dimensions: Sequence[str] = DEFAULT_DIMENSIONS,
        color_field: str = "profit",
        positive_color: str = POSITIVE_COLOR,
        negative_color: str = NEGATIVE_COLOR,
        line_width: float = 1.0,
        line_opacity: float = 0.7,
        axis_color: str = "k",
        tick_count: int = 10,
        tick_size: float = 6,
        name: Optional[str] = None,
        opacity: float = 1.0,
        z: int = 10,
    ) -> None:
        self.dimensions = tuple(dimensions)
        if not self.dimensions:
            raise ValueError("ParallelCoordinatesPlot needs at least one dimension")
        self.color_field = color_field
        self.positive_color = positive_color
        self.negative_color = negative_color
        self.line_width = line_width
        self.line_opacity = line_opacity
        self.axis_color = axis_color
        self.tick_count = tick_count
        self.tick_size = tick_size
        self.name = name

        self._plot_item = None
        self._view_box = None
        self._curves = []
        self._labels = []
        self._opacity = opacity
        self._z = z

        self._connect_source(data_source)

    def add_to(self, plot_item: Any, view_box: Any) -> None:
        self._plot_item = plot_item
        self._view_box = view_box
        self._update_plot()

    def remove_from(self, plot_item: Any) -> None:
        self._clear_items(plot_item)
        self._plot_item = None
        self._view_box = None

    def _clear_items(self, plot_item: Any) -> None:
        for it in self._curves + self._labels:
            if it.scene() is not None:
                plot_item.removeItem(it)
        self._curves.clear()
        self._labels.clear()

    def set_opacity(self, alpha: float) -> None:
        self._opacity = alpha
        self._update_plot()

    def set_z(self, z: int) -> None:
        self._z = z
        self._update_plot()

    def bounds(self) -> Optional[Tuple[float, float, float, float]]:
        # Every axis is normalised onto [0, 1] in both directions
        return (0.0, 1.0, 0.0, 1.0)

    def layout(self) -> Optional[ParallelLayout]:
        ds = self.data_source
        if ds.size() == 0:
            return None
        missing = [d for d in self.dimensions + (self.color_field,) if not ds.has_column(d)]
        if missing:
            print(f"[ParallelCoordinatesPlot] Missing columns: {', '.join(missing)}")
            return None
        return ParallelLayout({d: ds.column(d) for d in self.dimensions}, self.dimensions)

    def tick_length(self) -> float:
        """
        Length of a tick_size-pixel tick mark in view (data) units,
        based on the view box's current width.
        """
        if self._view_box is None:
            return 0.0
        width_px = self._view_box.width()
        (x0, x1), _ = self._view_box.viewRange()
        if width_px <= 0 or not np.isfinite(x1 - x0):
            return 0.0
        return self.tick_size * (x1 - x0) / width_px

    def _update_plot(self) -> None:
        """
        Rebuild all graphics items.
        1. Loss polylines, then profit polylines, each as one NaN-separated curve.
        2. One axis per dimension: domain line, tick marks, tick labels
           and a bold capitalised label above it.
        Nothing is drawn while the data source is empty.
        """
        if self._plot_item is None:
            return

        self._clear_items(self._plot_item)

        layout = self.layout()
        if layout is None:
            return

        positive = profit_mask(self.data_source.column(self.color_field))
        for mask, color in ((~positive, self.negative_color), (positive, self.positive_color)):
            pts = layout.path_points(mask)
            if pts.size == 0:
                continue
            curve = pg.PlotCurveItem(
                pts[:, 0], pts[:, 1],
                pen=pg.mkPen(color, width=self.line_width),
                connect="finite",
            )
            curve.setOpacity(self._opacity * self.line_opacity)
            curve.setZValue(self._z)
            self._plot_item.addItem(curve)
            self._curves.append(curve)

        tick_len = self.tick_length()
        for dim in self.dimensions:
            self._draw_axis(layout, dim, tick_len)

    def _draw_axis(self, layout: ParallelLayout, dim: str, tick_len: float) -> None:
        axis_pts = layout.axis_points(dim, self.tick_count, tick_len)
        axis = pg.PlotCurveItem(
            axis_pts[:, 0], axis_pts[:, 1],
            pen=pg.mkPen(self.axis_color, width=1),
            connect="finite",
        )
        axis.setOpacity(self._opacity)
        axis.setZValue(self._z + 1)
        self._plot_item.addItem(axis)
        self._curves.append(axis)

        x = layout.x(dim)
        for _, y, text in layout.axis_ticks(dim, self.tick_count):
            label = pg.TextItem(text, color=self.axis_color, anchor=(1.0, 0.5))
            label.setPos(x - tick_len, y)
            self._add_label(label)

        _, top = layout.y_scales[dim].range
        title = pg.TextItem(
            html=f'<span style="font-weight: bold;">{dimension_label(dim)}</span>',
            anchor=(0.5, 1.0),
        )
        title.setColor(self.axis_color)
        title.setPos(x, top)
        self._add_label(title)

    def _add_label(self, item: Any) -> None:
        item.setOpacity(self._opacity)
        item.setZValue(self._z + 2)
        self._plot_item.addItem(item)
        self._labels.append(item)

    def polyline_count(self) -> int:
        layout = self.layout()
        return 0 if layout is None else layout.n_rows

    def axis_labels(self) -> List[str]:
        return [dimension_label(d) for d in self.dimensions]

    def clone(self) -> "ParallelCoordinatesPlot":
        dup = ParallelCoordinatesPlot(
            self.data_source,
            dimensions=self.dimensions,
            color_field=self.color_field,
            positive_color=self.positive_color,
            negative_color=self.negative_color,
            line_width=self.line_width,
            line_opacity=self.line_opacity,
            axis_color=self.axis_color,
            tick_count=self.tick_count,
            tick_size=self.tick_size,
            name=self.name,
            opacity=self._opacity,
            z=self._z,
        )
        return dup
