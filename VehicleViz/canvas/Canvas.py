# canvas/Canvas.py

from PyQt5 import QtGui
import pyqtgraph as pg
import pyqtgraph.exporters
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from VehicleViz.widgets.GraphWidget import GraphWidget
from VehicleViz.widgets.ViewBox import ViewBox


class Margin(NamedTuple):
    top: int
    right: int
    bottom: int
    left: int


class Canvas(GraphWidget):
    def __init__(
        self,
        *args: Any,
        axis_items: Optional[Dict[str, Any]] = None,
        margin: Optional[Margin] = None,
        interactive: bool = False,
        fit_padding: float = 0.0,
        background: str = "w",
        foreground: str = "k",
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)

        self._layers: List[Any] = []
        self._fit_padding: float = fit_padding

        self.plot_widget: pg.PlotWidget = pg.PlotWidget(
            viewBox=ViewBox(interactive=interactive),
            axisItems=axis_items,
            background=background,
        )
        self.plot_item: Any = self.plot_widget.getPlotItem()
        self.view_box: Any = self.plot_widget.getViewBox()
        self._foreground = foreground
        for name in ("left", "bottom"):
            axis = self.plot_item.getAxis(name)
            axis.setPen(foreground)
            axis.setTextPen(foreground)

        self.content_layout.addWidget(self.plot_widget)

        self._x_label: str = ""
        self._y_label: str = ""
        self._title: str = ""
        self.margin: Optional[Margin] = None
        if margin is not None:
            self.set_margin(margin)

        self.resize(900, 600)

    def set_margin(self, margin: Margin) -> None:
        self.margin = Margin(*margin)
        self.plot_item.layout.setContentsMargins(
            self.margin.left, self.margin.top, self.margin.right, self.margin.bottom
        )

    def set_view_port(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.plot_widget.setXRange(x1, x2, padding=0)
        self.plot_widget.setYRange(y1, y2, padding=0)
        self.view_box.disableAutoRange()

    def plot(self, layer: Any) -> Any:
        """
        Add a chart layer to the Canvas.
        - Converts the input into a layer this Canvas can own (via `_coerce_to_layer`).
        - If already plotted, does nothing.
        - Otherwise attaches it to the PlotItem + ViewBox, tracks it in
          `_layers` and fits the view to the union of all layer bounds.
        Returns the layer instance.
        """
        layer = self._coerce_to_layer(layer)
        if layer in self._layers:
            return layer

        layer.add_to(self.plot_item, self.view_box)
        self._layers.append(layer)
        self.fit_view()
        return layer

    def unplot(self, layer: Any) -> None:
        layer = self.get_graph(layer)
        if layer is None:
            return
        try:
            layer.remove_from(self.plot_item)
        finally:
            if layer in self._layers:
                self._layers.remove(layer)

    def get_graph(self, layer: Any) -> Optional[Any]:
        for candidate in self._layers:
            if candidate is layer:
                return candidate
        return None

    def layers(self) -> List[Any]:
        return list(self._layers)

    def set_axis_label(self, axis: str, text: str) -> None:
        if axis == "x":
            self._x_label = text
        elif axis == "y":
            self._y_label = text
        else:
            raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
        self.update_axis_labels()

    def update_axis_labels(self) -> None:
        style = {"color": self._foreground}
        if self._axis_labels_visible:
            self.plot_item.setLabel("bottom", self._x_label, **style)
            self.plot_item.setLabel("left", self._y_label, **style)
        else:
            self.plot_item.setLabel("bottom", "")
            self.plot_item.setLabel("left", "")

    def axis_label(self, axis: str) -> str:
        return self._x_label if axis == "x" else self._y_label

    def set_title(self, text: str, size: str = "16px", bold: bool = True) -> None:
        self._title = text
        self.plot_item.setTitle(text, color=self._foreground, size=size, bold=bold)

    def title(self) -> str:
        return self._title

    def hide_axes(self) -> None:
        self.plot_item.hideAxis("left")
        self.plot_item.hideAxis("bottom")

    def data_bounds(self) -> Optional[Tuple[float, float, float, float]]:
        bounds = [b for b in (layer.bounds() for layer in self._layers) if b is not None]
        if not bounds:
            return None
        return (
            min(b[0] for b in bounds),
            max(b[1] for b in bounds),
            min(b[2] for b in bounds),
            max(b[3] for b in bounds),
        )

    def fit_view(self) -> None:
        """
        Fit the view to the data: x and y ranges become the union of
        every layer's bounds (their scale domains), widened by
        fit_padding. Auto-range is disabled afterwards so later data
        updates do not fight an explicit fit.
        """
        b = self.data_bounds()
        if b is None:
            return
        x0, x1, y0, y1 = b
        self.plot_widget.setXRange(x0, x1, padding=self._fit_padding)
        self.plot_widget.setYRange(y0, y1, padding=self._fit_padding)
        self.view_box.disableAutoRange()

    def on_size_committed(self, size: Tuple[int, int]) -> None:
        for layer in self._layers:
            layer.on_resize(size)

    def export_svg(self, path: str) -> str:
        exporter = pg.exporters.SVGExporter(self.plot_item)
        exporter.export(fileName=path)
        print(f"[Canvas.export_svg] Wrote {path}")
        return path

    def _coerce_to_layer(self, obj: Any) -> Any:
        """
        Ensure the given object is a chart layer that can be added here.
        A layer must implement `add_to(plot_item, view_box)` and
        `remove_from(plot_item)`. If it is already attached to a different
        PlotItem it is cloned, so one instance is never shared across canvases.
        Raises TypeError for anything else.
        """
        if hasattr(obj, "add_to") and hasattr(obj, "remove_from"):
            if getattr(obj, "_plot_item", None) is not None and obj._plot_item is not self.plot_item:
                if hasattr(obj, "clone"):
                    return obj.clone()
            return obj

        raise TypeError("Canvas._coerce_to_layer() expects a chart layer with add_to() and remove_from().")

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        for layer in list(self._layers):
            layer.close()
        super().closeEvent(event)
