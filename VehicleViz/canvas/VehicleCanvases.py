# canvas/VehicleCanvases.py

from typing import Any, Callable, Optional

from VehicleViz.DataSource import DataSource
from VehicleViz.VehicleData import (
    DEFAULT_CSV_PATH,
    DatasetError,
    VehicleDataset,
    load_parallel_data,
    load_scatter_data,
)
from VehicleViz.canvas.Canvas import Canvas, Margin
from VehicleViz.graphs.ParallelCoordinatesPlot import DEFAULT_DIMENSIONS, ParallelCoordinatesPlot
from VehicleViz.graphs.ScatterPlot import ScatterPlot
from VehicleViz.widgets.AxisItem import TickAxisItem

SCATTER_MARGIN = Margin(top=50, right=30, bottom=50, left=100)
SCATTER_SIZE = (800, 400)
SCATTER_TITLE = "Profit Over the Manu. Year of Vehicle"
SCATTER_X_LABEL = "Year"
SCATTER_Y_LABEL = "Profit (Selling Price - MMR)"

PARALLEL_MARGIN = Margin(top=100, right=130, bottom=50, left=80)
PARALLEL_SIZE = (800, 600)
# Room around the unit square for tick labels and axis titles
PARALLEL_PADDING = 0.08


class _DatasetCanvas(Canvas):
    """
    Canvas that owns a DataSource filled once from a vehicle CSV.
    A load failure is reported and leaves the chart empty.
    """

    _loader: Callable[[Any], VehicleDataset]

    def __init__(self, csv_path: Any = DEFAULT_CSV_PATH, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.csv_path = csv_path
        self.data_source = DataSource()
        self.load_error: Optional[str] = None
        self.data_source.data_updated.connect(self.fit_view)

    def load_data(self, csv_path: Optional[Any] = None) -> bool:
        if csv_path is not None:
            self.csv_path = csv_path
        try:
            dataset = self._loader(self.csv_path)
        except DatasetError as e:
            self.load_error = str(e)
            print(f"[{type(self).__name__}] Error loading CSV file: {e}")
            return False
        self.load_error = None
        self.data_source.set(dataset)
        return True


class ProfitScatterCanvas(_DatasetCanvas):
    _loader = staticmethod(load_scatter_data)

    def __init__(self, csv_path: Any = DEFAULT_CSV_PATH, *, load: bool = True, name: str = "Profit Scatter", **kwargs: Any) -> None:
        kwargs.setdefault("margin", SCATTER_MARGIN)
        kwargs.setdefault("axis_items", {
            "bottom": TickAxisItem("bottom", tick_specifier="d"),
            "left": TickAxisItem("left"),
        })
        super().__init__(csv_path, name=name, **kwargs)

        self.scatter = self.plot(ScatterPlot(self.data_source, x_field="year", y_field="profit", name=name))
        self.set_axis_label("x", SCATTER_X_LABEL)
        self.set_axis_label("y", SCATTER_Y_LABEL)
        self.set_title(SCATTER_TITLE)
        self.resize_content(*SCATTER_SIZE)

        if load:
            self.load_data()


class ParallelCoordinatesCanvas(_DatasetCanvas):
    _loader = staticmethod(load_parallel_data)

    def __init__(
        self,
        csv_path: Any = DEFAULT_CSV_PATH,
        *,
        load: bool = True,
        name: str = "Parallel Coordinates",
        dimensions: Any = DEFAULT_DIMENSIONS,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("margin", PARALLEL_MARGIN)
        kwargs.setdefault("fit_padding", PARALLEL_PADDING)
        super().__init__(csv_path, name=name, **kwargs)

        self.hide_axes()
        self.parallel = self.plot(ParallelCoordinatesPlot(self.data_source, dimensions=dimensions, name=name))
        self.resize_content(*PARALLEL_SIZE)

        if load:
            self.load_data()
