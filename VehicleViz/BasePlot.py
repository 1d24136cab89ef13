from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

class GraphBase(ABC):
    """
    Abstract base class for all chart layers in VehicleViz.
    Defines the minimal interface to integrate with Canvas: attach/detach
    from a pyqtgraph PlotItem, report data bounds, redraw on data changes
    and on committed container resizes.
    """

    def _connect_source(self, data_source: Any) -> None:
        self.data_source = data_source
        self.data_source.data_updated.connect(self._update_plot)
        self._source_connected = True

    def on_resize(self, size: Tuple[int, int]) -> None:
        self._update_plot()

    @abstractmethod
    def clone(self) -> "GraphBase":
        ...

    @abstractmethod
    def add_to(self, plot_item: Any, view_box: Any) -> None:
        ...

    @abstractmethod
    def remove_from(self, plot_item: Any) -> None:
        ...

    @abstractmethod
    def bounds(self) -> Optional[Tuple[float, float, float, float]]:
        ...

    @abstractmethod
    def _update_plot(self) -> None:
        ...

    def close(self) -> None:
        if getattr(self, "_source_connected", False):
            self.data_source.data_updated.disconnect(self._update_plot)
            self._source_connected = False
