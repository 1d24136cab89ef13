# widgets/AxisItem.py

import math
from typing import Any, List, Optional, Tuple
import pyqtgraph as pg
from VehicleViz.Scales import format_number, precision_fixed, tick_step, ticks

class TickAxisItem(pg.AxisItem):
    """
    Axis whose tick positions and labels come from VehicleViz.Scales
    instead of pyqtgraph's own spacing logic: one tick level of "nice"
    values, labelled with a format specifier (default ",.Nf" with N
    taken from the tick step; "d" for integers such as years).
    """

    def __init__(
        self,
        orientation: str,
        *,
        tick_count: int = 10,
        tick_specifier: Optional[str] = None,
        tick_size: int = 6,
        **kwargs: Any,
    ) -> None:
        # negative lengths point away from the plot area
        kwargs.setdefault("maxTickLength", -tick_size)
        super().__init__(orientation, **kwargs)
        self.tick_count = tick_count
        self.tick_specifier = tick_specifier

    def tickValues(self, minVal: float, maxVal: float, size: float) -> List[Tuple[float, List[float]]]:
        values = ticks(minVal, maxVal, self.tick_count)
        if not values:
            return []
        step = tick_step(minVal, maxVal, self.tick_count)
        spacing = 0.0 if math.isnan(step) else abs(step)
        return [(spacing, values)]

    def tickStrings(self, values: List[float], scale: float, spacing: float) -> List[str]:
        specifier = self.tick_specifier
        if specifier is None:
            precision = precision_fixed(spacing)
            specifier = ",f" if precision is None else f",.{precision}f"
        return [format_number(v, specifier) for v in values]
