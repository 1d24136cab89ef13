from .VehicleData import (
    DEFAULT_CSV_PATH,
    DatasetError,
    VehicleDataset,
    VehicleRecord,
    load_vehicle_data,
    load_scatter_data,
    load_parallel_data,
)
from .Scales import LinearScale, PointScale, extent, ticks, tick_format
from .Marks import ParallelLayout, profit_colors

# Qt widgets and chart layers live in VehicleViz.canvas, VehicleViz.graphs
# and VehicleViz.widgets so the data and scale modules import without a
# display.

__all__ = [
    "DEFAULT_CSV_PATH",
    "DatasetError",
    "VehicleDataset",
    "VehicleRecord",
    "load_vehicle_data",
    "load_scatter_data",
    "load_parallel_data",
    "LinearScale",
    "PointScale",
    "extent",
    "ticks",
    "tick_format",
    "ParallelLayout",
    "profit_colors",
]
