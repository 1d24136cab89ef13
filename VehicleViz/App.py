# App.py

import sys
from typing import Any, Optional, Sequence
from PyQt5 import QtWidgets

from VehicleViz.VehicleData import DEFAULT_CSV_PATH
from VehicleViz.canvas.VehicleCanvases import ParallelCoordinatesCanvas, ProfitScatterCanvas


def build_windows(csv_path: Any = DEFAULT_CSV_PATH) -> tuple:
    """
    Create and show both chart windows, scatter plot on top and parallel
    coordinates directly below it.
    """
    scatter = ProfitScatterCanvas(csv_path)
    parallel = ParallelCoordinatesCanvas(csv_path)
    # The window frame only exists once the window is shown
    scatter.show()
    geom = scatter.frameGeometry()
    parallel.move(geom.x(), geom.y() + geom.height())
    parallel.show()
    return scatter, parallel


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    csv_path = argv[0] if argv else DEFAULT_CSV_PATH

    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv[:1])

    scatter, parallel = build_windows(csv_path)

    return app.exec()
