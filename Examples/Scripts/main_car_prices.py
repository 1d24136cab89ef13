# main_car_prices.py

import os
import sys
from PyQt5 import QtWidgets

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from VehicleViz.DataSource import DataSource
from VehicleViz.VehicleData import load_scatter_data
from VehicleViz.canvas.Canvas import Canvas
from VehicleViz.graphs.ScatterPlot import ScatterPlot


csv_path = sys.argv[1] if len(sys.argv) > 1 else os.path.join(PROJECT_ROOT, "UnitTest", "data", "car_prices_sample.csv")

app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])

# Selling price against MMR on a plain canvas, coloured by profit
data_source = DataSource(load_scatter_data(csv_path))
canvas = Canvas(fit_padding=0.05)
canvas.plot(ScatterPlot(data_source, x_field="mmr", y_field="sellingprice", color_field="profit", marker_radius=3))
canvas.set_axis_label("x", "MMR")
canvas.set_axis_label("y", "Selling Price")
canvas.set_title("Selling Price vs. MMR")
canvas.show()

app.exec()
