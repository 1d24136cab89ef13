from setuptools import setup, find_packages

setup(
    name="VehicleViz",
    version="0.1.0",
    description="Profit scatter and parallel-coordinates charts for vehicle sales data",
    packages=find_packages(include=["VehicleViz", "VehicleViz.*"]),
    install_requires=[
        "numpy>=1.24",
        "pandas>=1.5",
        "pyqtgraph>=0.13.3",
        "PyQt5>=5.15.10",
        "PyQt5-sip>=12.15.0",
    ],
    python_requires=">=3.8",
)
