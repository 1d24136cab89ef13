# Marks.py

from typing import Any, List, Mapping, Optional, Sequence, Tuple
import numpy as np

from VehicleViz.Scales import LinearScale, PointScale

POSITIVE_COLOR = "green"
NEGATIVE_COLOR = "red"


def profit_mask(values: Any) -> np.ndarray:
    # NaN compares False, so missing profit is drawn as a loss
    arr = np.asarray(values, dtype=float)
    with np.errstate(invalid="ignore"):
        return arr > 0


def profit_colors(
    values: Any,
    positive_color: str = POSITIVE_COLOR,
    negative_color: str = NEGATIVE_COLOR,
) -> np.ndarray:
    return np.where(profit_mask(values), positive_color, negative_color)


def scatter_marks(x: Any, y: Any, color_values: Any) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    x = np.asarray(x, dtype=float).ravel()
    y = np.asarray(y, dtype=float).ravel()
    mask = profit_mask(color_values).ravel()
    if not (len(x) == len(y) == len(mask)):
        raise ValueError(f"mark arrays differ in length: x={len(x)}, y={len(y)}, color={len(mask)}")
    return x, y, mask


def dimension_label(name: str) -> str:
    return name[:1].upper() + name[1:]


class ParallelLayout:
    """
    Geometry for a parallel-coordinates chart.

    Each dimension gets a vertical axis placed by a PointScale along x and
    its own LinearScale along y, with domain = min..max of that column.
    Vertices are produced as NaN-separated point runs so many polylines
    can be drawn as one curve item.
    """

    def __init__(
        self,
        columns: Mapping[str, Any],
        dimensions: Sequence[str],
        *,
        x_range: Sequence[float] = (0.0, 1.0),
        y_range: Sequence[float] = (0.0, 1.0),
    ) -> None:
        self.dimensions: tuple = tuple(dimensions)
        if not self.dimensions:
            raise ValueError("ParallelLayout needs at least one dimension")

        self._columns = {}
        n_rows = None
        for dim in self.dimensions:
            if dim not in columns:
                raise KeyError(dim)
            col = np.asarray(columns[dim], dtype=float).ravel()
            if n_rows is not None and len(col) != n_rows:
                raise ValueError(f"column '{dim}' has {len(col)} rows, expected {n_rows}")
            n_rows = len(col)
            self._columns[dim] = col
        self.n_rows: int = n_rows or 0

        self.x_scale = PointScale(self.dimensions, x_range)
        self.y_scales = {
            dim: LinearScale.from_values(self._columns[dim], y_range)
            for dim in self.dimensions
        }

    def x(self, dimension: str) -> float:
        return self.x_scale(dimension)

    def positions(self) -> np.ndarray:
        out = np.empty((self.n_rows, len(self.dimensions)), dtype=float)
        for j, dim in enumerate(self.dimensions):
            out[:, j] = self.y_scales[dim](self._columns[dim])
        return out

    def path_points(self, mask: Optional[Any] = None) -> np.ndarray:
        """
        Vertices of every selected row's polyline, one run of
        len(dimensions) points per row followed by a NaN separator.
        """
        ys = self.positions()
        if mask is not None:
            ys = ys[np.asarray(mask, dtype=bool)]
        n, k = ys.shape
        if n == 0:
            return np.empty((0, 2), dtype=float)

        xs = np.array([self.x_scale(dim) for dim in self.dimensions], dtype=float)
        pts = np.full((n, k + 1, 2), np.nan, dtype=float)
        pts[:, :k, 0] = xs
        pts[:, :k, 1] = ys
        return pts.reshape(-1, 2)

    def axis_ticks(self, dimension: str, tick_count: int = 10) -> List[Tuple[float, float, str]]:
        scale = self.y_scales[dimension]
        fmt = scale.tick_format(tick_count)
        return [(v, float(scale(v)), fmt(v)) for v in scale.ticks(tick_count)]

    def axis_points(self, dimension: str, tick_count: int = 10, tick_length: float = 0.0) -> np.ndarray:
        """
        Left-facing axis: the domain line with outer ticks at both ends,
        then one tick mark per tick value, NaN-separated.
        """
        x = self.x_scale(dimension)
        r0, r1 = self.y_scales[dimension].range
        x_out = x - tick_length

        runs = [[(x_out, r0), (x, r0), (x, r1), (x_out, r1)]]
        for _, y, _ in self.axis_ticks(dimension, tick_count):
            runs.append([(x_out, y), (x, y)])

        pts = []
        for run in runs:
            pts.extend(run)
            pts.append((np.nan, np.nan))
        return np.asarray(pts, dtype=float)
