# DataSource.py

from PyQt5.QtCore import QObject, pyqtSignal
import numpy as np
from typing import Any, Callable, Optional, Sequence, Tuple

class DataSource(QObject):
    data_updated = pyqtSignal()

    def __init__(self, initial_data: Optional[Any] = None, columns: Optional[Sequence[str]] = None) -> None:
        super().__init__()
        self._columns: Tuple[str, ...] = ()
        self._data: np.ndarray = self._normalize(initial_data, columns)

    def set(self, new_data: Any, columns: Optional[Sequence[str]] = None) -> None:
        self._data = self._normalize(new_data, columns)
        self.data_updated.emit()

    def _normalize(self, data: Any, columns: Optional[Sequence[str]] = None) -> np.ndarray:
        """
        Coerce input into a 2D array and remember its column names.
        - VehicleDataset: uses its value matrix and field names.
        - DataFrame: uses its values and column labels.
        - Anything else goes through np.asarray; 1D becomes a column vector.
        Unusable input yields an empty (0, 0) array.
        """
        if columns is None:
            if hasattr(data, "fields") and hasattr(data, "values"):
                columns = data.fields
            elif hasattr(data, "columns"):
                columns = [str(c) for c in data.columns]

        if hasattr(data, "fields") and hasattr(data, "values"):
            data = data.values

        if data is None:
            arr = np.empty((0, 0))
        else:
            try:
                arr = np.asarray(data).copy()
            except ValueError:
                # ragged nested sequences
                arr = np.empty((0, 0))
            if arr.ndim == 1:
                arr = arr.reshape(-1, 1)
            elif arr.ndim != 2:
                arr = np.empty((0, 0))

        if columns is not None and arr.ndim == 2 and len(columns) == arr.shape[1]:
            self._columns = tuple(str(c) for c in columns)
        else:
            self._columns = ()
        return arr

    def get(self) -> np.ndarray:
        return self._data

    @property
    def columns(self) -> Tuple[str, ...]:
        return self._columns

    def has_column(self, name: str) -> bool:
        return name in self._columns

    def column(self, name: str) -> np.ndarray:
        if name not in self._columns:
            raise KeyError(f"DataSource has no column '{name}' (columns: {', '.join(self._columns) or 'none'})")
        return self._data[:, self._columns.index(name)]

    def apply_transform(self, func: Callable[[np.ndarray], Any]) -> Any:
        return func(self._data)

    def size(self) -> int:
        return len(self._data) if self._data.ndim > 0 else 0
