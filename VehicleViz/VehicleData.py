# VehicleData.py

from typing import Any, Iterable, List, NamedTuple, Optional, Sequence
import numpy as np
import pandas as pd

DEFAULT_CSV_PATH = "data/car_prices.csv"
MIN_YEAR = 2005

SCATTER_FIELDS = ("year", "sellingprice", "mmr", "profit")
SCATTER_POSITIVE = ("sellingprice", "mmr")

PARALLEL_FIELDS = ("year", "sellingprice", "mmr", "profit", "condition", "odometer")
PARALLEL_POSITIVE = ("sellingprice", "mmr", "condition", "odometer")

# Derived columns are computed after loading, never read from the file
DERIVED_FIELDS = ("profit",)


class DatasetError(Exception):
    pass


class VehicleRecord(NamedTuple):
    year: float
    sellingprice: float
    mmr: float
    profit: float
    condition: Optional[float] = None
    odometer: Optional[float] = None


class VehicleDataset:
    """
    Filtered vehicle rows in file order.
    `values` is a float matrix (rows x fields) so it can be handed straight
    to a DataSource; `fields` names its columns.
    """

    def __init__(self, frame: pd.DataFrame, fields: Sequence[str]) -> None:
        self.fields: tuple = tuple(fields)
        missing = [f for f in self.fields if f not in frame.columns]
        if missing:
            raise DatasetError(f"dataset is missing fields: {', '.join(missing)}")
        self.values: np.ndarray = frame.loc[:, list(self.fields)].to_numpy(dtype=float, copy=True)

    def __len__(self) -> int:
        return len(self.values)

    def column(self, name: str) -> np.ndarray:
        if name not in self.fields:
            raise KeyError(name)
        return self.values[:, self.fields.index(name)]

    def records(self) -> List[VehicleRecord]:
        out = []
        for row in self.values:
            item = dict(zip(self.fields, (float(v) for v in row)))
            out.append(VehicleRecord(
                year=item.get("year", np.nan),
                sellingprice=item.get("sellingprice", np.nan),
                mmr=item.get("mmr", np.nan),
                profit=item.get("profit", np.nan),
                condition=item.get("condition"),
                odometer=item.get("odometer"),
            ))
        return out

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.values, columns=list(self.fields))


def _read_columns(path: Any, columns: List[str], engine: str) -> pd.DataFrame:
    return pd.read_csv(
        path,
        usecols=columns,
        dtype=str,
        keep_default_na=False,
        on_bad_lines="skip",
        engine=engine,
    )


def read_vehicle_csv(path: Any, columns: Iterable[str]) -> pd.DataFrame:
    """
    Read the named columns of a vehicle CSV as numbers.
    Empty or unparseable cells become NaN so the filters reject them.
    Raises DatasetError if the file cannot be read or a column is missing.
    """
    columns = list(columns)
    try:
        try:
            frame = _read_columns(path, columns, engine="c")
        except pd.errors.ParserError:
            # The C tokenizer gives up on an unterminated quote; the python
            # engine reads it as one long field instead
            frame = _read_columns(path, columns, engine="python")
    except FileNotFoundError as e:
        raise DatasetError(f"no such file: {path}") from e
    except (OSError, ValueError) as e:
        # pandas reports parser errors and usecols mismatches as ValueError
        raise DatasetError(f"cannot read {path}: {e}") from e

    for name in columns:
        frame[name] = pd.to_numeric(frame[name].str.strip(), errors="coerce")
    return frame.loc[:, columns]


def add_profit(frame: pd.DataFrame) -> pd.DataFrame:
    out = frame.copy()
    out["profit"] = out["sellingprice"] - out["mmr"]
    return out


def filter_vehicles(
    frame: pd.DataFrame,
    min_year: float = MIN_YEAR,
    positive: Sequence[str] = SCATTER_POSITIVE,
) -> pd.DataFrame:
    mask = frame["year"] >= min_year
    for name in positive:
        mask &= frame[name] > 0
    return frame.loc[mask]


def first_half(frame: pd.DataFrame) -> pd.DataFrame:
    return frame.iloc[: len(frame) // 2]


def load_vehicle_data(
    path: Any = DEFAULT_CSV_PATH,
    *,
    fields: Sequence[str] = SCATTER_FIELDS,
    positive: Sequence[str] = SCATTER_POSITIVE,
    min_year: float = MIN_YEAR,
    halve: bool = True,
) -> VehicleDataset:
    """
    Full pipeline: read -> derive profit -> filter -> keep first half.
    The year and both price columns are always read since the filter and
    the derived profit depend on them.
    """
    needed = ["year", "sellingprice", "mmr"]
    for name in list(fields) + list(positive):
        if name not in needed and name not in DERIVED_FIELDS:
            needed.append(name)

    frame = read_vehicle_csv(path, needed)
    frame = add_profit(frame)
    frame = filter_vehicles(frame, min_year=min_year, positive=positive)
    if halve:
        frame = first_half(frame)

    dataset = VehicleDataset(frame, fields)
    print(f"[VehicleData] Loaded {len(dataset)} rows from {path}")
    return dataset


def load_scatter_data(path: Any = DEFAULT_CSV_PATH) -> VehicleDataset:
    return load_vehicle_data(path, fields=SCATTER_FIELDS, positive=SCATTER_POSITIVE)


def load_parallel_data(path: Any = DEFAULT_CSV_PATH) -> VehicleDataset:
    return load_vehicle_data(path, fields=PARALLEL_FIELDS, positive=PARALLEL_POSITIVE)
