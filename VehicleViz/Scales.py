# Scales.py

import math
from typing import Any, Callable, Hashable, List, Optional, Sequence, Tuple
import numpy as np

MINUS_SIGN = "−"

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def extent(values: Any) -> Optional[Tuple[float, float]]:
    arr = np.asarray(values, dtype=float).ravel()
    arr = arr[~np.isnan(arr)]
    if arr.size == 0:
        return None
    return float(np.min(arr)), float(np.max(arr))


def _tick_spec(start: float, stop: float, count: float) -> Tuple[int, int, float]:
    """
    Integer tick bounds (i1, i2) and increment for start <= stop.
    A negative increment means ticks are i / -inc, which keeps small steps
    like 0.1 exact instead of accumulating 0.1 * i rounding error.
    """
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1

    if power < 0:
        inc = math.pow(10, -power) / factor
        i1 = _round_half_up(start * inc)
        i2 = _round_half_up(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = math.pow(10, power) * factor
        i1 = _round_half_up(start / inc)
        i2 = _round_half_up(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1

    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def ticks(start: float, stop: float, count: float = 10) -> List[float]:
    """
    Roughly `count` evenly spaced, human-friendly values within [start, stop].
    Steps are 1, 2 or 5 times a power of ten. Returned in descending order
    when stop < start.
    """
    start, stop, count = float(start), float(stop), float(count)
    if not count > 0:
        return []
    if start == stop:
        return [start]
    if not (math.isfinite(start) and math.isfinite(stop)):
        return []

    reverse = stop < start
    i1, i2, inc = _tick_spec(stop, start, count) if reverse else _tick_spec(start, stop, count)
    if not i2 >= i1:
        return []

    n = i2 - i1 + 1
    if reverse:
        if inc < 0:
            return [(i2 - i) / -inc for i in range(n)]
        return [(i2 - i) * inc for i in range(n)]
    if inc < 0:
        return [(i1 + i) / -inc for i in range(n)]
    return [(i1 + i) * inc for i in range(n)]


def tick_increment(start: float, stop: float, count: float = 10) -> float:
    start, stop = float(start), float(stop)
    # expects start < stop, like _tick_spec
    if not (math.isfinite(start) and math.isfinite(stop)) or not start < stop or not count > 0:
        return math.nan
    return _tick_spec(start, stop, float(count))[2]


def tick_step(start: float, stop: float, count: float = 10) -> float:
    start, stop = float(start), float(stop)
    if start == stop or not (math.isfinite(start) and math.isfinite(stop)) or not count > 0:
        return math.nan
    reverse = stop < start
    inc = tick_increment(stop, start, count) if reverse else tick_increment(start, stop, count)
    step = 1 / -inc if inc < 0 else inc
    return -step if reverse else step


def precision_fixed(step: float) -> Optional[int]:
    step = abs(float(step))
    if step == 0 or not math.isfinite(step):
        return None
    return max(0, -math.floor(math.log10(step)))


def format_number(value: float, specifier: str = ",f") -> str:
    if specifier.endswith("d"):
        text = format(_round_half_up(float(value)), specifier)
    else:
        text = format(float(value), specifier)

    if text.startswith("-"):
        digits = text[1:]
        # -0.0 and values that round to zero carry no sign
        if digits.strip("0.,") == "":
            return digits
        return MINUS_SIGN + digits
    return text


def tick_format(
    start: float,
    stop: float,
    count: float = 10,
    specifier: Optional[str] = None,
) -> Callable[[float], str]:
    if specifier is None:
        precision = precision_fixed(tick_step(start, stop, count))
        specifier = ",f" if precision is None else f",.{precision}f"
    return lambda value: format_number(value, specifier)


class LinearScale:
    """
    Continuous linear map from a numeric domain onto a numeric range.
    A zero-width domain maps every value to the middle of the range.
    """

    def __init__(
        self,
        domain: Sequence[float] = (0.0, 1.0),
        range_: Sequence[float] = (0.0, 1.0),
    ) -> None:
        d0, d1 = domain
        r0, r1 = range_
        self.domain: Tuple[float, float] = (float(d0), float(d1))
        self.range: Tuple[float, float] = (float(r0), float(r1))

    @classmethod
    def from_values(cls, values: Any, range_: Sequence[float] = (0.0, 1.0)) -> "LinearScale":
        ext = extent(values)
        return cls(ext if ext is not None else (0.0, 1.0), range_)

    @staticmethod
    def _normalize(x: Any, a: float, b: float) -> Any:
        span = b - a
        if span == 0:
            return np.full_like(x, 0.5, dtype=float) if isinstance(x, np.ndarray) else 0.5
        return (x - a) / span

    def __call__(self, value: Any) -> Any:
        x = np.asarray(value, dtype=float) if not np.isscalar(value) else float(value)
        t = self._normalize(x, *self.domain)
        r0, r1 = self.range
        return r0 * (1 - t) + r1 * t

    def invert(self, value: Any) -> Any:
        y = np.asarray(value, dtype=float) if not np.isscalar(value) else float(value)
        t = self._normalize(y, *self.range)
        d0, d1 = self.domain
        return d0 * (1 - t) + d1 * t

    def ticks(self, count: float = 10) -> List[float]:
        return ticks(self.domain[0], self.domain[1], count)

    def tick_format(self, count: float = 10, specifier: Optional[str] = None) -> Callable[[float], str]:
        return tick_format(self.domain[0], self.domain[1], count, specifier)

    def __repr__(self) -> str:
        return f"LinearScale(domain={self.domain}, range={self.range})"


class PointScale:
    """
    Places a sequence of discrete keys at evenly spaced points across a range.
    With padding 0 the first and last keys sit on the range ends.
    """

    def __init__(
        self,
        domain: Sequence[Hashable] = (),
        range_: Sequence[float] = (0.0, 1.0),
        *,
        padding: float = 0.0,
        align: float = 0.5,
    ) -> None:
        self.domain: tuple = tuple(dict.fromkeys(domain))
        r0, r1 = range_
        self.range: Tuple[float, float] = (float(r0), float(r1))
        self.padding: float = float(padding)
        self.align: float = max(0.0, min(1.0, float(align)))
        self._index = {key: i for i, key in enumerate(self.domain)}

    def _layout(self) -> Tuple[float, float]:
        n = len(self.domain)
        r0, r1 = self.range
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)
        step = (stop - start) / max(1.0, n - 1 + self.padding * 2)
        start += (stop - start - step * (n - 1)) * self.align
        if reverse:
            return start + step * (n - 1), -step
        return start, step

    def step(self) -> float:
        return abs(self._layout()[1])

    def __call__(self, key: Hashable) -> Optional[float]:
        i = self._index.get(key)
        if i is None:
            return None
        start, step = self._layout()
        return start + step * i

    def positions(self) -> List[float]:
        return [self(key) for key in self.domain]

    def __repr__(self) -> str:
        return f"PointScale(domain={self.domain}, range={self.range})"
