"""Log-spaced index ranges built on the IEEE-754 single-precision layout.

A range with ``nbits`` mantissa bits between ``2**min_exp`` and
``2**max_exp`` holds the points

    X_I = (1 + (I mod 2**nbits) / 2**nbits) * 2**(min_exp + I // 2**nbits)

for I = 0 .. (max_exp - min_exp) * 2**nbits. Indices and values are
converted into each other by bit manipulation of the float32 encoding.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Iterator, Sequence

import numpy as np

_MANTISSA_BITS = 23
_EXPONENT_BIAS = 127
_MIN_NORMAL_EXP = -126
_MAX_EXP = 127


def _float_bits(value: float) -> int:
    return struct.unpack("<I", struct.pack("<f", value))[0]


def _bits_float(bits: int) -> float:
    return struct.unpack("<f", struct.pack("<I", bits))[0]


class CorteoRange:
    """A log-spaced range of float32 values addressed by an integer index."""

    def __init__(self, nbits: int, min_exp: int, max_exp: int):
        if not 0 <= nbits <= _MANTISSA_BITS:
            raise ValueError(f"nbits must be in [0, {_MANTISSA_BITS}], got {nbits}")
        if max_exp <= min_exp:
            raise ValueError("max_exp must be larger than min_exp")
        if min_exp < _MIN_NORMAL_EXP or max_exp > _MAX_EXP:
            raise ValueError(
                f"exponents must lie in [{_MIN_NORMAL_EXP}, {_MAX_EXP}]"
            )
        self.nbits = nbits
        self.min_exp = min_exp
        self.max_exp = max_exp
        self.min_value = math.ldexp(1.0, min_exp)
        self.max_value = math.ldexp(1.0, max_exp)
        self.dim = (max_exp - min_exp) << nbits
        self._bias = (_EXPONENT_BIAS + min_exp) << nbits
        self._shift = _MANTISSA_BITS - nbits

    def index(self, value: float) -> int:
        """Return the index of the largest range point not above value.

        Values below the range map to 0, values above it to the last index.
        """
        if math.isnan(value):
            raise ValueError("cannot index NaN")
        if value <= self.min_value:
            return 0
        if value >= self.max_value:
            return self.dim
        idx = (_float_bits(value) >> self._shift) - self._bias
        return min(max(idx, 0), self.dim)

    def value(self, index: int) -> float:
        """Return the range point for an index in [0, len(self) - 1]."""
        index = int(index)
        if not 0 <= index <= self.dim:
            raise IndexError(f"index {index} outside [0, {self.dim}]")
        return _bits_float((index + self._bias) << self._shift)

    def values(self) -> np.ndarray:
        """Return all range points as a float32 array."""
        return np.array(list(self), dtype=np.float32)

    def __len__(self) -> int:
        return self.dim + 1

    def __iter__(self) -> Iterator[float]:
        return (self.value(i) for i in range(self.dim + 1))

    def __repr__(self) -> str:
        return f"CorteoRange({self.nbits}, {self.min_exp}, {self.max_exp})"


def _checked_table(corteo_range: CorteoRange, y: Sequence[float]) -> np.ndarray:
    table = np.asarray(y, dtype=np.float64).reshape(-1)
    if table.size < len(corteo_range):
        raise ValueError(
            f"need at least {len(corteo_range)} values, got {table.size}"
        )
    return table[: len(corteo_range)]


class LinInterp:
    """Linear interpolation of data tabulated on a CorteoRange."""

    def __init__(self, corteo_range: CorteoRange, y: Sequence[float] | None = None):
        self._range = corteo_range
        self._x = corteo_range.values().astype(np.float64)
        self._y: np.ndarray | None = None
        self._dydx: np.ndarray | None = None
        if y is not None:
            self.set(y)

    def set(self, y: Sequence[float]) -> None:
        """Load new table data; y must have at least len(range) values."""
        table = _checked_table(self._range, y)
        self._dydx = (np.diff(table) / np.diff(self._x)).astype(np.float32)
        self._y = table.astype(np.float32)

    def __call__(self, x: float) -> float:
        if self._y is None:
            raise ValueError("interpolator has no data")
        if x <= self._range.min_value:
            return float(self._y[0])
        if x >= self._range.max_value:
            return float(self._y[-1])
        i = self._range.index(x)
        if i >= self._range.dim:
            return float(self._y[-1])
        return float(self._y[i]) + float(self._dydx[i]) * (x - float(self._x[i]))

    def data(self) -> np.ndarray:
        """Return a copy of the stored table."""
        if self._y is None:
            raise ValueError("interpolator has no data")
        return self._y.copy()


class LogInterp:
    """Log-log interpolation of positive data tabulated on a CorteoRange."""

    def __init__(self, corteo_range: CorteoRange, y: Sequence[float] | None = None):
        self._range = corteo_range
        self._x = corteo_range.values().astype(np.float64)
        self._y: np.ndarray | None = None
        self._d: np.ndarray | None = None
        if y is not None:
            self.set(y)

    def set(self, y: Sequence[float]) -> None:
        """Load new table data; all values must be positive and finite."""
        table = _checked_table(self._range, y)
        if not np.all(np.isfinite(table)) or np.any(table <= 0):
            raise ValueError("log interpolation needs positive finite values")
        log_y = np.log2(table)
        log_x = np.log2(self._x)
        self._d = (np.diff(log_y) / np.diff(log_x)).astype(np.float32)
        self._y = table.astype(np.float32)

    def __call__(self, x: float) -> float:
        if self._y is None:
            raise ValueError("interpolator has no data")
        if x <= self._range.min_value:
            return float(self._y[0])
        if x >= self._range.max_value:
            return float(self._y[-1])
        i = self._range.index(x)
        if i >= self._range.dim:
            return float(self._y[-1])
        return float(self._y[i]) * 2.0 ** (
            float(self._d[i]) * math.log2(x / float(self._x[i]))
        )

    def data(self) -> np.ndarray:
        """Return a copy of the stored table."""
        if self._y is None:
            raise ValueError("interpolator has no data")
        return self._y.copy()