"""An N-dimensional numeric array whose storage is shared between holders."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


class ArrayND:
    """N-dimensional float array stored in row-major order.

    Binding the object to another name shares the data; use copy() to get
    an independent array. An array built without arguments is null.
    """

    def __init__(self, *args):
        if not args:
            self._data = None
            return
        if len(args) == 1 and isinstance(args[0], Sequence):
            dims = tuple(args[0])
        else:
            dims = tuple(args)
        if not dims:
            raise ValueError("at least one dimension is required")
        for n in dims:
            if int(n) != n or n < 0:
                raise ValueError(f"invalid dimension {n!r}")
        self._data = np.zeros(tuple(int(n) for n in dims), dtype=np.float64)

    def _require(self) -> np.ndarray:
        if self._data is None:
            raise ValueError("the array is null")
        return self._data

    def copy(self) -> "ArrayND":
        """Return a new array holding a copy of the data."""
        other = ArrayND()
        if self._data is not None:
            other._data = self._data.copy()
        return other

    def copy_to(self, other: "ArrayND") -> None:
        """Copy the data into other when both exist and have equal size."""
        if (
            self._data is not None
            and other._data is not None
            and self._data.size == other._data.size
        ):
            other._data.reshape(-1)[:] = self._data.reshape(-1)

    def is_null(self) -> bool:
        return self._data is None

    def dim(self) -> tuple[int, ...]:
        return tuple(self._require().shape)

    def size(self) -> int:
        return int(self._require().size)

    def ndim(self) -> int:
        return self._require().ndim

    def _locate(self, key):
        data = self._require()
        if isinstance(key, tuple):
            if len(key) != data.ndim:
                raise IndexError(
                    f"expected {data.ndim} indices, got {len(key)}"
                )
            return data, key
        return data.reshape(-1), key

    def __getitem__(self, key) -> float:
        """Element by flat index or by a tuple of indices."""
        arr, k = self._locate(key)
        return float(arr[k])

    def __setitem__(self, key, value) -> None:
        arr, k = self._locate(key)
        arr[k] = value

    def __iadd__(self, other: "ArrayND") -> "ArrayND":
        """Add other element-wise when the sizes match."""
        if self.size() == other.size():
            self._data.reshape(-1)[:] += other._data.reshape(-1)
        return self

    def add_squared(self, other: "ArrayND") -> None:
        """Add the squares of other element-wise when the sizes match."""
        if self.size() == other.size():
            flat = other._data.reshape(-1)
            self._data.reshape(-1)[:] += flat * flat

    def clear(self) -> None:
        """Set all elements to zero."""
        if self._data is not None:
            self._data.fill(0.0)

    def data(self) -> np.ndarray:
        """Return a flat view of the shared storage."""
        return self._require().reshape(-1)