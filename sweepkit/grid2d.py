"""A fixed-size 2D grid stored row-major in a flat array."""

from __future__ import annotations

import operator
from typing import Any, Iterator

import numpy as np


class Grid2d:
    """Row-major grid of rows x cols values."""

    def __init__(self, rows: int = 0, cols: int = 0, fill: Any = 0, dtype=np.float64) -> None:
        if rows < 0 or cols < 0:
            raise ValueError(f"grid shape must be non-negative, got {rows}x{cols}")
        self._rows = rows
        self._cols = cols
        self._data = np.full(rows * cols, fill, dtype=dtype)

    def rows(self) -> int:
        return self._rows

    def cols(self) -> int:
        return self._cols

    def area(self) -> int:
        return self._rows * self._cols

    def size(self) -> int:
        return self.area()

    def empty(self) -> bool:
        return self.area() == 0

    def nbytes(self) -> int:
        return self.area() * self._data.itemsize

    def rc2ind(self, r: int, c: int) -> int:
        return r * self._cols + c

    @property
    def array(self) -> np.ndarray:
        """A (rows, cols) view of the data."""
        return self._data.reshape(self._rows, self._cols)

    def reset(self, fill: Any = 0) -> None:
        self._data = np.full(self.area(), fill, dtype=self._data.dtype)

    def resize(self, rows: int, cols: int, fill: Any = 0) -> None:
        """Change the shape, keeping the leading flat values and filling new ones."""
        if rows < 0 or cols < 0:
            raise ValueError(f"grid shape must be non-negative, got {rows}x{cols}")
        data = np.full(rows * cols, fill, dtype=self._data.dtype)
        keep = min(data.size, self._data.size)
        data[:keep] = self._data[:keep]
        self._rows, self._cols, self._data = rows, cols, data

    def front(self):
        return self[0]

    def back(self):
        return self[self.size() - 1]

    def _flat_index(self, index) -> int:
        if isinstance(index, tuple):
            r, c = index
            i = self.rc2ind(operator.index(r), operator.index(c))
        else:
            i = operator.index(index)
        if not 0 <= i < self._data.size:
            raise IndexError(f"index {index} out of range for grid of size {self._data.size}")
        return i

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data.tolist())

    def __getitem__(self, index):
        value = self._data[self._flat_index(index)]
        return value.item() if isinstance(value, np.generic) else value

    def __setitem__(self, index, value) -> None:
        self._data[self._flat_index(index)] = value

    def __repr__(self) -> str:
        return f"Grid2d(rows={self._rows}, cols={self._cols}, dtype={self._data.dtype})"