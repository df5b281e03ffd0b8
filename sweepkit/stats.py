"""Running summary statistics: count, sum, min, max, last and mean."""

from __future__ import annotations

import copy
import math


class Stats:
    """Accumulates count, sum, min, max and last of a stream of values."""

    def __init__(self) -> None:
        self._count = 0
        self._sum = 0
        self._min = math.inf
        self._max = -math.inf
        self._last = 0

    def add(self, value) -> None:
        self._count += 1
        self._sum += value
        self._min = min(self._min, value)
        self._max = max(self._max, value)
        self._last = value

    def ok(self) -> bool:
        return self._count > 0

    def count(self) -> int:
        return self._count

    def sum(self):
        return self._sum

    def min(self):
        return self._min

    def max(self):
        return self._max

    def last(self):
        return self._last

    def mean(self):
        return self._sum / self._count if self._count > 0 else 0

    def __iadd__(self, other: Stats) -> Stats:
        if other.count() > 0:
            self._count += other.count()
            self._sum += other.sum()
            self._min = min(self._min, other.min())
            self._max = max(self._max, other.max())
            self._last = other.last()
        return self

    def __add__(self, other: Stats) -> Stats:
        result = copy.copy(self)
        result += other
        return result

    def __repr__(self) -> str:
        return (
            f"Stats(count={self._count}, sum={self._sum}, min={self._min}, "
            f"max={self._max}, last={self._last})"
        )