"""Blocked ranges and simple thread-pool parallel loops."""

from __future__ import annotations

import copy
import functools
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List


@dataclass(frozen=True)
class BlockedRange:
    """Half-open range [begin, end) split into blocks of gsize; gsize <= 0 means one block."""

    begin: int = 0
    end: int = 0
    gsize: int = 0

    def __post_init__(self) -> None:
        if self.gsize <= 0:
            object.__setattr__(self, "gsize", self.end - self.begin)

    def blocks(self) -> Iterator[range]:
        step = max(self.gsize, 1)
        for start in range(self.begin, self.end, step):
            yield range(start, min(start + step, self.end))


def _run_blocks(blocks: List[range], work: Callable[[range], Any]) -> List[Any]:
    if len(blocks) <= 1:
        return [work(block) for block in blocks]
    with ThreadPoolExecutor() as pool:
        return list(pool.map(work, blocks))


def parallel_for(block_range: BlockedRange, function: Callable[[int], None]) -> None:
    """Call function(i) for every i in the range, blocks running concurrently."""

    def work(block: range) -> None:
        for i in block:
            function(i)

    _run_blocks(list(block_range.blocks()), work)


def parallel_reduce(
    block_range: BlockedRange,
    identity: Any,
    function: Callable[[int, Any], Any],
    reduction: Callable[[Any, Any], Any],
) -> Any:
    """Fold each block with local = function(i, local) from a copy of identity, then combine blocks with reduction."""

    def work(block: range) -> Any:
        local = copy.copy(identity)
        for i in block:
            local = function(i, local)
        return local

    results = _run_blocks(list(block_range.blocks()), work)
    return functools.reduce(reduction, results, identity)