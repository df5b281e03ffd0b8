"""Named collections of running statistics and execution timers."""

from __future__ import annotations

import abc
import copy
import math
import threading
from typing import Dict, Optional

from .stats import Stats
from .timer import Timer

_CYAN = (0, 255, 255)
_LIGHT_SKY_BLUE = (135, 206, 250)


def _colored(text: str, rgb) -> str:
    r, g, b = rgb
    return f"\x1b[38;2;{r:03d};{g:03d};{b:03d}m{text}\x1b[0m"


def _number_unit(value: int, unit: int, digits: int, suffix: str) -> str:
    whole, frac = divmod(value, unit)
    text = str(whole)
    if frac:
        text += "." + f"{frac:0{digits}d}".rstrip("0")
    return text + suffix


def format_duration(ns) -> str:
    """Format a duration in nanoseconds, e.g. '250ns', '1.5ms', '1h2m3.5s'."""
    if isinstance(ns, float):
        if math.isinf(ns):
            return "inf" if ns > 0 else "-inf"
        ns = int(ns)
    if ns == 0:
        return "0"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < 1_000:
        return f"{sign}{ns}ns"
    if ns < 1_000_000:
        return sign + _number_unit(ns, 1_000, 3, "us")
    if ns < 1_000_000_000:
        return sign + _number_unit(ns, 1_000_000, 6, "ms")
    hours, rem = divmod(ns, 3600 * 10**9)
    minutes, rem = divmod(rem, 60 * 10**9)
    text = sign
    if hours:
        text += f"{hours}h"
    if minutes:
        text += f"{minutes}m"
    if rem:
        text += _number_unit(rem, 10**9, 9, "s")
    return text


class SummaryBase(abc.ABC):
    """Thread-safe mapping from names to running statistics."""

    def __init__(self, name: str = "stats") -> None:
        self._name = name
        self._stats: Dict[str, Stats] = {}
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def stats_dict(self) -> Dict[str, Stats]:
        """A shallow copy of the name-to-stats mapping."""
        with self._lock:
            return dict(self._stats)

    def __len__(self) -> int:
        return len(self._stats)

    def empty(self) -> bool:
        return not self._stats

    def merge(self, name: str, stats: Stats) -> None:
        """Merge stats into the entry for name, creating it if new. Empty stats are ignored."""
        if not stats.ok():
            return
        with self._lock:
            entry = self._stats.setdefault(name, Stats())
            entry += stats

    def add(self, name: str, value) -> None:
        """Add a value to the entry for name, creating it if new."""
        with self._lock:
            self._stats.setdefault(name, Stats()).add(value)

    def get_stats(self, name: str) -> Stats:
        """A copy of the stats under name, or empty stats if there are none."""
        with self._lock:
            found = self._stats.get(name)
            return copy.copy(found) if found is not None else Stats()

    def report_all(self, sort: bool = False) -> str:
        """A report line for every entry, optionally sorted by name."""
        lines = [f"Manager: {self._name}"]
        with self._lock:
            keys = sorted(self._stats) if sort else list(self._stats)
            lines.extend(self.report_stats(key, self._stats[key]) for key in keys)
        return "\n".join(lines)

    def report(self, name: str) -> str:
        """A report line for the entry under name."""
        return self.report_stats(f"{self._name}/{name}", self.get_stats(name))

    @abc.abstractmethod
    def report_stats(self, name: str, stats: Stats) -> str:
        """Format one line for stats labelled name."""


class StatsSummary(SummaryBase):
    """A summary of plain numeric values."""

    def get_ref(self, name: str) -> Stats:
        """The live stats object under name, created if new."""
        return self._stats.setdefault(name, Stats())

    def report_stats(self, name: str, stats: Stats) -> str:
        head = _colored(f"[{name:<16}]", _CYAN)
        return head + (
            f" n: {stats.count():<8} | mean: {stats.mean():<14.4e} | last: {stats.last():<14.4f} | "
            f"min: {stats.min():<14.4f} | max: {stats.max():<14.4f} | sum: {stats.sum():<14.4f} |"
        )


class ManualTimer:
    """A timer whose elapsed times are recorded locally and merged into a summary on commit."""

    def __init__(self, name: str, manager: Optional[TimerSummary], start: bool = True) -> None:
        if manager is None:
            raise ValueError("timer needs a manager")
        self._name = name
        self._manager = manager
        self._timer = Timer()
        self._stats = Stats()
        if start:
            self._timer.start()
        else:
            self._timer.reset()

    @property
    def name(self) -> str:
        return self._name

    def start(self) -> None:
        self._timer.start()

    def stop(self, record: bool = True) -> None:
        """Stop and, if record, add the elapsed nanoseconds to the local stats."""
        self._timer.stop()
        if record:
            self._stats.add(self._timer.elapsed())

    def resume(self) -> None:
        self._timer.resume()

    def commit(self) -> None:
        """Stop, record, and merge the local stats into the manager."""
        self.stop(True)
        if not self._stats.ok():
            return
        self._manager.merge(self._name, self._stats)
        self._stats = Stats()


class ScopedTimer(ManualTimer):
    """A timer that commits when its with-block ends."""

    def __enter__(self) -> ScopedTimer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.commit()


class TimerSummary(SummaryBase):
    """A summary of execution times in nanoseconds."""

    def __init__(self, name: str = "timers") -> None:
        super().__init__(name)

    def manual(self, name: str, start: bool = True) -> ManualTimer:
        return ManualTimer(name, self, start)

    def scoped(self, name: str) -> ScopedTimer:
        return ScopedTimer(name, self)

    def report_stats(self, name: str, stats: Stats) -> str:
        head = _colored(f"[{name:<16}]", _LIGHT_SKY_BLUE)
        mean = stats.mean()
        return head + (
            f" n: {stats.count():<8} | last: {format_duration(stats.last()):<14} | "
            f"mean: {format_duration(int(mean)):<14} | min: {format_duration(stats.min()):<14} | "
            f"max: {format_duration(stats.max()):<14} | sum: {format_duration(stats.sum()):<14} |"
        )