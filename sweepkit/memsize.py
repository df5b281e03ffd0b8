"""Memory sizes and human-readable byte formatting."""

from __future__ import annotations

import math
from dataclasses import dataclass

KILO = 1024
MEGA = 1024 * 1024
GIGA = 1024 * 1024 * 1024


def _fix_precision(x: float) -> float:
    return math.trunc(x * 1000) / 1000.0


def _format_number(x: float) -> str:
    return str(int(x)) if x.is_integer() else repr(x)


def format_bytes(nbytes: int) -> str:
    """Format a byte count as e.g. '512b', '2.441kb', '3mb' or '1.5gb'."""
    if nbytes < KILO:
        return f"{nbytes}b"
    if nbytes < MEGA:
        return f"{_format_number(_fix_precision(nbytes / KILO))}kb"
    if nbytes < GIGA:
        return f"{_format_number(_fix_precision(nbytes / MEGA))}mb"
    return f"{_format_number(_fix_precision(nbytes / GIGA))}gb"


@dataclass(frozen=True, order=True)
class Memsize:
    """An amount of memory in bytes."""

    nbytes: int = 0

    def __str__(self) -> str:
        return format_bytes(self.nbytes)


def from_bytes(n: int) -> Memsize:
    return Memsize(n)


def kilobytes(n: int) -> Memsize:
    return Memsize(n * KILO)


def megabytes(n: int) -> Memsize:
    return Memsize(n * MEGA)


def gigabytes(n: int) -> Memsize:
    return Memsize(n * GIGA)