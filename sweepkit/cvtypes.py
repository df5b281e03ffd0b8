"""Image type codes, integer ranges and region helpers for numpy images."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

CV_8U = 0
CV_8S = 1
CV_16U = 2
CV_16S = 3
CV_32S = 4
CV_32F = 5
CV_64F = 6
CV_USRTYPE1 = 7

_DEPTH_MASK = 7
_CN_SHIFT = 3

_DEPTH_NAMES = {
    CV_8U: "8U",
    CV_8S: "8S",
    CV_16U: "16U",
    CV_16S: "16S",
    CV_32S: "32S",
    CV_32F: "32F",
    CV_64F: "64F",
}


def make_type(depth: int, channels: int) -> int:
    """Combine a depth code and a channel count into a type code."""
    return (depth & _DEPTH_MASK) + ((channels - 1) << _CN_SHIFT)


def cv_type_str(cv_type: int) -> str:
    """Describe a type code, e.g. '8UC3'."""
    depth = cv_type & _DEPTH_MASK
    chans = (1 + (cv_type >> _CN_SHIFT)) & 0xFF
    return f"{_DEPTH_NAMES.get(depth, 'User')}C{chans}"


def _trunc_div(a: int, d: int) -> int:
    q = abs(a) // abs(d)
    return q if (a >= 0) == (d > 0) else -q


@dataclass(frozen=True)
class Range:
    """Half-open integer range [start, end)."""

    start: int = 0
    end: int = 0

    def __mul__(self, d: int) -> Range:
        return Range(self.start * d, self.end * d)

    def __truediv__(self, d: int) -> Range:
        """Divide both ends, truncating toward zero."""
        return Range(_trunc_div(self.start, d), _trunc_div(self.end, d))


def mat_size(mat: np.ndarray) -> Tuple[int, int]:
    """(width, height) of an image."""
    return mat.shape[1], mat.shape[0]


def zero_like(mat: np.ndarray) -> np.ndarray:
    return np.zeros_like(mat)


def mat_set_roi(mat: np.ndarray, roi: Sequence[int], value) -> bool:
    """Set the part of roi (x, y, width, height) inside mat to value; False if nothing is inside."""
    x, y, w, h = roi
    x0 = max(x, 0)
    y0 = max(y, 0)
    x1 = min(x + w, mat.shape[1])
    y1 = min(y + h, mat.shape[0])
    if x1 <= x0 or y1 <= y0:
        return False
    mat[y0:y1, x0:x1] = value
    return True


def mat_set_win(mat: np.ndarray, center: Sequence[int], half: Sequence[int], value) -> bool:
    """Set the window of half size (hx, hy) around center (x, y) to value."""
    cx, cy = center
    hx, hy = half
    return mat_set_roi(mat, (cx - hx, cy - hy, hx * 2 + 1, hy * 2 + 1), value)


def point_sq_norm(point: Sequence[float]) -> float:
    """Squared Euclidean norm of a 2D or 3D point."""
    return float(sum(c * c for c in point))