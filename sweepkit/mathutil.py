"""Scalar helpers, running statistics, intervals and fast trig approximations."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

NAN = math.nan
PI = math.pi
TAU = 2.0 * math.pi


def is_power_of_2(n: int) -> bool:
    """Return whether log2(n) is integral (zero counts, as log2(0) is -inf)."""
    if n < 0:
        return False
    if n == 0:
        return True
    return math.log2(n).is_integer()


def round_nearest(d: float) -> int:
    """Round to nearest integer, halfway cases away from zero."""
    magnitude = abs(d)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if d < 0 else whole


def round2(d: float) -> int:
    """Round by adding or subtracting one half and truncating toward zero."""
    return int(d + 0.5) if d > 0.0 else int(d - 0.5)


def sq(x):
    """Square of x."""
    return x * x


def deg2rad(deg: float) -> float:
    return deg / 180.0 * math.pi


def rad2deg(rad: float) -> float:
    return rad / math.pi * 180.0


class SinCos:
    """Precomputed sine and cosine of an angle."""

    __slots__ = ("sin", "cos")

    def __init__(self, rad: float = 0.0) -> None:
        self.sin = math.sin(rad)
        self.cos = math.cos(rad)

    def __repr__(self) -> str:
        return f"SinCos(sin={self.sin}, cos={self.cos})"


class MeanVar:
    """Running mean and per-component variance."""

    def __init__(self, dim: int = 3) -> None:
        self.dim = dim
        self.n = 0
        self.mean = np.zeros(dim)
        self._var_sum = np.zeros(dim)

    def add(self, x) -> None:
        x = np.asarray(x, dtype=float).reshape(self.dim)
        self.n += 1
        dx = x - self.mean
        dx_n = dx / self.n
        self.mean += dx_n
        self._var_sum += (self.n - 1.0) * dx_n * dx

    def reset(self) -> None:
        self.n = 0
        self.mean = np.zeros(self.dim)
        self._var_sum = np.zeros(self.dim)

    def var(self) -> np.ndarray:
        """Sample variance; meaningful only when ok()."""
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._var_sum / (self.n - 1)

    def ok(self) -> bool:
        return self.n > 1


class MeanCovar:
    """Running mean and covariance."""

    def __init__(self, dim: int = 3) -> None:
        self.dim = dim
        self.n = 0
        self.mean = np.zeros(dim)
        self.covar_sum = np.zeros((dim, dim))

    def add(self, x) -> None:
        x = np.asarray(x, dtype=float).reshape(self.dim)
        self.n += 1
        diff = x - self.mean
        dx_n = diff / self.n
        self.mean += dx_n
        self.covar_sum += np.outer((self.n - 1) * dx_n, diff)

    def set(self, samples) -> None:
        """Replace the state with the statistics of samples, one per column."""
        samples = np.asarray(samples, dtype=float)
        if samples.ndim != 2 or samples.shape[0] != self.dim:
            raise ValueError(f"samples must have shape ({self.dim}, n), got {samples.shape}")
        self.n = samples.shape[1]
        self.mean = samples.mean(axis=1)
        centered = samples - self.mean[:, None]
        self.covar_sum = centered @ centered.T

    def reset(self) -> None:
        self.n = 0
        self.mean = np.zeros(self.dim)
        self.covar_sum = np.zeros((self.dim, self.dim))

    def covar(self) -> np.ndarray:
        """Sample covariance; meaningful only when ok()."""
        with np.errstate(divide="ignore", invalid="ignore"):
            return self.covar_sum / (self.n - 1)

    def ok(self) -> bool:
        return self.n > 1


def make_right_handed(eigvals, eigvecs):
    """Return eigenvalues and eigenvectors with the first two swapped if the axes are left handed."""
    eigvals = np.array(eigvals, dtype=float)
    eigvecs = np.array(eigvecs, dtype=float)
    hand = np.dot(np.cross(eigvecs[:, 0], eigvecs[:, 1]), eigvecs[:, 2])
    if hand < 0:
        eigvecs[:, [0, 1]] = eigvecs[:, [1, 0]]
        eigvals[[0, 1]] = eigvals[[1, 0]]
    return eigvals, eigvecs


def matrix_sqrt_utu(a) -> np.ndarray:
    """Upper Cholesky factor U with A = U^T U, reading only the upper triangle of A."""
    a = np.asarray(a, dtype=float)
    sym = np.triu(a) + np.triu(a, 1).T
    return np.linalg.cholesky(sym).T


@dataclass(frozen=True)
class Interval:
    """A closed real interval [left, right]."""

    left: float = 0.0
    right: float = 0.0

    def __post_init__(self) -> None:
        if self.left > self.right:
            raise ValueError(f"left {self.left} must not exceed right {self.right}")

    def width(self) -> float:
        return self.right - self.left

    def empty(self) -> bool:
        return self.right <= self.left

    def contains_closed(self, v) -> bool:
        return self.left <= v <= self.right

    def contains_open(self, v) -> bool:
        return self.left < v < self.right

    def contains_interval(self, other: Interval) -> bool:
        return self.left <= other.left and other.right <= self.right

    def normalize(self, v: float) -> float:
        """Map v in [left, right] to [0, 1]."""
        return (v - self.left) / self.width()

    def inv_normalize(self, v: float) -> float:
        """Map v in [0, 1] back to [left, right]."""
        return v * self.width() + self.left


def asin_approx(x: float) -> float:
    """Taylor polynomial approximation to asin."""
    x2 = x * x
    return x * (1 + x2 * (1 / 6.0 + x2 * (3.0 / 40.0 + x2 * 5.0 / 112.0)))


def asin_approx_3rd(x: float) -> float:
    """Third-order approximation to asin."""
    a0 = 1.5707288
    a1 = -0.2121144
    a2 = 0.0742610
    a3 = -0.0187293
    neg = x < 0
    x = abs(x)
    x2 = x * x
    res = math.pi / 2 - math.sqrt(1 - x) * (a0 + a1 * x + a2 * x2 + a3 * x2 * x)
    return -res if neg else res


def atan2_approx(y: float, x: float) -> float:
    """Cheap approximation to atan2."""
    abs_y = abs(y) + 1e-10
    if x < 0:
        r = (x + abs_y) / (abs_y - x)
        angle = math.pi / 4 * 3
    else:
        r = (x - abs_y) / (x + abs_y)
        angle = math.pi / 4
    angle += (0.1963 * r * r - 0.9817) * r
    return -angle if y < 0 else angle


def atan_approx_6th(x: float) -> float:
    """Polynomial approximation to atan on [-1, 1]."""
    a1 = 0.99997726
    a3 = -0.33262347
    a5 = 0.19354346
    a7 = -0.11643287
    a9 = 0.05265332
    a11 = -0.01172120
    x2 = x * x
    return x * (a1 + x2 * (a3 + x2 * (a5 + x2 * (a7 + x2 * (a9 + x2 * a11)))))


def atan2_approx_6th(y: float, x: float) -> float:
    """atan2 built on atan_approx_6th."""
    swap = abs(x) < abs(y)
    ratio = x / y if swap else y / x
    res = atan_approx_6th(ratio)
    if swap:
        res = math.pi / 2 - res if ratio >= 0 else -math.pi / 2 - res
    if x < 0:
        res += math.pi if y >= 0 else -math.pi
    return res