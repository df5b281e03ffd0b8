"""Dense linear-algebra helpers for normal equations and small rotations."""

from __future__ import annotations

from typing import Tuple

import numpy as np


def _square_system(h, b) -> Tuple[np.ndarray, np.ndarray]:
    h = np.array(h, dtype=float)
    b = np.array(b, dtype=float).reshape(-1)
    n = b.shape[0]
    if h.shape != (n, n):
        raise ValueError(f"matrix of shape {h.shape} does not match vector of size {n}")
    return h, b


def _square(m) -> np.ndarray:
    m = np.array(m, dtype=float)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise ValueError(f"matrix must be square, got shape {m.shape}")
    return m


def stable_rotate_block_top_left(h, b, block_ind: int, block_size: int):
    """Move block block_ind of the system (h, b) to the top left, keeping the other blocks in order.

    With diagonal blocks [0, 1, 2, 3, 4] and block_ind 2 the result has [2, 0, 1, 3, 4].
    Returns the new (h, b).
    """
    h, b = _square_system(h, b)
    n = b.shape[0]
    if block_ind < 0:
        raise ValueError(f"block index must be non-negative, got {block_ind}")
    if block_size <= 0:
        raise ValueError(f"block size must be positive, got {block_size}")
    start = block_ind * block_size
    if start >= n or start + block_size > n:
        raise ValueError(f"block {block_ind} of size {block_size} lies outside a system of size {n}")
    if block_ind == 0:
        return h, b
    perm = np.r_[start:start + block_size, 0:start, start + block_size:n]
    return h[np.ix_(perm, perm)], b[perm]


def fill_lower_triangular(m) -> np.ndarray:
    """Return m with its lower triangle replaced by the transpose of its upper triangle."""
    m = _square(m)
    upper = np.triu(m)
    return upper + np.triu(m, 1).T


def fill_upper_triangular(m) -> np.ndarray:
    """Return m with its upper triangle replaced by the transpose of its lower triangle."""
    m = _square(m)
    lower = np.tril(m)
    return lower + np.tril(m, -1).T


def make_symmetric(m) -> np.ndarray:
    """Return (m + m^T) / 2."""
    m = _square(m)
    return (m + m.T) / 2.0


def safe_cwise_inverse(x, c: float = 0.0) -> np.ndarray:
    """Element-wise inverse of x, with infinite results replaced by c."""
    x = np.array(x, dtype=float)
    with np.errstate(divide="ignore"):
        inv = 1.0 / x
    inv[np.isinf(inv)] = c
    return inv


def hat3(w) -> np.ndarray:
    """Skew-symmetric matrix of a 3-vector, so that hat3(w) @ v == cross(w, v)."""
    x, y, z = np.asarray(w, dtype=float).reshape(3)
    return np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])


def _vee(s: np.ndarray) -> np.ndarray:
    return np.array([s[2, 1], s[0, 2], s[1, 0]])


def so3_exp(w) -> np.ndarray:
    """Rotation matrix of the rotation vector w."""
    w = np.asarray(w, dtype=float).reshape(3)
    theta2 = float(w @ w)
    k = hat3(w)
    if theta2 < 1e-16:
        return np.eye(3) + k + 0.5 * (k @ k)
    theta = np.sqrt(theta2)
    a = np.sin(theta) / theta
    c = (1.0 - np.cos(theta)) / theta2
    return np.eye(3) + a * k + c * (k @ k)


def so3_log(r) -> np.ndarray:
    """Rotation vector of the rotation matrix r."""
    r = np.asarray(r, dtype=float).reshape(3, 3)
    diag_sum = float(np.diag(r).sum())
    cos_theta = np.clip((diag_sum - 1.0) / 2.0, -1.0, 1.0)
    theta = float(np.arccos(cos_theta))
    if theta < 1e-10:
        return _vee(r - r.T) / 2.0
    if np.pi - theta < 1e-6:
        k = int(np.argmax(np.diag(r)))
        axis = r[:, k] + np.eye(3)[:, k]
        return theta * axis / np.linalg.norm(axis)
    return theta / (2.0 * np.sin(theta)) * _vee(r - r.T)


def _inverse_psd(a: np.ndarray) -> np.ndarray:
    sym = np.tril(a) + np.tril(a, -1).T
    try:
        return np.linalg.solve(sym, np.eye(sym.shape[0]))
    except np.linalg.LinAlgError:
        return np.linalg.pinv(sym, hermitian=True)


def marg_top_left_block(hf, bf, dim: int):
    """Marginalize the leading dim variables out of the symmetric system (hf, bf).

    Returns (hm, bm) with hm = H11 - H10 H00^-1 H01 and bm = b1 - H10 H00^-1 b0.
    """
    hf, bf = _square_system(hf, bf)
    nf = bf.shape[0]
    if dim <= 0:
        raise ValueError(f"dim must be positive, got {dim}")
    if dim > nf:
        raise ValueError(f"dim {dim} exceeds system size {nf}")
    if not np.array_equal(hf, hf.T):
        raise ValueError(f"matrix is not symmetric:\n{hf}")

    h01 = hf[:dim, dim:]
    h10 = hf[dim:, :dim]
    h00_inv = _inverse_psd(hf[:dim, :dim])

    hm = hf[dim:, dim:] - h10 @ h00_inv @ h01
    bm = bf[dim:] - h10 @ (h00_inv @ bf[:dim])
    return make_symmetric(hm), bm