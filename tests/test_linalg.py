import numpy as np
import pytest

from sweepkit.linalg import (
    fill_lower_triangular,
    fill_upper_triangular,
    hat3,
    make_symmetric,
    marg_top_left_block,
    safe_cwise_inverse,
    so3_exp,
    so3_log,
    stable_rotate_block_top_left,
)


def test_hat3():
    x = np.array([1.0, 2.0, 3.0])
    s = hat3(x)
    np.testing.assert_array_equal(s.T, -s)
    np.testing.assert_array_equal(hat3(-x), -s)


def test_hat3_is_cross_product():
    w = np.array([0.3, -1.2, 2.0])
    v = np.array([1.5, 0.5, -0.7])
    np.testing.assert_allclose(hat3(w) @ v, np.cross(w, v))


def test_safe_cwise_inverse():
    x0 = np.zeros(4)
    x0[0] = 1
    x0[2] = 1
    np.testing.assert_array_equal(safe_cwise_inverse(x0), x0)


def test_safe_cwise_inverse_custom_value():
    result = safe_cwise_inverse([2.0, 0.0], c=5.0)
    np.testing.assert_array_equal(result, [0.5, 5.0])


def test_stable_rotate_block_size1():
    h = np.array([[1, 2, 3], [4, 5, 6], [7, 8, 9]], dtype=float)
    b = np.array([1, 2, 3], dtype=float)
    h, b = stable_rotate_block_top_left(h, b, 2, 1)
    expected = np.array([[9, 7, 8], [3, 1, 2], [6, 4, 5]], dtype=float)
    np.testing.assert_array_equal(h, expected)
    np.testing.assert_array_equal(b, [3, 1, 2])


def test_stable_rotate_block_size2():
    h = np.zeros((6, 6))
    b = np.zeros(6)
    k = 0
    for i in range(3):
        b[i * 2:i * 2 + 2] = i
        for j in range(3):
            h[i * 2:i * 2 + 2, j * 2:j * 2 + 2] = k
            k += 1
    h, b = stable_rotate_block_top_left(h, b, 2, 2)
    np.testing.assert_array_equal(h[:2, :2], np.full((2, 2), 8.0))
    np.testing.assert_array_equal(b[:2], [2.0, 2.0])


def test_stable_rotate_block_solution_is_permuted():
    rng = np.random.default_rng(0)
    a = rng.uniform(-1, 1, size=(6, 100))
    h = a @ a.T
    x = np.array([1, 2, 3, 4, 5, 6], dtype=float)
    b = h @ x
    np.testing.assert_allclose(np.linalg.solve(h, b), x)

    h1, b1 = stable_rotate_block_top_left(h, b, 1, 2)
    x1 = np.linalg.solve(h1, b1)
    np.testing.assert_allclose(x1, [3, 4, 1, 2, 5, 6])


def test_stable_rotate_block_zero_is_identity():
    h = np.arange(9, dtype=float).reshape(3, 3)
    b = np.array([1.0, 2.0, 3.0])
    h1, b1 = stable_rotate_block_top_left(h, b, 0, 1)
    np.testing.assert_array_equal(h1, h)
    np.testing.assert_array_equal(b1, b)


@pytest.mark.parametrize("ind, size", [(-1, 1), (1, 0), (3, 1)])
def test_stable_rotate_block_invalid(ind, size):
    with pytest.raises(ValueError):
        stable_rotate_block_top_left(np.eye(3), np.zeros(3), ind, size)


def test_stable_rotate_block_shape_mismatch():
    with pytest.raises(ValueError):
        stable_rotate_block_top_left(np.eye(3), np.zeros(4), 1, 1)


def test_fill_lower_triangular():
    m = np.triu(np.array([[1, 2, 3], [4, 5, 6], [7, 8, 9]], dtype=float))
    np.testing.assert_array_equal(m, [[1, 2, 3], [0, 5, 6], [0, 0, 9]])
    expected = np.array([[1, 2, 3], [2, 5, 6], [3, 6, 9]], dtype=float)
    np.testing.assert_array_equal(fill_lower_triangular(m), expected)


def test_fill_upper_triangular():
    m = np.tril(np.array([[1, 2, 3], [4, 5, 6], [7, 8, 9]], dtype=float))
    np.testing.assert_array_equal(m, [[1, 0, 0], [4, 5, 0], [7, 8, 9]])
    expected = np.array([[1, 4, 7], [4, 5, 8], [7, 8, 9]], dtype=float)
    np.testing.assert_array_equal(fill_upper_triangular(m), expected)


def test_fill_triangular_requires_square():
    with pytest.raises(ValueError):
        fill_upper_triangular(np.zeros((2, 3)))


def test_make_symmetric():
    a = np.random.default_rng(1).uniform(-1, 1, size=(5, 5))
    s = make_symmetric(a)
    np.testing.assert_array_equal(s, s.T)


def test_marg_top_left_block():
    hsc = np.zeros((4, 4))
    hsc[:2, :2] = np.eye(2)
    hsc[:2, 2:] = 1.0
    hsc[2:, :2] = 1.0
    hsc[2:, 2:] = np.eye(2)
    bsc = np.ones(4)

    hpr, bpr = marg_top_left_block(hsc, bsc, 2)
    np.testing.assert_array_equal(hpr, [[-1, -2], [-2, -1]])
    np.testing.assert_array_equal(bpr, [-1, -1])


def test_marg_top_left_block_random():
    a = np.random.default_rng(2).uniform(-1, 1, size=(10, 40))
    hsc = make_symmetric(a @ a.T)
    bsc = np.ones(10)
    hpr, bpr = marg_top_left_block(hsc, bsc, 5)
    assert hpr.shape == (5, 5)
    assert bpr.shape == (5,)
    np.testing.assert_array_equal(hpr, hpr.T)


def test_marg_top_left_block_rejects_asymmetric():
    h = np.array([[1.0, 2.0], [3.0, 4.0]])
    with pytest.raises(ValueError):
        marg_top_left_block(h, np.ones(2), 1)


def test_marg_top_left_block_rejects_bad_dim():
    with pytest.raises(ValueError):
        marg_top_left_block(np.eye(3), np.ones(3), 0)


def test_so3_exp_log_round_trip():
    w = np.array([0.1, -0.4, 0.7])
    r = so3_exp(w)
    np.testing.assert_allclose(r @ r.T, np.eye(3), atol=1e-12)
    np.testing.assert_allclose(np.linalg.det(r), 1.0)
    np.testing.assert_allclose(so3_log(r), w, atol=1e-12)


def test_so3_exp_zero_is_identity():
    np.testing.assert_array_equal(so3_exp(np.zeros(3)), np.eye(3))
    np.testing.assert_array_equal(so3_log(np.eye(3)), np.zeros(3))


def test_so3_log_near_pi():
    w = np.array([0.0, 0.0, np.pi])
    np.testing.assert_allclose(np.abs(so3_log(so3_exp(w))), np.abs(w), atol=1e-6)