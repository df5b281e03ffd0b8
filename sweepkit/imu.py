"""IMU samples, biases, noise and on-manifold preintegration."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .linalg import hat3, so3_exp
from .mathutil import sq

DIM_PVQ = 9
DIM_BIAS = 6
DIM_FULL = DIM_PVQ + DIM_BIAS


def _vec3(v) -> np.ndarray:
    return np.array(v, dtype=float).reshape(3)


def _zeros3() -> np.ndarray:
    return np.zeros(3)


@dataclass
class ImuBias:
    """Accelerometer and gyroscope bias."""

    acc: np.ndarray = field(default_factory=_zeros3)
    gyr: np.ndarray = field(default_factory=_zeros3)

    def __post_init__(self) -> None:
        self.acc = _vec3(self.acc)
        self.gyr = _vec3(self.gyr)


@dataclass
class ImuData:
    """A time-stamped IMU sample."""

    time: float = 0.0
    acc: np.ndarray = field(default_factory=_zeros3)
    gyr: np.ndarray = field(default_factory=_zeros3)

    def __post_init__(self) -> None:
        self.acc = _vec3(self.acc)
        self.gyr = _vec3(self.gyr)

    def has_nan(self) -> bool:
        return bool(np.isnan(self.acc).any() or np.isnan(self.gyr).any())

    def debias(self, bias: ImuBias) -> ImuData:
        """Remove bias in place and return self."""
        self.acc -= bias.acc
        self.gyr -= bias.gyr
        return self

    def debiased(self, bias: ImuBias) -> ImuData:
        """Return a new sample with bias removed."""
        return ImuData(self.time, self.acc - bias.acc, self.gyr - bias.gyr)


@dataclass
class ImuNoise:
    """Discrete-time IMU noise variances."""

    acc_var: np.ndarray = field(default_factory=_zeros3)
    gyr_var: np.ndarray = field(default_factory=_zeros3)
    bias_acc_var: np.ndarray = field(default_factory=_zeros3)
    bias_gyr_var: np.ndarray = field(default_factory=_zeros3)

    def __post_init__(self) -> None:
        self.acc_var = _vec3(self.acc_var)
        self.gyr_var = _vec3(self.gyr_var)
        self.bias_acc_var = _vec3(self.bias_acc_var)
        self.bias_gyr_var = _vec3(self.bias_gyr_var)

    @classmethod
    def from_sigmas(
        cls,
        acc_sigma: float,
        gyr_sigma: float,
        bias_acc_sigma: float = 0.0,
        bias_gyr_sigma: float = 0.0,
    ) -> ImuNoise:
        """Build noise from standard deviations, equal on every axis."""
        return cls(
            np.full(3, sq(acc_sigma)),
            np.full(3, sq(gyr_sigma)),
            np.full(3, sq(bias_acc_sigma)),
            np.full(3, sq(bias_gyr_sigma)),
        )


@dataclass
class PreintDelta:
    """Preintegrated position, velocity and rotation (as a matrix)."""

    p: np.ndarray = field(default_factory=_zeros3)
    v: np.ndarray = field(default_factory=_zeros3)
    q: np.ndarray = field(default_factory=lambda: np.eye(3))

    def copy(self) -> PreintDelta:
        return PreintDelta(self.p.copy(), self.v.copy(), self.q.copy())


@dataclass
class ImuPreint:
    """IMU preintegration with covariance P (9x9) and bias Jacobian J (9x6)."""

    bias_hat: ImuBias = field(default_factory=ImuBias)
    num_imus: int = 0
    duration: float = 0.0
    delta: PreintDelta = field(default_factory=PreintDelta)
    P: np.ndarray = field(default_factory=lambda: np.zeros((DIM_PVQ, DIM_PVQ)))
    J: np.ndarray = field(default_factory=lambda: np.zeros((DIM_PVQ, DIM_BIAS)))

    def update(self, dt: float, imu: ImuData, noise: ImuNoise) -> None:
        """Integrate one IMU sample over dt."""
        self.num_imus += 1
        self.duration += dt

        acc = imu.acc - self.bias_hat.acc
        gyr = imu.gyr - self.bias_hat.gyr

        a0 = self.delta.q @ acc
        dp = self.delta.v * dt + 0.5 * a0 * dt * dt
        dv = a0 * dt
        dq = so3_exp(gyr * dt)

        i3 = np.eye(3)
        rot = self.delta.q
        f = np.eye(DIM_PVQ)
        f[0:3, 3:6] = i3 * dt
        f[3:6, 6:9] = rot @ hat3(acc * (-dt))
        f[6:9, 6:9] = dq.T

        self.P = f @ self.P @ f.T

        j_pvq_imu = np.zeros((DIM_PVQ, DIM_BIAS))
        j_pvq_imu[3:6, 0:3] = rot * dt
        j_pvq_imu[6:9, 3:6] = i3 * dt

        q = np.concatenate([noise.acc_var, noise.gyr_var])
        self.P = self.P + j_pvq_imu @ np.diag(q / dt) @ j_pvq_imu.T

        self.J = f @ self.J - j_pvq_imu

        self.delta.p = self.delta.p + dp
        self.delta.v = self.delta.v + dv
        self.delta.q = self.delta.q @ dq

    def reset(self) -> None:
        self.num_imus = 0
        self.duration = 0.0
        self.delta = PreintDelta()
        self.P = np.zeros((DIM_PVQ, DIM_PVQ))
        self.J = np.zeros((DIM_PVQ, DIM_BIAS))

    def bias_corrected_delta(self, bias_new: ImuBias) -> PreintDelta:
        """First-order correction of the preintegrated delta for a new bias."""
        bias_delta = np.concatenate([bias_new.acc - self.bias_hat.acc, bias_new.gyr - self.bias_hat.gyr])
        corr = self.delta.copy()
        corr.p = corr.p + self.J[0:3] @ bias_delta
        corr.v = corr.v + self.J[3:6] @ bias_delta
        corr.q = corr.q @ so3_exp(self.J[6:9, 3:6] @ bias_delta[3:])
        return corr

    def info_pvq(self) -> np.ndarray:
        """Information matrix (inverse covariance) of the delta, read from the upper triangle of P."""
        sym = np.triu(self.P) + np.triu(self.P, 1).T
        lower = np.linalg.cholesky(sym)
        eye = np.eye(DIM_PVQ)
        y = np.linalg.solve(lower, eye)
        return np.linalg.solve(lower.T, y)