"""Numeric utilities for lidar-inertial odometry: statistics, IMU preintegration, linear algebra, grids and timers."""

__version__ = "0.1.0"

__all__ = [
    "cvtypes",
    "grid2d",
    "imu",
    "linalg",
    "mathutil",
    "memsize",
    "parallel",
    "stats",
    "summary",
    "timer",
]