[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sweepkit"
version = "0.1.0"
description = "Numeric utilities for lidar-inertial odometry: running statistics, IMU preintegration, block marginalization, grids and timers"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "imu",
    "preintegration",
    "odometry",
    "statistics",
    "linear-algebra",
    "timing",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sweepkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
