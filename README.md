# sweepkit

Small numeric building blocks for lidar-inertial odometry and similar
estimation code, built on numpy.

## What is inside

- `sweepkit.mathutil`: `deg2rad` / `rad2deg`, `sq`, `is_power_of_2`,
  rounding helpers (`round_nearest`, `round2`), polynomial approximations
  (`asin_approx`, `asin_approx_3rd`, `atan2_approx`, `atan_approx_6th`,
  `atan2_approx_6th`), `SinCos`, running mean/variance (`MeanVar`) and
  mean/covariance (`MeanCovar`), a closed `Interval`, `matrix_sqrt_utu`
  and `make_right_handed`.
- `sweepkit.memsize`: `Memsize` (with an `nbytes` field) built by
  `from_bytes`, `kilobytes`, `megabytes`, `gigabytes`, and
  `format_bytes` for human-readable sizes such as `2.441kb`.
- `sweepkit.stats`: `Stats`, a running count/sum/min/max/last/mean
  accumulator that can be combined with `+` and `+=`.
- `sweepkit.timer`: `Timer`, a nanosecond stopwatch with `start`, `stop`,
  `resume`, `elapsed` and `reset`; it starts when created.
- `sweepkit.grid2d`: `Grid2d`, a fixed-size row-major 2-D grid backed by a
  numpy array, indexed by flat index or `(row, col)`, with an `array` view.
- `sweepkit.parallel`: `BlockedRange`, `parallel_for` and
  `parallel_reduce`, which run the blocks of an integer range on a thread
  pool (a range with `gsize <= 0` is a single block, run in the calling
  thread).
- `sweepkit.cvtypes`: image type codes (`make_type`, `cv_type_str`),
  `Range` arithmetic, `mat_size`, `zero_like`, `mat_set_roi`,
  `mat_set_win` and `point_sq_norm` for numpy images.
- `sweepkit.linalg`: `stable_rotate_block_top_left`,
  `fill_upper_triangular`, `fill_lower_triangular`, `make_symmetric`,
  `safe_cwise_inverse`, `hat3`, `so3_exp` / `so3_log`, and
  Schur-complement marginalization with `marg_top_left_block`. These
  return new arrays rather than changing their inputs.
- `sweepkit.imu`: `ImuData`, `ImuBias`, `ImuNoise`, `PreintDelta` and
  `ImuPreint` for IMU preintegration with covariance `P`, bias Jacobian
  `J`, first-order bias correction and the information matrix
  (`info_pvq`).
- `sweepkit.summary`: named statistics guarded by a lock
  (`StatsSummary`) and timing summaries in nanoseconds (`TimerSummary`)
  with `ManualTimer` and the context-manager `ScopedTimer`, plus
  `format_duration` for report lines.

## Install

```
pip install .
```

## Examples

Running statistics:

```python
from sweepkit.stats import Stats

s = Stats()
for v in (1.0, 3.0, 2.0):
    s.add(v)
print(s.count(), s.mean(), s.min(), s.max())
```

Memory sizes:

```python
from sweepkit.memsize import from_bytes, kilobytes

print(from_bytes(2500))   # 2.441kb
print(kilobytes(2))       # 2kb
```

Timing a block of code:

```python
from sweepkit.summary import TimerSummary

timers = TimerSummary("timers")
with timers.scoped("work"):
    sum(range(100_000))
print(timers.report_all(sort=True))
```

IMU preintegration:

```python
from sweepkit.imu import ImuData, ImuNoise, ImuPreint

preint = ImuPreint()
noise = ImuNoise.from_sigmas(1.0, 2.0)
for _ in range(10):
    preint.update(0.1, ImuData(), noise)
print(preint.num_imus, preint.duration)
```

## What it does not do

sweepkit is a library of building blocks only. It has no command-line
tool, does not estimate or predict trajectories, does not open windows or
display images, and does not convert to or from robotics middleware
messages.

## Tests

```
pip install .[test]
pytest
```