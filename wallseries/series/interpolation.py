"""
Piecewise-linear interpolation of wall time series.

    q <= t_0            ->  sample 0 unchanged      (zeroth-order hold)
    q >= t_{N-1}        ->  sample N-1 unchanged    (zeroth-order hold)
    t_i <= q <= t_{i+1} ->  s * x_i + t * x_{i+1},  t = (q - t_i) / (t_{i+1} - t_i),  s = 1 - t

x is every velocity component and, for isothermal/isoflux walls, the
temperature or heat flux. The adiabatic heat flux is not interpolated; it is
ADIABATIC_HEAT_FLUX at all times.

Both a scalar path (one query, returns a Sample) and a JAX path (vector of
queries, returns arrays) are provided. They select the same bracket.
"""

from typing import Optional, Tuple

import numpy as np
import numpy.typing as npt

from .sample import Sample, TimeSeries
from ..physics.jax_config import jax, jnp

NDArrayFloat = npt.NDArray[np.floating]


class InterpolationError(Exception):
    """No bracketing sample pair found for an in-range query time."""
    pass


def find_bracket(times: NDArrayFloat, query_time: float, start: int = 0) -> int:
    """
    Find the first i >= start with times[i] <= query_time <= times[i+1].

    Raises
    ------
    InterpolationError
        If no such pair exists (query outside the series, or unsorted times).
    """
    for i in range(start, len(times) - 1):
        if times[i] <= query_time <= times[i + 1]:
            return i
    raise InterpolationError(
        f"No interpolation bracket for t={query_time!r} in series spanning "
        f"[{times[0]!r}, {times[-1]!r}] (search started at sample {start})"
    )


def _blend(series: TimeSeries, i: int, query_time: float) -> Sample:
    """Linear blend of samples i and i+1 at query_time."""
    times = series.times
    t_lo = float(times[i])
    t_hi = float(times[i + 1])

    if t_hi == t_lo:
        # Zero-width bracket (repeated time stamp)
        return series[i]._replace(time=query_time)

    t = (query_time - t_lo) / (t_hi - t_lo)
    s = 1.0 - t

    v_lo = series.velocities[i]
    v_hi = series.velocities[i + 1]
    velocity = (
        s * float(v_lo[0]) + t * float(v_hi[0]),
        s * float(v_lo[1]) + t * float(v_hi[1]),
        s * float(v_lo[2]) + t * float(v_hi[2]),
    )

    payload = None
    if series.payloads is not None:
        payload = s * float(series.payloads[i]) + t * float(series.payloads[i + 1])

    return Sample(time=query_time, velocity=velocity, payload=payload, variant=series.variant)


def _query_time(query_time) -> float:
    query_time = float(query_time)
    if not np.isfinite(query_time):
        raise ValueError(f"Query time must be finite, got {query_time}")
    return query_time


def interpolate(series: TimeSeries, query_time: float) -> Sample:
    """
    Boundary state at query_time.

    Parameters
    ----------
    series : TimeSeries
        Loaded wall time series.
    query_time : float
        Simulation time [s]. Need not be monotonic across calls.

    Returns
    -------
    Sample
        An endpoint sample unchanged if query_time is outside the series,
        otherwise the linear blend of the bracketing pair with time=query_time.

    Raises
    ------
    ValueError
        If query_time is NaN or infinite.
    """
    query_time = _query_time(query_time)
    times = series.times

    if query_time <= times[0]:
        return series.first
    if query_time >= times[-1]:
        return series.last

    return _blend(series, find_bracket(times, query_time), query_time)


class BracketCursor:
    """
    Interpolator that remembers the last bracket found.

    Forward-marching queries resume the scan at the previous bracket instead
    of the first sample. A query earlier than the remembered bracket rescans
    from the start. Results are identical to interpolate(). A cursor holds
    per-caller state; do not share one between threads.
    """

    def __init__(self, series: TimeSeries):
        self.series = series
        self._last = 0

    def __call__(self, query_time: float) -> Sample:
        query_time = _query_time(query_time)
        times = self.series.times

        if query_time <= times[0]:
            return self.series.first
        if query_time >= times[-1]:
            return self.series.last

        start = self._last if times[self._last] < query_time else 0
        i = find_bracket(times, query_time, start)
        self._last = i
        return _blend(self.series, i, query_time)

    def reset(self):
        self._last = 0


@jax.jit
def _interp_columns_jax(times: jnp.ndarray, values: jnp.ndarray, query: jnp.ndarray) -> jnp.ndarray:
    """
    Clamped linear interpolation of every column of values at each query.

    times: (N,) with N >= 2, values: (N, K), query: (M,)  ->  (M, K)
    """
    n = times.shape[0]
    # First index with times[hi] >= q is the right end of the first bracket
    hi = jnp.clip(jnp.searchsorted(times, query, side='left'), 1, n - 1)
    lo = hi - 1

    t_lo = times[lo]
    dt = times[hi] - t_lo
    safe_dt = jnp.where(dt > 0.0, dt, 1.0)
    w = jnp.where(dt > 0.0, (query - t_lo) / safe_dt, 0.0)
    w = w[:, None]

    out = (1.0 - w) * values[lo] + w * values[hi]
    out = jnp.where((query <= times[0])[:, None], values[0], out)
    out = jnp.where((query >= times[-1])[:, None], values[-1], out)
    return out


def interpolate_many(series: TimeSeries,
                     query_times: npt.ArrayLike) -> Tuple[NDArrayFloat, Optional[NDArrayFloat]]:
    """
    Evaluate a series at many times at once.

    Parameters
    ----------
    series : TimeSeries
        Loaded wall time series.
    query_times : array_like, shape (M,)
        Query times [s], any order.

    Returns
    -------
    velocities : ndarray, shape (M, 3)
    payloads : ndarray, shape (M,) or None
        Temperature or heat flux; None for adiabatic walls.
    """
    query = np.asarray(query_times, dtype=np.float64).reshape(-1)

    if series.payloads is not None:
        values = np.column_stack([series.velocities, series.payloads])
    else:
        values = np.asarray(series.velocities)

    if len(series) == 1:
        out = np.broadcast_to(values[0], (query.shape[0], values.shape[1])).copy()
    else:
        out = np.asarray(_interp_columns_jax(jnp.asarray(series.times),
                                             jnp.asarray(values),
                                             jnp.asarray(query)))

    velocities = out[:, :3]
    payloads = out[:, 3] if series.payloads is not None else None
    return velocities, payloads
