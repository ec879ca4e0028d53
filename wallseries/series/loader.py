"""
Time-series file reader and writer.

File format (ASCII, whitespace separated):

    N
    t_0     [payload_0]     vx_0     vy_0     vz_0
    ...
    t_{N-1} [payload_{N-1}] vx_{N-1} vy_{N-1} vz_{N-1}

The payload column is present for isothermal (temperature) and isoflux
(heat flux) walls only. Records are read token by token, so line breaks
inside the data carry no meaning.
"""

import re
from pathlib import Path
from typing import Union

import numpy as np
from loguru import logger

from .sample import TimeSeries, WallVariant
from ..constants import PAYLOAD_COL, TIME_COL, get_velocity_columns

# Sample count token: optional sign and decimal digits only
_COUNT_RE = re.compile(r"[+-]?[0-9]+")


class TimeSeriesLoadError(Exception):
    """Exception raised when a wall time-series file cannot be loaded."""
    pass


def load_time_series(filename: Union[str, Path], variant: WallVariant) -> TimeSeries:
    """
    Read a wall time-series file.

    Parameters
    ----------
    filename : str or Path
        Path to the data file.
    variant : WallVariant
        Expected wall variant; sets the number of columns per record.

    Returns
    -------
    TimeSeries
        Samples in file order.

    Raises
    ------
    TimeSeriesLoadError
        If the file cannot be opened, the sample count is missing or not a
        positive integer, the file is truncated, a field is not a number, or
        sample times decrease.
    """
    path = Path(filename)

    try:
        with open(path, 'r') as f:
            tokens = f.read().split()
    except OSError as e:
        raise TimeSeriesLoadError(f"Unable to open transient wall data file: {path} ({e.strerror})") from e
    except UnicodeDecodeError as e:
        raise TimeSeriesLoadError(f"Transient wall data file is not text: {path} ({e.reason} at byte {e.start})") from e

    if not tokens:
        raise TimeSeriesLoadError(f"Empty transient wall data file: {path}")

    if not _COUNT_RE.fullmatch(tokens[0]):
        raise TimeSeriesLoadError(
            f"Unable to read sample count from {path}: {tokens[0]!r} is not an integer"
        )
    n_samples = int(tokens[0])
    if n_samples < 1:
        raise TimeSeriesLoadError(f"Sample count in {path} must be >= 1, got {n_samples}")

    ncols = variant.n_columns
    n_needed = 1 + n_samples * ncols
    if len(tokens) < n_needed:
        n_complete = (len(tokens) - 1) // ncols
        raise TimeSeriesLoadError(
            f"Truncated data file {path}: expected {n_samples} records of {ncols} fields, "
            f"found {n_complete} complete records"
        )
    if len(tokens) > n_needed:
        logger.warning(f"Ignoring {len(tokens) - n_needed} trailing fields in {path}")

    data = np.empty((n_samples, ncols), dtype=np.float64)
    for k, token in enumerate(tokens[1:n_needed]):
        try:
            data[k // ncols, k % ncols] = float(token)
        except ValueError:
            raise TimeSeriesLoadError(
                f"Invalid number {token!r} in {path} (record {k // ncols + 1}, field {k % ncols + 1})"
            ) from None

    payloads = data[:, PAYLOAD_COL] if variant.has_payload else None
    velocities = data[:, get_velocity_columns(variant.has_payload)]

    try:
        series = TimeSeries(data[:, TIME_COL], velocities, payloads, variant, source=path)
    except ValueError as e:
        raise TimeSeriesLoadError(f"Invalid time series in {path}: {e}") from e

    t0, t1 = series.t_span
    logger.info(f"Loaded {variant.option} time series: {path} ({n_samples} samples, t = {t0:g} .. {t1:g} s)")

    return series


def save_time_series(series: TimeSeries, filename: Union[str, Path]) -> Path:
    """Write a series in the format read by load_time_series."""
    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        f.write(f"{len(series)}\n")
        for sample in series:
            f.write(f"{sample}\n")

    return path
