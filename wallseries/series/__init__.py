"""
Wall time-series ingestion and interpolation.

This package provides:
    - Sample / TimeSeries data model for the three wall variants
    - Reader and writer for the time-series data file format
    - Scalar and vectorised (JAX) clamped linear interpolation
"""

from .sample import (
    WallVariant,
    Sample,
    TimeSeries,
)

from .loader import (
    TimeSeriesLoadError,
    load_time_series,
    save_time_series,
)

from .interpolation import (
    InterpolationError,
    BracketCursor,
    find_bracket,
    interpolate,
    interpolate_many,
)

__all__ = [
    # Data model
    'WallVariant',
    'Sample',
    'TimeSeries',
    # Loader
    'TimeSeriesLoadError',
    'load_time_series',
    'save_time_series',
    # Interpolation
    'InterpolationError',
    'BracketCursor',
    'find_bracket',
    'interpolate',
    'interpolate_many',
]
