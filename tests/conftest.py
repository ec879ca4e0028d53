"""
Shared pytest fixtures for the test suite.

Data files are written into pytest's tmp_path so every test reads a real
file through the loader.
"""

import sys
from pathlib import Path

import pytest
import numpy as np

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wallseries.series import TimeSeries, WallVariant


# =============================================================================
# Data file contents
# =============================================================================

# Isothermal: time T vx vy vz
ISOTHERMAL_3 = """3
0 400 0 0 0
0.1 500 0 0 0
0.2 600 10 0 0
"""

# Adiabatic: time vx vy vz
ADIABATIC_4 = """4
0.0  0.0  0.0 0.0
1.0  2.0 -1.0 0.5
2.0  2.0  1.0 0.5
4.0 -2.0  0.0 1.5
"""

# Isoflux: time q vx vy vz
ISOFLUX_3 = """3
-1.0 1000.0 0.0 0.0 0.0
 0.0 3000.0 1.0 2.0 3.0
 0.5 2000.0 1.0 2.0 3.0
"""


@pytest.fixture
def write_data(tmp_path):
    """Return a helper that writes text to a file in tmp_path."""
    def _write(text, name="wall.dat"):
        path = tmp_path / name
        path.write_text(text)
        return path
    return _write


@pytest.fixture
def isothermal_file(write_data):
    return write_data(ISOTHERMAL_3, "isothermal.dat")


@pytest.fixture
def adiabatic_file(write_data):
    return write_data(ADIABATIC_4, "adiabatic.dat")


@pytest.fixture
def isoflux_file(write_data):
    return write_data(ISOFLUX_3, "isoflux.dat")


# =============================================================================
# In-memory series
# =============================================================================

@pytest.fixture
def isothermal_series():
    """The three-sample isothermal series, built without a file."""
    return TimeSeries(
        times=[0.0, 0.1, 0.2],
        velocities=[[0, 0, 0], [0, 0, 0], [10, 0, 0]],
        payloads=[400.0, 500.0, 600.0],
        variant=WallVariant.ISOTHERMAL,
    )


@pytest.fixture
def random_series():
    """Random non-uniformly spaced isoflux series for property checks."""
    rng = np.random.default_rng(1234)
    n = 25
    times = np.cumsum(rng.uniform(0.01, 0.5, n)) - 1.0
    velocities = rng.normal(size=(n, 3))
    payloads = rng.uniform(-500.0, 500.0, n)
    return TimeSeries(times, velocities, payloads, WallVariant.ISOFLUX)


@pytest.fixture
def adiabatic_series():
    return TimeSeries(
        times=[0.0, 1.0, 2.0, 4.0],
        velocities=[[0, 0, 0], [2, -1, 0.5], [2, 1, 0.5], [-2, 0, 1.5]],
        payloads=None,
        variant=WallVariant.ADIABATIC,
    )
