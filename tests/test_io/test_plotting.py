"""
Tests for wall history output (wallseries/io/plotting.py).

Validates:
1. PDF generation for each variant
2. History table layout and values
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from wallseries.io import plot_wall_history, write_history_table
from wallseries.series import WallVariant, interpolate_many


def test_plot_isothermal_history(tmp_path, isothermal_series):
    times = np.linspace(-0.1, 0.3, 41)
    velocities, payload = interpolate_many(isothermal_series, times)

    path = plot_wall_history(times, velocities, payload, WallVariant.ISOTHERMAL,
                             str(tmp_path / "plots"), case_name="hot",
                             series=isothermal_series)

    assert path.endswith("hot_history.pdf")
    with open(path, 'rb') as f:
        assert f.read(5) == b'%PDF-'


def test_plot_adiabatic_history(tmp_path, adiabatic_series):
    times = np.linspace(0.0, 4.0, 9)
    velocities, _ = interpolate_many(adiabatic_series, times)

    path = plot_wall_history(times, velocities, np.zeros_like(times), WallVariant.ADIABATIC,
                             str(tmp_path), case_name="insulated", series=adiabatic_series)
    assert (tmp_path / "insulated_history.pdf").exists()
    assert path == str(tmp_path / "insulated_history.pdf")


@pytest.mark.parametrize("variant,column", [
    (WallVariant.ISOTHERMAL, "temperature"),
    (WallVariant.ISOFLUX, "heat_flux"),
    (WallVariant.ADIABATIC, "heat_flux"),
])
def test_history_table(tmp_path, variant, column):
    times = np.array([0.0, 0.5, 1.0])
    velocities = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]])
    payload = np.array([10.0, 20.0, 30.0])

    path = write_history_table(times, velocities, payload, variant, str(tmp_path), case_name="w")

    with open(path) as f:
        header = f.readline()
    assert header.split() == ['#', 'time', column, 'vx', 'vy', 'vz']

    data = np.loadtxt(path)
    assert data.shape == (3, 5)
    assert_allclose(data[:, 0], times)
    assert_allclose(data[:, 1], payload)
    assert_allclose(data[:, 2:], velocities)
