"""
Tests for the Sample / TimeSeries data model.

Tests cover:
    - WallVariant option mapping and column counts
    - Variant-specific Sample accessors
    - TimeSeries construction checks and immutability
"""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from wallseries.series import Sample, TimeSeries, WallVariant


# =============================================================================
# WallVariant
# =============================================================================

@pytest.mark.parametrize("option,variant,ncols", [
    ('adiabatic', WallVariant.ADIABATIC, 4),
    ('Twall', WallVariant.ISOTHERMAL, 5),
    ('qwall', WallVariant.ISOFLUX, 5),
])
def test_variant_from_option(option, variant, ncols):
    assert WallVariant.from_option(option) is variant
    assert variant.option == option
    assert variant.n_columns == ncols


def test_variant_unknown_option():
    with pytest.raises(ValueError, match="Unknown wall variant"):
        WallVariant.from_option('twall')


# =============================================================================
# Sample
# =============================================================================

def test_isothermal_sample_accessors():
    s = Sample(0.5, (1.0, 2.0, 3.0), 350.0, WallVariant.ISOTHERMAL)
    assert s.temperature == 350.0
    assert s.heat_flux is None


def test_isoflux_sample_accessors():
    s = Sample(0.5, (1.0, 2.0, 3.0), -120.0, WallVariant.ISOFLUX)
    assert s.heat_flux == -120.0
    assert s.temperature is None


def test_adiabatic_sample_heat_flux_is_zero():
    s = Sample(0.5, (1.0, 2.0, 3.0), None, WallVariant.ADIABATIC)
    assert s.heat_flux == 0.0
    assert s.temperature is None


def test_sample_str_matches_file_columns():
    s = Sample(0.1, (5.0, 0.0, -1.0), 450.0, WallVariant.ISOTHERMAL)
    assert str(s).split() == ['0.1', '450.0', '5.0', '0.0', '-1.0']

    a = Sample(2.0, (1.0, 2.0, 3.0), None, WallVariant.ADIABATIC)
    assert len(str(a).split()) == WallVariant.ADIABATIC.n_columns


# =============================================================================
# TimeSeries
# =============================================================================

def test_series_indexing(isothermal_series):
    assert len(isothermal_series) == 3
    assert isothermal_series[1] == Sample(0.1, (0.0, 0.0, 0.0), 500.0, WallVariant.ISOTHERMAL)
    assert isothermal_series[-1] == isothermal_series.last
    assert isothermal_series.first.time == 0.0
    assert isothermal_series.t_span == (0.0, 0.2)

    with pytest.raises(IndexError):
        isothermal_series[3]


def test_series_iteration(adiabatic_series):
    times = [s.time for s in adiabatic_series]
    assert times == [0.0, 1.0, 2.0, 4.0]
    assert all(s.payload is None for s in adiabatic_series)


def test_series_is_read_only(isothermal_series):
    with pytest.raises(ValueError):
        isothermal_series.times[0] = 1.0
    with pytest.raises(ValueError):
        isothermal_series.velocities[0, 0] = 1.0
    with pytest.raises(ValueError):
        isothermal_series.payloads[0] = 1.0
    with pytest.raises(AttributeError):
        isothermal_series.times = np.zeros(3)


def test_series_copies_input():
    times = np.array([0.0, 1.0])
    series = TimeSeries(times, np.zeros((2, 3)), None, WallVariant.ADIABATIC)
    times[0] = 5.0
    assert series.times[0] == 0.0


def test_series_rejects_empty():
    with pytest.raises(ValueError, match="at least one sample"):
        TimeSeries([], np.zeros((0, 3)), None, WallVariant.ADIABATIC)


def test_series_rejects_decreasing_times():
    with pytest.raises(ValueError, match="decrease at record 2"):
        TimeSeries([0.0, 1.0, 0.5], np.zeros((3, 3)), None, WallVariant.ADIABATIC)


def test_series_accepts_repeated_times():
    series = TimeSeries([0.0, 1.0, 1.0, 2.0], np.zeros((4, 3)), [1, 2, 3, 4], WallVariant.ISOFLUX)
    assert len(series) == 4


def test_series_payload_must_match_variant():
    with pytest.raises(ValueError, match="requires a temperature column"):
        TimeSeries([0.0], np.zeros((1, 3)), None, WallVariant.ISOTHERMAL)
    with pytest.raises(ValueError, match="no payload"):
        TimeSeries([0.0], np.zeros((1, 3)), [1.0], WallVariant.ADIABATIC)


def test_series_rejects_bad_velocity_shape():
    with pytest.raises(ValueError, match="velocities shape"):
        TimeSeries([0.0, 1.0], np.zeros((2, 2)), None, WallVariant.ADIABATIC)


def test_from_samples_round_trip(random_series):
    rebuilt = TimeSeries.from_samples(list(random_series))
    assert rebuilt.variant is WallVariant.ISOFLUX
    assert_allclose(rebuilt.times, random_series.times)
    assert_allclose(rebuilt.velocities, random_series.velocities)
    assert_allclose(rebuilt.payloads, random_series.payloads)


def test_from_samples_rejects_mixed_variants():
    samples = [
        Sample(0.0, (0.0, 0.0, 0.0), 300.0, WallVariant.ISOTHERMAL),
        Sample(1.0, (0.0, 0.0, 0.0), 10.0, WallVariant.ISOFLUX),
    ]
    with pytest.raises(ValueError, match="all samples"):
        TimeSeries.from_samples(samples)
