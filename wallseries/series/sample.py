"""
Time-series data model for transient viscous walls.

A transient wall reads its boundary state from a file of time-stamped
samples. Every sample carries the wall velocity; depending on the wall's
thermal variant it also carries a temperature or a heat flux:

    adiabatic  (option 'adiabatic'): time vx vy vz
    isothermal (option 'Twall'):     time T  vx vy vz
    isoflux    (option 'qwall'):     time q  vx vy vz

TimeSeries stores the samples column-wise in read-only NumPy arrays so that
the scalar interpolator and the vectorised JAX kernel share one layout.
"""

from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, NamedTuple, Optional, Tuple, Union

import numpy as np
import numpy.typing as npt

from ..constants import ADIABATIC_HEAT_FLUX, N_VEL, get_record_width

NDArrayFloat = npt.NDArray[np.floating]


class WallVariant(Enum):
    """Thermal variant of a transient wall, keyed by its configuration option."""

    ADIABATIC = 'adiabatic'
    ISOTHERMAL = 'Twall'
    ISOFLUX = 'qwall'

    @property
    def option(self) -> str:
        """Configuration option that declares this variant."""
        return self.value

    @property
    def has_payload(self) -> bool:
        """Whether samples carry a scalar besides velocity."""
        return self is not WallVariant.ADIABATIC

    @property
    def n_columns(self) -> int:
        """Fields per data record."""
        return get_record_width(self.has_payload)

    @property
    def payload_name(self) -> Optional[str]:
        return {
            WallVariant.ADIABATIC: None,
            WallVariant.ISOTHERMAL: 'temperature',
            WallVariant.ISOFLUX: 'heat_flux',
        }[self]

    @classmethod
    def from_option(cls, option: str) -> 'WallVariant':
        """
        Map a configuration option name to its variant.

        Raises
        ------
        ValueError
            If the option is not one of 'adiabatic', 'Twall', 'qwall'.
        """
        for variant in cls:
            if variant.value == option:
                return variant
        raise ValueError(f"Unknown wall variant option: {option!r}. "
                         f"Expected one of {[v.value for v in cls]}")


class Sample(NamedTuple):
    """Boundary state at one instant."""

    time: float
    velocity: Tuple[float, float, float]
    payload: Optional[float]
    variant: WallVariant

    @property
    def temperature(self) -> Optional[float]:
        """Wall temperature [K] (isothermal only)."""
        if self.variant is WallVariant.ISOTHERMAL:
            return self.payload
        return None

    @property
    def heat_flux(self) -> Optional[float]:
        """Wall heat flux [W/m²]; exactly 0 for adiabatic walls."""
        if self.variant is WallVariant.ISOFLUX:
            return self.payload
        if self.variant is WallVariant.ADIABATIC:
            return ADIABATIC_HEAT_FLUX
        return None

    def __str__(self) -> str:
        # Same column order as a data file record
        fields = [self.time]
        if self.variant.has_payload:
            fields.append(self.payload)
        fields.extend(self.velocity)
        return ' '.join(repr(float(v)) for v in fields)


class TimeSeries:
    """
    Immutable, time-ordered samples of one wall variant.

    Parameters
    ----------
    times : array_like, shape (N,)
        Sample times [s], non-decreasing.
    velocities : array_like, shape (N, 3)
        Wall velocity at each sample [m/s].
    payloads : array_like, shape (N,), optional
        Temperature [K] or heat flux [W/m²]. Required for isothermal and
        isoflux walls, must be None for adiabatic walls.
    variant : WallVariant
        Thermal variant shared by every sample.
    source : str or Path, optional
        File the series was read from.
    """

    __slots__ = ('_times', '_velocities', '_payloads', '_variant', '_source')

    def __init__(self,
                 times: npt.ArrayLike,
                 velocities: npt.ArrayLike,
                 payloads: Optional[npt.ArrayLike],
                 variant: WallVariant,
                 source: Optional[Union[str, Path]] = None):
        times = np.array(times, dtype=np.float64).reshape(-1)
        velocities = np.array(velocities, dtype=np.float64)
        n = times.shape[0]

        if n == 0:
            raise ValueError("TimeSeries must contain at least one sample")
        if velocities.shape != (n, N_VEL):
            raise ValueError(f"velocities shape {velocities.shape} != ({n}, {N_VEL})")

        if variant.has_payload:
            if payloads is None:
                raise ValueError(f"{variant.option} series requires a {variant.payload_name} column")
            payloads = np.array(payloads, dtype=np.float64).reshape(-1)
            if payloads.shape != (n,):
                raise ValueError(f"payloads shape {payloads.shape} != ({n},)")
            payloads.setflags(write=False)
        elif payloads is not None:
            raise ValueError("adiabatic series carries no payload column")

        if not np.all(np.isfinite(times)):
            raise ValueError("sample times must be finite")
        decreasing = np.nonzero(np.diff(times) < 0.0)[0]
        if decreasing.size > 0:
            i = int(decreasing[0])
            raise ValueError(f"sample times decrease at record {i + 1}: "
                             f"t[{i}]={times[i]!r} > t[{i + 1}]={times[i + 1]!r}")

        times.setflags(write=False)
        velocities.setflags(write=False)

        self._times = times
        self._velocities = velocities
        self._payloads = payloads
        self._variant = variant
        self._source = Path(source) if source is not None else None

    @classmethod
    def from_samples(cls, samples: Iterable[Sample],
                     variant: Optional[WallVariant] = None) -> 'TimeSeries':
        """Build a series from Sample objects, all of one variant."""
        samples = list(samples)
        if not samples:
            raise ValueError("TimeSeries must contain at least one sample")
        if variant is None:
            variant = samples[0].variant
        if any(s.variant is not variant for s in samples):
            raise ValueError(f"all samples must be {variant.option}")

        times = [s.time for s in samples]
        velocities = [s.velocity for s in samples]
        payloads = [s.payload for s in samples] if variant.has_payload else None
        return cls(times, velocities, payloads, variant)

    @property
    def times(self) -> NDArrayFloat:
        return self._times

    @property
    def velocities(self) -> NDArrayFloat:
        return self._velocities

    @property
    def payloads(self) -> Optional[NDArrayFloat]:
        return self._payloads

    @property
    def variant(self) -> WallVariant:
        return self._variant

    @property
    def source(self) -> Optional[Path]:
        return self._source

    @property
    def first(self) -> Sample:
        return self[0]

    @property
    def last(self) -> Sample:
        return self[-1]

    @property
    def t_span(self) -> Tuple[float, float]:
        """(first time, last time) covered by the series."""
        return float(self._times[0]), float(self._times[-1])

    def __len__(self) -> int:
        return self._times.shape[0]

    def __getitem__(self, i: int) -> Sample:
        if not isinstance(i, (int, np.integer)):
            raise TypeError(f"TimeSeries indices must be integers, not {type(i).__name__}")
        n = len(self)
        if i < -n or i >= n:
            raise IndexError(f"sample index {i} out of range for series of length {n}")
        v = self._velocities[i]
        payload = float(self._payloads[i]) if self._payloads is not None else None
        return Sample(
            time=float(self._times[i]),
            velocity=(float(v[0]), float(v[1]), float(v[2])),
            payload=payload,
            variant=self._variant,
        )

    def __iter__(self) -> Iterator[Sample]:
        for i in range(len(self)):
            yield self[i]

    def __repr__(self) -> str:
        t0, t1 = self.t_span
        return (f"TimeSeries(variant={self._variant.option}, n={len(self)}, "
                f"t=[{t0:g}, {t1:g}], source={self._source})")
