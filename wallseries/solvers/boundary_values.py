"""
Boundary values for transient viscous walls.

Each transient wall owns one TimeSeries read at setup. At every evaluation
the wall's series is interpolated at the current simulation time and the
result is broadcast to the wall's faces:

    adiabatic:  wall_velocity, wall_heat_flux = 0
    isothermal: wall_velocity, wall_temperature
    isoflux:    wall_velocity, wall_heat_flux

Which faces belong to which wall, and when evaluation happens, is decided
by the host solver. Evaluation does no I/O and mutates nothing, so it can
be called concurrently for different faces and walls.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np
import numpy.typing as npt
from loguru import logger

from ..constants import ADIABATIC_HEAT_FLUX, N_VEL
from ..series.interpolation import interpolate, interpolate_many
from ..series.loader import load_time_series
from ..series.sample import TimeSeries, WallVariant

NDArrayFloat = npt.NDArray[np.floating]


class WallValues(NamedTuple):
    """Boundary state of one wall at one time."""
    velocity: Tuple[float, float, float]   # Wall velocity [m/s]
    temperature: Optional[float]           # Wall temperature [K] (isothermal)
    heat_flux: Optional[float]             # Wall heat flux [W/m²] (isoflux, adiabatic)


class FaceValues(NamedTuple):
    """Solver-visible per-face fields for one wall."""
    wall_velocity: NDArrayFloat                 # (n_faces, 3)
    wall_temperature: Optional[NDArrayFloat]    # (n_faces,) isothermal only
    wall_heat_flux: Optional[NDArrayFloat]      # (n_faces,) isoflux and adiabatic


@dataclass(frozen=True)
class TransientWall:
    """A viscous wall whose state follows a time series."""

    name: str
    variant: WallVariant
    series: TimeSeries

    def __post_init__(self):
        if self.series.variant is not self.variant:
            raise ValueError(f"Wall '{self.name}' is {self.variant.option} but its series is "
                             f"{self.series.variant.option}")

    def wall_values(self, time: float) -> WallValues:
        """Interpolated wall state at the given simulation time."""
        sample = interpolate(self.series, time)
        return WallValues(
            velocity=sample.velocity,
            temperature=sample.temperature,
            heat_flux=sample.heat_flux,
        )


class BoundaryValueProducer:
    """
    Registry of transient walls and per-face evaluation.

    Example
    -------
    >>> producer = BoundaryValueProducer()
    >>> producer.add_wall('inner', WallVariant.ISOTHERMAL, series)
    >>> values = producer.evaluate_faces('inner', n_faces=128, time=0.05)
    >>> values.wall_temperature.shape
    (128,)
    """

    def __init__(self):
        self._walls: Dict[str, TransientWall] = {}

    @classmethod
    def from_config(cls, config) -> 'BoundaryValueProducer':
        """
        Load every transient wall of a CaseConfig.

        Parameters
        ----------
        config : CaseConfig
            Case configuration; each WallConfig names a variant and file.

        Raises
        ------
        TimeSeriesLoadError
            If any wall's data file cannot be loaded.
        ConfigError
            If a wall lacks the transient marker or sets it to false.
        """
        from ..config.schema import ConfigError

        producer = cls()
        for wall in config.walls:
            if wall.transient is None:
                raise ConfigError(f"Wall '{wall.name}' is missing the transient marker")
            if not wall.transient:
                raise ConfigError(f"Wall '{wall.name}' is not marked transient")
            producer.load_wall(wall.name, wall.get_variant(), wall.filename)

        logger.info(f"Transient walls ready: {', '.join(producer.names) or '(none)'}")
        return producer

    def add_wall(self, name: str, variant: WallVariant, series: TimeSeries) -> TransientWall:
        """Register a wall with an already-loaded series."""
        if name in self._walls:
            raise ValueError(f"Transient wall '{name}' already registered")
        wall = TransientWall(name=name, variant=variant, series=series)
        self._walls[name] = wall
        return wall

    def load_wall(self, name: str, variant: WallVariant, filename: Union[str, Path]) -> TransientWall:
        """Read a wall's data file and register it."""
        series = load_time_series(filename, variant)
        return self.add_wall(name, variant, series)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._walls)

    def __contains__(self, name: str) -> bool:
        return name in self._walls

    def __len__(self) -> int:
        return len(self._walls)

    def wall(self, name: str) -> TransientWall:
        try:
            return self._walls[name]
        except KeyError:
            raise KeyError(f"No transient wall named '{name}'") from None

    def wall_values(self, boundary: str, time: float) -> WallValues:
        """Interpolated state of one wall."""
        return self.wall(boundary).wall_values(time)

    def evaluate_faces(self, boundary: str, n_faces: int, time: float) -> FaceValues:
        """
        Per-face boundary fields for one wall.

        Parameters
        ----------
        boundary : str
            Wall name.
        n_faces : int
            Number of faces on the wall.
        time : float
            Current simulation time [s].

        Returns
        -------
        FaceValues
            wall_velocity (n_faces, 3) plus wall_temperature or wall_heat_flux
            (n_faces,); the other is None.
        """
        wall = self.wall(boundary)
        values = wall.wall_values(time)

        wall_velocity = np.empty((n_faces, N_VEL))
        wall_velocity[:] = values.velocity

        wall_temperature = None
        wall_heat_flux = None
        if values.temperature is not None:
            wall_temperature = np.full(n_faces, values.temperature)
        if values.heat_flux is not None:
            wall_heat_flux = np.full(n_faces, values.heat_flux)

        return FaceValues(wall_velocity, wall_temperature, wall_heat_flux)

    def evaluate(self, face_map: Mapping[str, Sequence[int]], time: float) -> Dict[str, FaceValues]:
        """
        Per-face fields for several walls.

        Parameters
        ----------
        face_map : mapping of str to sequence of int
            Face ids of each wall, keyed by wall name.
        time : float
            Current simulation time [s].

        Returns
        -------
        dict of str to FaceValues
            Rows follow the order of each wall's face ids.
        """
        return {
            name: self.evaluate_faces(name, len(faces), time)
            for name, faces in face_map.items()
        }

    def sample_history(self, boundary: str,
                       times: npt.ArrayLike) -> Tuple[NDArrayFloat, NDArrayFloat, NDArrayFloat]:
        """
        Wall state at many times (vectorised).

        Returns
        -------
        times : ndarray, shape (M,)
        velocities : ndarray, shape (M, 3)
        payload : ndarray, shape (M,)
            Temperature (isothermal) or heat flux (isoflux, and the constant
            adiabatic heat flux for adiabatic walls).
        """
        wall = self.wall(boundary)
        times = np.asarray(times, dtype=np.float64).reshape(-1)
        velocities, payloads = interpolate_many(wall.series, times)
        if payloads is None:
            payloads = np.full(times.shape[0], ADIABATIC_HEAT_FLUX)
        return times, velocities, payloads
