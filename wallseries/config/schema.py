"""
Configuration schema for transient wall cases.

Dataclass-based configuration that can be loaded from YAML or constructed programmatically.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Optional

from ..series.sample import WallVariant


class ConfigError(ValueError):
    """Invalid transient wall configuration."""
    pass


@dataclass
class WallConfig:
    """One transient viscous wall."""

    name: str = "wall"
    variant: str = "adiabatic"   # Option name: 'adiabatic', 'Twall' or 'qwall'
    filename: str = ""           # Time-series data file
    transient: Optional[bool] = None  # Marker; the producer requires True

    def get_variant(self) -> WallVariant:
        """Wall variant as an enum."""
        try:
            return WallVariant.from_option(self.variant)
        except ValueError as e:
            raise ConfigError(f"Wall '{self.name}': {e}") from None


@dataclass
class PreviewConfig:
    """Time window sampled when previewing wall histories."""

    t_start: float = 0.0
    t_end: float = 1.0
    n_samples: int = 201


@dataclass
class OutputConfig:
    """Output configuration."""

    directory: str = "output/walls"
    case_name: str = "transient_wall"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    show_time: bool = True


@dataclass
class CaseConfig:
    """Complete transient wall case configuration."""

    walls: List[WallConfig] = field(default_factory=list)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def wall(self, name: str) -> WallConfig:
        """Look up a wall by name."""
        for w in self.walls:
            if w.name == name:
                return w
        raise KeyError(f"No wall named '{name}' in configuration")

    def to_dict(self) -> dict:
        """Convert to nested dictionary (walls in YAML option form)."""
        data = asdict(self)
        walls = []
        for w in self.walls:
            entry = {'name': w.name, w.variant: w.filename}
            if w.transient is not None:
                entry['transient'] = w.transient
            walls.append(entry)
        data['walls'] = walls
        return data
