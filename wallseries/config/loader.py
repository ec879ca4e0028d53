"""
YAML configuration loader with validation.

Example case file:

    walls:
      - name: inner
        Twall: inner_wall.dat
        transient: true
      - name: outer
        adiabatic: outer_wall.dat
        transient: true
    preview:
      t_start: 0.0
      t_end: 0.2
    output:
      directory: output/walls
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import fields, is_dataclass

from .schema import (
    CaseConfig, WallConfig, PreviewConfig, OutputConfig, LoggingConfig, ConfigError,
)
from ..series.sample import WallVariant

VARIANT_OPTIONS = tuple(v.option for v in WallVariant)


def _coerce_type(value, field_type):
    """Coerce value to the expected field type."""
    # Handle string representations of numbers (e.g., "1.0e-3")
    if field_type == float and isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return value
    if field_type == int and isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return value
    return value


def _dict_to_dataclass(cls, data: dict):
    """Convert a flat dictionary to a dataclass instance."""
    if not is_dataclass(cls):
        return data

    field_types = {f.name: f.type for f in fields(cls)}
    kwargs = {}

    for key, value in data.items():
        if key not in field_types:
            continue  # Skip unknown fields
        kwargs[key] = _coerce_type(value, field_types[key])

    return cls(**kwargs)


def _wall_from_dict(data: Dict[str, Any], index: int, base_dir: Optional[Path]) -> WallConfig:
    """
    Build a WallConfig from a YAML wall entry.

    The entry declares its variant by carrying exactly one of the keys
    'adiabatic', 'Twall', 'qwall', whose value is the data file name.
    """
    name = str(data.get('name', f"wall_{index}"))
    declared = [opt for opt in VARIANT_OPTIONS if opt in data]

    if not declared:
        raise ConfigError(f"Wall '{name}' declares none of {list(VARIANT_OPTIONS)}")
    if len(declared) > 1:
        raise ConfigError(f"Wall '{name}' declares more than one of {list(VARIANT_OPTIONS)}: {declared}")

    option = declared[0]
    filename = data[option]
    if not isinstance(filename, str) or not filename:
        raise ConfigError(f"Wall '{name}': option '{option}' must name a data file")

    transient = data.get('transient')
    if transient is not None and not isinstance(transient, bool):
        raise ConfigError(f"Wall '{name}': 'transient' must be true or false, got {transient!r}")

    if base_dir is not None and not Path(filename).is_absolute():
        filename = str(base_dir / filename)

    return WallConfig(
        name=name,
        variant=option,
        filename=filename,
        transient=transient,
    )


def load_yaml(path: Union[str, Path]) -> CaseConfig:
    """
    Load case configuration from a YAML file.

    Relative data file names are resolved against the YAML file's directory.

    Args:
        path: Path to YAML configuration file

    Returns:
        CaseConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ConfigError: If a wall entry is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    return from_dict(data, base_dir=path.parent)


def from_dict(data: Dict[str, Any], base_dir: Optional[Path] = None) -> CaseConfig:
    """
    Create CaseConfig from a dictionary.

    Applies defaults for missing sections.
    """
    config_dict = {}

    walls = data.get('walls') or []
    if not isinstance(walls, list):
        raise ConfigError("'walls' must be a list of wall entries")
    config_dict['walls'] = [_wall_from_dict(w, i, base_dir) for i, w in enumerate(walls)]

    names = [w.name for w in config_dict['walls']]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ConfigError(f"Duplicate wall names: {duplicates}")

    if 'preview' in data:
        config_dict['preview'] = _dict_to_dataclass(PreviewConfig, data['preview'])

    if 'output' in data:
        config_dict['output'] = _dict_to_dataclass(OutputConfig, data['output'])

    if 'logging' in data:
        config_dict['logging'] = _dict_to_dataclass(LoggingConfig, data['logging'])

    return CaseConfig(**config_dict)


def apply_cli_overrides(config: CaseConfig, args) -> CaseConfig:
    """
    Apply command-line argument overrides to a configuration.

    Only overrides values that were explicitly set (not None).

    Args:
        config: Base configuration
        args: argparse.Namespace with CLI arguments

    Returns:
        Updated CaseConfig
    """
    config_dict = config.to_dict()

    cli_mapping = {
        't_start': ('preview', 't_start'),
        't_end': ('preview', 't_end'),
        'n_samples': ('preview', 'n_samples'),
        'output_dir': ('output', 'directory'),
        'case_name': ('output', 'case_name'),
        'log_level': ('logging', 'level'),
    }

    for cli_name, config_path in cli_mapping.items():
        if hasattr(args, cli_name):
            value = getattr(args, cli_name)
            if value is not None:
                target = config_dict
                for key in config_path[:-1]:
                    target = target[key]
                target[config_path[-1]] = value

    return from_dict(config_dict)


def save_yaml(config: CaseConfig, path: Union[str, Path]) -> None:
    """Save configuration to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
