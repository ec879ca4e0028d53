"""
Configuration module for transient wall cases.

Provides YAML-based configuration with dataclass schema.
"""

from .schema import (
    CaseConfig,
    WallConfig,
    PreviewConfig,
    OutputConfig,
    LoggingConfig,
    ConfigError,
)

from .loader import (
    load_yaml,
    from_dict,
    apply_cli_overrides,
    save_yaml,
)

__all__ = [
    # Schema classes
    'CaseConfig',
    'WallConfig',
    'PreviewConfig',
    'OutputConfig',
    'LoggingConfig',
    'ConfigError',
    # Loader functions
    'load_yaml',
    'from_dict',
    'apply_cli_overrides',
    'save_yaml',
]
