#!/usr/bin/env python3
"""
Preview the boundary values of transient viscous walls.

Loads every wall declared in a case YAML file, samples its interpolated
history over a time window and writes, per wall:
    - <case>_<wall>_history.pdf  (velocity and temperature / heat flux)
    - <case>_<wall>_history.dat  (sampled columns)

Usage:
    python preview_transient_walls.py case.yaml
    python preview_transient_walls.py case.yaml --t-start 0 --t-end 0.5 --n-samples 501
"""

import sys
import argparse
from pathlib import Path

import numpy as np
import yaml

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loguru import logger

from wallseries.config import load_yaml, apply_cli_overrides, ConfigError
from wallseries.io import plot_wall_history, write_history_table
from wallseries.physics.jax_config import get_device_info
from wallseries.series import TimeSeriesLoadError
from wallseries.solvers import BoundaryValueProducer
from wallseries.utils.logging import initialize


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Sample and plot transient wall boundary values"
    )
    parser.add_argument("config", help="Case configuration (.yaml)")

    parser.add_argument("--t-start", type=float, default=None,
                        help="Start of preview window [s] (default: from config)")
    parser.add_argument("--t-end", type=float, default=None,
                        help="End of preview window [s] (default: from config)")
    parser.add_argument("--n-samples", type=int, default=None,
                        help="Number of preview times (default: from config)")
    parser.add_argument("--output-dir", "-o", type=str, default=None,
                        help="Output directory (default: from config)")
    parser.add_argument("--case-name", type=str, default=None,
                        help="Case name for output files (default: from config)")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (default: from config)")
    parser.add_argument("--no-plot", action="store_true",
                        help="Write history tables only")

    args = parser.parse_args()

    try:
        config = apply_cli_overrides(load_yaml(args.config), args)
    except (FileNotFoundError, yaml.YAMLError, ConfigError) as e:
        initialize()
        logger.critical(f"Invalid configuration: {e}")
        return 1

    initialize(level=config.logging.level, show_time=config.logging.show_time)
    logger.debug(get_device_info())

    try:
        producer = BoundaryValueProducer.from_config(config)
    except (TimeSeriesLoadError, ConfigError) as e:
        logger.critical(f"Cannot set up transient walls: {e}")
        return 1

    preview = config.preview
    if preview.n_samples < 2 or preview.t_end <= preview.t_start:
        logger.critical(f"Invalid preview window [{preview.t_start}, {preview.t_end}] "
                        f"with {preview.n_samples} samples")
        return 1
    times = np.linspace(preview.t_start, preview.t_end, preview.n_samples)

    logger.info(f"Sampling {len(producer)} wall(s) at {preview.n_samples} times in "
                f"[{preview.t_start:g}, {preview.t_end:g}] s")

    for name in producer.names:
        wall = producer.wall(name)
        t, vel, payload = producer.sample_history(name, times)
        case_name = f"{config.output.case_name}_{name}"

        logger.info(f"{'=' * 60}")
        logger.info(f"Wall '{name}' ({wall.variant.option}, {len(wall.series)} samples)")
        for k in np.unique(np.linspace(0, len(t) - 1, 5).astype(int)):
            values = producer.wall_values(name, t[k])
            thermal = values.temperature if values.temperature is not None else values.heat_flux
            logger.info(f"  t={t[k]:10.4g}  v=({values.velocity[0]:.4g}, {values.velocity[1]:.4g}, "
                        f"{values.velocity[2]:.4g})  {wall.variant.payload_name or 'heat_flux'}={thermal:.6g}")

        table_path = write_history_table(t, vel, payload, wall.variant,
                                         config.output.directory, case_name)
        logger.info(f"  Table: {table_path}")

        if not args.no_plot:
            pdf_path = plot_wall_history(t, vel, payload, wall.variant,
                                         config.output.directory, case_name,
                                         series=wall.series)
            logger.info(f"  Plot:  {pdf_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
