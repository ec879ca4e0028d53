"""
Visualization and tabulation of transient wall histories.

Plots the interpolated wall velocity and thermal quantity over a time
window, with the file samples overlaid, so a data file can be checked
before it is used in a run.
"""

import os
import numpy as np
from typing import Optional
from pathlib import Path

from ..series.sample import TimeSeries, WallVariant

# Lazy import matplotlib to avoid issues when not installed
_plt = None
_matplotlib = None

_PAYLOAD_LABELS = {
    WallVariant.ADIABATIC: ('Heat flux', 'q [W/m²]'),
    WallVariant.ISOTHERMAL: ('Wall temperature', 'T [K]'),
    WallVariant.ISOFLUX: ('Heat flux', 'q [W/m²]'),
}


def _ensure_matplotlib():
    """Ensure matplotlib is available and configured."""
    global _plt, _matplotlib
    if _plt is None:
        import matplotlib
        matplotlib.use('Agg')  # Non-interactive backend
        import matplotlib.pyplot as plt
        _matplotlib = matplotlib
        _plt = plt
    return _plt


def plot_wall_history(times: np.ndarray, velocities: np.ndarray, payload: np.ndarray,
                      variant: WallVariant, output_dir: str,
                      case_name: str = "wall",
                      series: Optional[TimeSeries] = None) -> str:
    """
    Plot a wall's interpolated history.
    
    Creates PDF with:
    - Velocity components vx, vy, vz
    - Temperature (isothermal) or heat flux (isoflux, adiabatic)
    
    Parameters
    ----------
    times : ndarray, shape (M,)
        Sample times [s].
    velocities : ndarray, shape (M, 3)
        Interpolated wall velocity.
    payload : ndarray, shape (M,)
        Interpolated temperature or heat flux.
    variant : WallVariant
        Wall variant (selects labels).
    output_dir : str
        Output directory for the PDF file.
    case_name : str
        Base name for the output file.
    series : TimeSeries, optional
        Raw samples to overlay as markers.
        
    Returns
    -------
    output_path : str
        Path to saved PDF file.
    """
    plt = _ensure_matplotlib()
    
    fig, axes = plt.subplots(2, 1, figsize=(10, 8), sharex=True)
    
    # --- Velocity ---
    ax = axes[0]
    for k, (label, color) in enumerate(zip(('vx', 'vy', 'vz'), ('C0', 'C1', 'C2'))):
        ax.plot(times, velocities[:, k], '-', color=color, lw=1.5, label=label)
        if series is not None:
            ax.plot(series.times, series.velocities[:, k], 'o', color=color, ms=4)
    ax.set_ylabel('Velocity [m/s]')
    ax.set_title(f'{case_name}: wall velocity ({variant.option})')
    ax.grid(True, alpha=0.3)
    ax.legend()
    
    # --- Thermal quantity ---
    title, ylabel = _PAYLOAD_LABELS[variant]
    ax = axes[1]
    ax.plot(times, payload, 'k-', lw=1.5)
    if series is not None and series.payloads is not None:
        ax.plot(series.times, series.payloads, 'ko', ms=4)
    ax.set_xlabel('Time [s]')
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    
    plt.tight_layout()
    
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    output_path = os.path.join(output_dir, f'{case_name}_history.pdf')
    plt.savefig(output_path, dpi=100)
    plt.close()
    
    return output_path


def write_history_table(times: np.ndarray, velocities: np.ndarray, payload: np.ndarray,
                        variant: WallVariant, output_dir: str,
                        case_name: str = "wall") -> str:
    """Write a sampled history as whitespace-separated columns with a header."""
    payload_name = variant.payload_name or 'heat_flux'
    header = f"time {payload_name} vx vy vz"
    data = np.column_stack([times, payload, velocities])
    
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    output_path = os.path.join(output_dir, f'{case_name}_history.dat')
    np.savetxt(output_path, data, header=header, fmt='%.10e')
    
    return output_path
