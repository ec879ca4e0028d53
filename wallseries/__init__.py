"""
Time-varying boundary values for transient viscous walls.

Loads (time, velocity[, temperature | heat flux]) series from data files and
interpolates them at the solver's current time.
"""

__version__ = "0.1.0"
