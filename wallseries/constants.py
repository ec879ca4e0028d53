"""
Global constants for the transient wall boundary module.

Column layout of the time-series data files and fixed physical values
shared by the loader, the interpolator and the boundary value producer.
"""

# Velocity vector size
N_VEL = 3

# Data file columns: time [payload] vx vy vz
TIME_COL = 0
PAYLOAD_COL = 1

# Adiabatic walls carry zero heat flux by definition (not read from file)
ADIABATIC_HEAT_FLUX = 0.0


def get_velocity_columns(has_payload: bool) -> slice:
    """
    Return the slice selecting vx, vy, vz in one data record.
    
    Parameters
    ----------
    has_payload : bool
        Whether the record carries a temperature/heat flux column.
        
    Returns
    -------
    slice
        slice(2, 5) with payload, slice(1, 4) without.
    """
    start = 2 if has_payload else 1
    return slice(start, start + N_VEL)


def get_record_width(has_payload: bool) -> int:
    """Number of fields per data record (4 adiabatic, 5 otherwise)."""
    return 1 + N_VEL + (1 if has_payload else 0)
