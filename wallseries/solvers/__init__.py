"""
Solver-facing boundary values for transient viscous walls.
"""

from .boundary_values import (
    WallValues,
    FaceValues,
    TransientWall,
    BoundaryValueProducer,
)

__all__ = [
    'WallValues',
    'FaceValues',
    'TransientWall',
    'BoundaryValueProducer',
]
