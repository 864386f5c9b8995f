"""LAGO - Linear Approximation for Graph Optimization.

A Python library that computes closed-form orientation estimates for planar
(Pose2) pose graphs, to be used as the initial guess of a nonlinear solver.
"""

from .exceptions import (
    DisconnectedGraphError,
    InvalidNoiseModelError,
    LagoError,
    MissingInitialValueError,
    SingularSystemError,
)
from .initialization import initialize_orientations, initialize_poses

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "DisconnectedGraphError",
    "InvalidNoiseModelError",
    "LagoError",
    "MissingInitialValueError",
    "SingularSystemError",
    "initialize_orientations",
    "initialize_poses",
]
