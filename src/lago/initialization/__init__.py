"""LAGO orientation initialization for planar pose graphs."""

from .initialize import (
    initialize_orientations,
    initialize_poses,
    poses_to_values,
    reconstruct_poses,
)
from .orientation_graph import (
    OrientationEquation,
    build_orientation_equations,
    build_orientation_graph,
    regularize_chord,
    round_half_away,
    solve_orientations,
)
from .spanning_tree import PredecessorMap, find_root, minimum_spanning_tree
from .subgraph import extract_orientation_subgraph
from .symbolic import (
    SymbolicGraph,
    classify_edges,
    compute_theta_to_root,
    compute_thetas_to_root,
)

__all__ = [
    "OrientationEquation",
    "PredecessorMap",
    "SymbolicGraph",
    "build_orientation_equations",
    "build_orientation_graph",
    "classify_edges",
    "compute_theta_to_root",
    "compute_thetas_to_root",
    "extract_orientation_subgraph",
    "find_root",
    "initialize_orientations",
    "initialize_poses",
    "minimum_spanning_tree",
    "poses_to_values",
    "reconstruct_poses",
    "regularize_chord",
    "round_half_away",
    "solve_orientations",
]
