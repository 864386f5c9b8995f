"""Linear system of regularized orientation measurements, solved with GTSAM."""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import gtsam
import numpy as np

from ..exceptions import SingularSystemError
from ..pose_graph.measurement import OrientationEdge
from ..pose_graph.noise import angular_sigma
from ..utils.config import LagoParams
from .symbolic import SymbolicGraph

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True)
class OrientationEquation:
    """Scalar linear equation on orientations.

    With two keys (i, j) the equation is theta_j - theta_i = rhs; with a single
    key (k,) it is theta_k = rhs.
    """

    keys: Tuple[int, ...]
    rhs: float
    sigma: float

    def __post_init__(self) -> None:
        """Validate equation data."""
        if len(self.keys) not in (1, 2):
            raise ValueError("Orientation equations involve 1 or 2 keys")
        if not self.sigma > 0.0:
            raise ValueError("Equation sigma must be positive")


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def regularize_chord(delta: float, theta1: float, theta2: float) -> Tuple[float, int]:
    """Remove the full turns that a chord adds to the cycle it closes.

    ``delta + theta1 - theta2`` sums the rotations around the cycle made of the
    chord and the tree path between its keys. Without noise it is a multiple of
    2*pi, so the nearest multiple is subtracted from the measurement.

    Args:
        delta: Measured orientation of key2 relative to key1.
        theta1: Orientation of key1 with respect to the root.
        theta2: Orientation of key2 with respect to the root.

    Returns:
        Tuple of (regularized delta, number of turns removed).
    """
    k = round_half_away((delta + theta1 - theta2) / TWO_PI)
    return delta - k * TWO_PI, k


def build_orientation_equations(
    edges: Sequence[OrientationEdge],
    symbolic: SymbolicGraph,
    thetas_to_root: Dict[int, float],
    root: int,
    params: Optional[LagoParams] = None,
) -> List[OrientationEquation]:
    """Assemble one equation per edge plus the root anchor.

    Tree edges come first, then regularized chords, both in subgraph order, and
    the equation fixing the root orientation to zero is last.

    Args:
        edges: Orientation subgraph.
        symbolic: Tree/chord split of ``edges``.
        thetas_to_root: Unwrapped orientations along the tree.
        root: Root key of the tree.
        params: Initialization parameters. Defaults to ``LagoParams()``.

    Returns:
        Ordered list of equations.

    Raises:
        InvalidNoiseModelError: If an edge noise model has no angular sigma.
    """
    if params is None:
        params = LagoParams()

    equations: List[OrientationEquation] = []

    for edge_id in symbolic.tree_edge_ids:
        edge = edges[edge_id]
        equations.append(
            OrientationEquation(edge.keys, edge.delta, angular_sigma(edge.noise_model))
        )

    for edge_id in symbolic.chord_ids:
        edge = edges[edge_id]
        regularized, k = regularize_chord(
            edge.delta, thetas_to_root[edge.key1], thetas_to_root[edge.key2]
        )
        if k != 0:
            logger.debug(
                "Chord from measurement %d (%d, %d): removed %d turn(s) from %.6f",
                edge.source_index,
                edge.key1,
                edge.key2,
                k,
                edge.delta,
            )
        equations.append(
            OrientationEquation(edge.keys, regularized, angular_sigma(edge.noise_model))
        )

    equations.append(OrientationEquation((root,), 0.0, math.sqrt(params.anchor_variance)))
    return equations


def build_orientation_graph(equations: Sequence[OrientationEquation]) -> gtsam.GaussianFactorGraph:
    """Convert equations into a GTSAM linear factor graph of scalar variables.

    Args:
        equations: Orientation equations.

    Returns:
        Gaussian factor graph with one JacobianFactor per equation.
    """
    graph = gtsam.GaussianFactorGraph()
    identity = np.eye(1)

    for equation in equations:
        rhs = np.array([equation.rhs])
        model = gtsam.noiseModel.Diagonal.Sigmas(np.array([equation.sigma]))
        if len(equation.keys) == 2:
            key1, key2 = equation.keys
            graph.add(gtsam.JacobianFactor(key1, -identity, key2, identity, rhs, model))
        else:
            graph.add(gtsam.JacobianFactor(equation.keys[0], identity, rhs, model))

    return graph


def solve_orientations(equations: Sequence[OrientationEquation]) -> Dict[int, float]:
    """Solve the weighted least-squares orientation problem.

    Args:
        equations: Orientation equations, including the anchor.

    Returns:
        Mapping from key to orientation, in order of first appearance.

    Raises:
        SingularSystemError: If GTSAM fails to solve the system.
    """
    keys = list(dict.fromkeys(key for equation in equations for key in equation.keys))

    graph = build_orientation_graph(equations)
    try:
        solution = graph.optimize()
    except RuntimeError as exc:
        raise SingularSystemError(str(exc)) from exc

    return {key: float(solution.at(key)[0]) for key in keys}
