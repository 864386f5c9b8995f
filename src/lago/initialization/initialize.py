"""Public entry points of the LAGO orientation initialization.

L. Carlone, R. Aragues, J. Castellanos, and B. Bona, A fast and accurate
approximation for planar pose graph optimization, IJRR, 2014.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Union

import gtsam

from ..exceptions import MissingInitialValueError
from ..pose_graph.measurement import Measurement, measurements_from_factor_graph
from ..utils.config import ANCHOR_KEY, LagoParams
from .orientation_graph import build_orientation_equations, solve_orientations
from .spanning_tree import SpanningTreeService, find_root, minimum_spanning_tree
from .subgraph import extract_orientation_subgraph
from .symbolic import classify_edges, compute_thetas_to_root

logger = logging.getLogger(__name__)

MeasurementInput = Union[Sequence[Measurement], gtsam.NonlinearFactorGraph]
InitialGuess = Union[Mapping[int, gtsam.Pose2], gtsam.Values]


def _as_measurements(measurements: MeasurementInput) -> List[Measurement]:
    if isinstance(measurements, gtsam.NonlinearFactorGraph):
        return measurements_from_factor_graph(measurements)
    return list(measurements)


def initialize_orientations(
    measurements: MeasurementInput,
    params: Optional[LagoParams] = None,
    spanning_tree: Optional[SpanningTreeService] = None,
    include_anchor: bool = False,
) -> Dict[int, float]:
    """Estimate the orientation of every pose connected by planar measurements.

    Args:
        measurements: Measurements, or a GTSAM graph to convert.
        params: Initialization parameters. Defaults to ``LagoParams()``.
        spanning_tree: Service returning a predecessor map for the subgraph.
            Defaults to a networkx minimum spanning tree rooted at the anchor.
        include_anchor: Keep the anchor key in the result.

    Returns:
        Mapping from key to orientation in radians. Orientations are not
        wrapped; they may differ from (-pi, pi] by whole turns.

    Raises:
        InvalidNoiseModelError: If a measurement noise model is not diagonal.
        DisconnectedGraphError: If the measurements do not form one component.
        SingularSystemError: If the linear system cannot be solved.
    """
    if params is None:
        params = LagoParams()

    edges = extract_orientation_subgraph(_as_measurements(measurements), params.anchor_key)
    if not edges:
        logger.warning("No relative or prior orientation measurements to initialize from")
        return {}

    if spanning_tree is None:
        tree = minimum_spanning_tree(edges, anchor_key=params.anchor_key)
    else:
        tree = spanning_tree(edges)
    root = find_root(tree)

    symbolic = classify_edges(tree, edges)
    thetas_to_root = compute_thetas_to_root(symbolic.delta_theta, tree)
    equations = build_orientation_equations(edges, symbolic, thetas_to_root, root, params)
    orientations = solve_orientations(equations)

    if not include_anchor:
        orientations.pop(params.anchor_key, None)

    logger.info("LAGO initialized %d orientations", len(orientations))
    return orientations


def _initial_pose(initial_guess: InitialGuess, key: int) -> gtsam.Pose2:
    if isinstance(initial_guess, gtsam.Values):
        if not initial_guess.exists(key):
            raise MissingInitialValueError(f"No initial value for key {key}")
        return initial_guess.atPose2(key)
    try:
        return initial_guess[key]
    except KeyError:
        raise MissingInitialValueError(f"No initial value for key {key}") from None


def reconstruct_poses(
    orientations: Mapping[int, float],
    initial_guess: InitialGuess,
    anchor_key: int = ANCHOR_KEY,
) -> Dict[int, gtsam.Pose2]:
    """Replace the orientation of the initial poses with the solved ones.

    Args:
        orientations: Solved orientations.
        initial_guess: Poses providing the translation part.
        anchor_key: Key skipped because it is not a real pose.

    Returns:
        Mapping from key to Pose2 with unchanged x and y.

    Raises:
        MissingInitialValueError: If a solved key has no initial pose.
    """
    poses: Dict[int, gtsam.Pose2] = {}
    for key, theta in orientations.items():
        if key == anchor_key:
            continue
        pose = _initial_pose(initial_guess, key)
        poses[key] = gtsam.Pose2(pose.x(), pose.y(), theta)
    return poses


def initialize_poses(
    measurements: MeasurementInput,
    initial_guess: InitialGuess,
    params: Optional[LagoParams] = None,
    spanning_tree: Optional[SpanningTreeService] = None,
) -> Dict[int, gtsam.Pose2]:
    """Correct the orientation part of an initial guess with LAGO.

    Args:
        measurements: Measurements, or a GTSAM graph to convert.
        initial_guess: Initial poses, as a mapping or ``gtsam.Values``.
        params: Initialization parameters.
        spanning_tree: Optional spanning tree service.

    Returns:
        Mapping from key to Pose2 for every key reached by the measurements.
    """
    if params is None:
        params = LagoParams()
    orientations = initialize_orientations(measurements, params, spanning_tree)
    return reconstruct_poses(orientations, initial_guess, params.anchor_key)


def poses_to_values(poses: Mapping[int, gtsam.Pose2]) -> gtsam.Values:
    """Pack poses into GTSAM Values.

    Args:
        poses: Mapping from key to Pose2.

    Returns:
        Values holding every pose.
    """
    values = gtsam.Values()
    for key, pose in poses.items():
        values.insert(key, pose)
    return values
