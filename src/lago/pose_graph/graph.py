"""Helpers operating on planar GTSAM factor graphs."""

from typing import Optional

import gtsam
import numpy as np

from .measurement import PRIOR_KINDS, measurement_from_factor
from .noise import create_noise_model_diagonal

# Tight prior used to fix the gauge of graphs read without one
ORIGIN_PRIOR_SIGMAS = np.sqrt(np.array([1e-6, 1e-6, 1e-8]))


def has_prior(graph: gtsam.NonlinearFactorGraph) -> bool:
    """Check whether the graph holds at least one Pose2 or Rot2 prior.

    Args:
        graph: Nonlinear factor graph.

    Returns:
        True if an absolute planar measurement is present.
    """
    for i in range(graph.size()):
        factor = graph.at(i)
        if factor is not None and measurement_from_factor(factor).kind in PRIOR_KINDS:
            return True
    return False


def add_origin_prior(
    graph: gtsam.NonlinearFactorGraph,
    key: int = 0,
    pose: Optional[gtsam.Pose2] = None,
    noise_model: Optional[gtsam.noiseModel.Base] = None,
) -> None:
    """Add a prior factor to fix a pose (defaults to the origin).

    Args:
        graph: Graph to extend in place.
        key: The pose key.
        pose: The prior pose value.
        noise_model: Noise model for the prior.
    """
    if pose is None:
        pose = gtsam.Pose2()
    if noise_model is None:
        noise_model = create_noise_model_diagonal(ORIGIN_PRIOR_SIGMAS)
    graph.add(gtsam.PriorFactorPose2(key, pose, noise_model))


def graph_error(graph: gtsam.NonlinearFactorGraph, values: gtsam.Values) -> float:
    """Get the total graph error at the given estimate.

    Args:
        graph: Nonlinear factor graph.
        values: Estimate to evaluate.

    Returns:
        Total graph error.
    """
    return graph.error(values)
