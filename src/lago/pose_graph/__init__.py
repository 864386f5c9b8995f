"""Planar pose graph module using GTSAM.

This module provides the measurement types consumed by the LAGO
initialization and the GTSAM helpers used around it.
"""

from .graph import add_origin_prior, graph_error, has_prior
from .measurement import (
    PRIOR_KINDS,
    RELATIVE_KINDS,
    Measurement,
    MeasurementKind,
    OrientationEdge,
    measurement_from_factor,
    measurements_from_factor_graph,
)
from .noise import angular_sigma, create_noise_model_diagonal, create_noise_model_isotropic
from .optimizer import GraphOptimizer

__all__ = [
    "GraphOptimizer",
    "Measurement",
    "MeasurementKind",
    "OrientationEdge",
    "PRIOR_KINDS",
    "RELATIVE_KINDS",
    "add_origin_prior",
    "angular_sigma",
    "create_noise_model_diagonal",
    "create_noise_model_isotropic",
    "graph_error",
    "has_prior",
    "measurement_from_factor",
    "measurements_from_factor_graph",
]
