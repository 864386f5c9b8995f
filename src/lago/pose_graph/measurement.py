"""Planar measurement representation.

This module provides the tagged measurement record consumed by the LAGO
pipeline, the canonical relative-orientation edge it is reduced to, and the
conversion from a GTSAM nonlinear factor graph.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

import gtsam

logger = logging.getLogger(__name__)


class MeasurementKind(Enum):
    """Type of planar measurement."""

    BETWEEN_POSE2 = "between_pose2"  # Relative Pose2 (odometry, loop closure)
    BETWEEN_ROT2 = "between_rot2"  # Relative heading only
    PRIOR_POSE2 = "prior_pose2"  # Absolute Pose2
    PRIOR_ROT2 = "prior_rot2"  # Absolute heading
    OTHER = "other"  # Anything else (landmarks, GPS, ...)


RELATIVE_KINDS = frozenset({MeasurementKind.BETWEEN_POSE2, MeasurementKind.BETWEEN_ROT2})
PRIOR_KINDS = frozenset({MeasurementKind.PRIOR_POSE2, MeasurementKind.PRIOR_ROT2})

_MEASURED_TYPES = {
    MeasurementKind.BETWEEN_POSE2: gtsam.Pose2,
    MeasurementKind.BETWEEN_ROT2: gtsam.Rot2,
    MeasurementKind.PRIOR_POSE2: gtsam.Pose2,
    MeasurementKind.PRIOR_ROT2: gtsam.Rot2,
}

# Factor class -> kind, checked in order
_FACTOR_KINDS = (
    (gtsam.BetweenFactorPose2, MeasurementKind.BETWEEN_POSE2),
    (gtsam.BetweenFactorRot2, MeasurementKind.BETWEEN_ROT2),
    (gtsam.PriorFactorPose2, MeasurementKind.PRIOR_POSE2),
    (gtsam.PriorFactorRot2, MeasurementKind.PRIOR_ROT2),
)


@dataclass(frozen=True)
class Measurement:
    """A single constraint of a planar pose graph.

    The ``kind`` tag decides how the measurement is interpreted; ``measured`` is
    the relative transform for between kinds and the absolute value for priors.
    """

    kind: MeasurementKind
    keys: Tuple[int, ...]
    measured: Optional[Union[gtsam.Pose2, gtsam.Rot2]] = None
    noise_model: Optional[gtsam.noiseModel.Base] = None

    def __post_init__(self) -> None:
        """Validate measurement data."""
        object.__setattr__(self, "keys", tuple(int(k) for k in self.keys))

        if self.kind is MeasurementKind.OTHER:
            return
        if self.kind in RELATIVE_KINDS and len(self.keys) != 2:
            raise ValueError("Relative measurements must connect exactly 2 keys")
        if self.kind in PRIOR_KINDS and len(self.keys) != 1:
            raise ValueError("Prior measurements must constrain exactly 1 key")
        if not isinstance(self.measured, _MEASURED_TYPES[self.kind]):
            raise ValueError(
                f"{self.kind.value} measurement requires a "
                f"{_MEASURED_TYPES[self.kind].__name__} value"
            )
        if self.noise_model is None:
            raise ValueError("Noise model is required")

    @property
    def theta(self) -> float:
        """Measured heading (relative for between kinds, absolute for priors)."""
        if self.measured is None:
            raise ValueError(f"{self.kind.value} measurement carries no heading")
        return float(self.measured.theta())

    @staticmethod
    def between_pose2(
        key1: int,
        key2: int,
        relative_pose: gtsam.Pose2,
        noise_model: gtsam.noiseModel.Base,
    ) -> "Measurement":
        """Create a relative Pose2 measurement from ``key1`` to ``key2``."""
        return Measurement(MeasurementKind.BETWEEN_POSE2, (key1, key2), relative_pose, noise_model)

    @staticmethod
    def between_rot2(
        key1: int,
        key2: int,
        relative_rotation: gtsam.Rot2,
        noise_model: gtsam.noiseModel.Base,
    ) -> "Measurement":
        """Create a relative heading measurement from ``key1`` to ``key2``."""
        return Measurement(
            MeasurementKind.BETWEEN_ROT2, (key1, key2), relative_rotation, noise_model
        )

    @staticmethod
    def prior_pose2(
        key: int,
        prior_pose: gtsam.Pose2,
        noise_model: gtsam.noiseModel.Base,
    ) -> "Measurement":
        """Create an absolute Pose2 measurement on ``key``."""
        return Measurement(MeasurementKind.PRIOR_POSE2, (key,), prior_pose, noise_model)

    @staticmethod
    def prior_rot2(
        key: int,
        prior_rotation: gtsam.Rot2,
        noise_model: gtsam.noiseModel.Base,
    ) -> "Measurement":
        """Create an absolute heading measurement on ``key``."""
        return Measurement(MeasurementKind.PRIOR_ROT2, (key,), prior_rotation, noise_model)


@dataclass(frozen=True)
class OrientationEdge:
    """Relative-orientation constraint between two keys.

    ``delta`` is orientation(key2) - orientation(key1), in radians.
    """

    key1: int
    key2: int
    delta: float
    noise_model: gtsam.noiseModel.Base
    source_index: int  # Position of the originating measurement in the input

    @property
    def keys(self) -> Tuple[int, int]:
        """Both endpoint keys, in measurement direction."""
        return (self.key1, self.key2)


def measurement_from_factor(factor: gtsam.NonlinearFactor) -> Measurement:
    """Convert a GTSAM factor into a tagged measurement.

    Args:
        factor: A factor of a nonlinear factor graph.

    Returns:
        Measurement; factor types without a planar orientation become ``OTHER``.
    """
    keys = tuple(int(k) for k in factor.keys())
    for factor_type, kind in _FACTOR_KINDS:
        if isinstance(factor, factor_type):
            if kind in RELATIVE_KINDS:
                measured = factor.measured()
            else:
                measured = factor.prior()
            return Measurement(kind, keys, measured, factor.noiseModel())
    return Measurement(MeasurementKind.OTHER, keys)


def measurements_from_factor_graph(graph: gtsam.NonlinearFactorGraph) -> List[Measurement]:
    """Convert every factor of a GTSAM graph, preserving factor order.

    Args:
        graph: Nonlinear factor graph.

    Returns:
        List of measurements, one per non-empty factor slot.
    """
    measurements = []
    for i in range(graph.size()):
        factor = graph.at(i)
        if factor is None:
            continue
        measurements.append(measurement_from_factor(factor))

    logger.debug("Converted %d factors into measurements", len(measurements))
    return measurements
