"""Pytest configuration and fixtures.

The shared scenario is a square loop of four poses:

              x2
            / | \\
          x3  |  x1
            \\ | /
              x0

with measurements 0->1, 1->2, 2->3, 2->0, 0->3 and a prior on x0.
"""

import math
from typing import Dict, List

import gtsam
import numpy as np
import pytest

from lago.pose_graph import Measurement, OrientationEdge, create_noise_model_isotropic
from lago.utils.config import ANCHOR_KEY

PI = math.pi

GROUND_TRUTH = {
    0: gtsam.Pose2(0.0, 0.0, 0.0),
    1: gtsam.Pose2(1.0, 1.0, 0.5 * PI),
    2: gtsam.Pose2(0.0, 2.0, PI),
    3: gtsam.Pose2(-1.0, 1.0, 1.5 * PI),
}

# (key1, key2, relative orientation) in measurement order
LOOP_DELTAS = [
    (0, 1, 0.5 * PI),
    (1, 2, 0.5 * PI),
    (2, 3, 0.5 * PI),
    (2, 0, PI),
    (0, 3, -0.5 * PI),
]


def make_between(key1: int, key2: int, theta: float, sigma: float = 0.1) -> Measurement:
    """Relative Pose2 measurement with ground-truth translation and the given heading."""
    relative = GROUND_TRUTH[key1].between(GROUND_TRUTH[key2])
    return Measurement.between_pose2(
        key1,
        key2,
        gtsam.Pose2(relative.x(), relative.y(), theta),
        create_noise_model_isotropic(3, sigma),
    )


@pytest.fixture
def noise_model() -> gtsam.noiseModel.Base:
    """Isotropic Pose2 noise model."""
    return create_noise_model_isotropic(3, 0.1)


@pytest.fixture
def loop_betweens() -> List[Measurement]:
    """The five relative measurements of the square loop."""
    return [make_between(key1, key2, theta) for key1, key2, theta in LOOP_DELTAS]


@pytest.fixture
def loop_measurements(loop_betweens, noise_model) -> List[Measurement]:
    """Loop measurements followed by a zero prior on x0."""
    return loop_betweens + [Measurement.prior_pose2(0, GROUND_TRUTH[0], noise_model)]


@pytest.fixture
def loop_edges(noise_model) -> List[OrientationEdge]:
    """Orientation edges of the loop, without the prior."""
    return [
        OrientationEdge(key1, key2, theta, noise_model, index)
        for index, (key1, key2, theta) in enumerate(LOOP_DELTAS)
    ]


@pytest.fixture
def star_tree() -> Dict[int, int]:
    """Spanning tree of the loop rooted at x0, every other pose a child of x0."""
    return {0: 0, 1: 0, 2: 0, 3: 0}


@pytest.fixture
def anchored_star_tree() -> Dict[int, int]:
    """Star tree hanging from the anchor node through x0."""
    return {ANCHOR_KEY: ANCHOR_KEY, 0: ANCHOR_KEY, 1: 0, 2: 0, 3: 0}


@pytest.fixture
def zero_heading_guess() -> Dict[int, gtsam.Pose2]:
    """Ground-truth translations with every heading set to zero."""
    return {key: gtsam.Pose2(pose.x(), pose.y(), 0.0) for key, pose in GROUND_TRUTH.items()}


def wrapped(theta: float) -> float:
    """Wrap an angle to (-pi, pi]."""
    return float(np.arctan2(np.sin(theta), np.cos(theta)))
