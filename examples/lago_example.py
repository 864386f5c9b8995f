"""Example of initializing a planar pose graph with LAGO.

This example demonstrates:
1. Building a small loop of Pose2 measurements with GTSAM
2. Computing LAGO orientations
3. Correcting the headings of a poor initial guess
4. Refining the result with Levenberg-Marquardt
"""

import math

import gtsam
import numpy as np

from lago import initialize_orientations, initialize_poses
from lago.initialization import poses_to_values
from lago.pose_graph import GraphOptimizer, create_noise_model_diagonal


def main() -> None:
    """Run the LAGO initialization example."""
    print("LAGO Example")
    print("=" * 50)

    noise = create_noise_model_diagonal(np.array([0.1, 0.1, 0.05]))
    truth = {
        0: gtsam.Pose2(0.0, 0.0, 0.0),
        1: gtsam.Pose2(1.0, 1.0, 0.5 * math.pi),
        2: gtsam.Pose2(0.0, 2.0, math.pi),
        3: gtsam.Pose2(-1.0, 1.0, 1.5 * math.pi),
    }

    graph = gtsam.NonlinearFactorGraph()
    for key1, key2 in [(0, 1), (1, 2), (2, 3), (2, 0), (0, 3)]:
        graph.add(gtsam.BetweenFactorPose2(key1, key2, truth[key1].between(truth[key2]), noise))
    graph.add(gtsam.PriorFactorPose2(0, truth[0], noise))
    print(f"\n1. Built graph with {graph.size()} factors")

    orientations = initialize_orientations(graph)
    print("\n2. LAGO orientations:")
    for key, theta in orientations.items():
        print(f"   x{key}: {theta:+.6f} rad")

    # Initial guess with correct translations and zero headings
    initial = gtsam.Values()
    for key, pose in truth.items():
        initial.insert(key, gtsam.Pose2(pose.x(), pose.y(), 0.0))

    estimate = poses_to_values(initialize_poses(graph, initial))
    print(f"\n3. Graph error: initial {graph.error(initial):.4f}, LAGO {graph.error(estimate):.4f}")

    result = GraphOptimizer().optimize(graph, estimate)
    print(f"\n4. Graph error after refinement: {graph.error(result):.6f}")


if __name__ == "__main__":
    main()
