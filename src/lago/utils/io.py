"""Input/Output utilities for planar g2o datasets."""

from pathlib import Path
from typing import Tuple, Union

import gtsam


def load_g2o(filepath: Union[str, Path]) -> Tuple[gtsam.NonlinearFactorGraph, gtsam.Values]:
    """Load a 2D pose graph from a g2o file.

    Expected records:
    VERTEX_SE2 id x y theta
    EDGE_SE2 id1 id2 dx dy dtheta I11 I12 I13 I22 I23 I33

    Args:
        filepath: Path to g2o file.

    Returns:
        Tuple of (factor graph, initial estimate).
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"g2o file not found: {filepath}")

    graph, initial = gtsam.readG2o(str(filepath), False)
    return graph, initial


def save_g2o(
    graph: gtsam.NonlinearFactorGraph,
    values: gtsam.Values,
    filepath: Union[str, Path],
) -> None:
    """Save a 2D pose graph and estimate to a g2o file.

    Args:
        graph: The factor graph to save.
        values: Estimate written as vertices.
        filepath: Output file path.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    gtsam.writeG2o(graph, values, str(filepath))
