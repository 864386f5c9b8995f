"""Tree/chord classification and cumulative orientations along the tree.

For a key ``k`` whose tree parent is ``p``, ``delta_theta[k]`` stores the
relative orientation theta[k] - theta[p] read from the tree edge joining them.
Summing those deltas from a key up to the root gives its orientation with
respect to the root, without wrapping to (-pi, pi].
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from ..pose_graph.measurement import OrientationEdge
from .spanning_tree import PredecessorMap, find_root

logger = logging.getLogger(__name__)


@dataclass
class SymbolicGraph:
    """Result of classifying subgraph edges against a spanning tree."""

    tree_edge_ids: List[int] = field(default_factory=list)  # Edge indices in the tree
    chord_ids: List[int] = field(default_factory=list)  # Edge indices closing cycles
    delta_theta: Dict[int, float] = field(default_factory=dict)  # child -> tree delta


def classify_edges(tree: PredecessorMap, edges: Sequence[OrientationEdge]) -> SymbolicGraph:
    """Split edges into spanning-tree edges and chords.

    Edge indices keep the order of ``edges``. When several parallel edges match
    the same tree link they are all tree edges, and the first one provides the
    delta of the child.

    Args:
        tree: Predecessor map of the spanning tree.
        edges: Orientation subgraph.

    Returns:
        SymbolicGraph with tree edge ids, chord ids and tree deltas.
    """
    symbolic = SymbolicGraph()

    for edge_id, edge in enumerate(edges):
        key1, key2 = edge.keys
        if key1 not in tree or key2 not in tree:
            raise ValueError(f"Edge {edge_id} ({key1}, {key2}) is not covered by the tree")

        if tree[key2] == key1:
            symbolic.delta_theta.setdefault(key2, edge.delta)
            symbolic.tree_edge_ids.append(edge_id)
        elif tree[key1] == key2:
            symbolic.delta_theta.setdefault(key1, -edge.delta)
            symbolic.tree_edge_ids.append(edge_id)
        else:
            symbolic.chord_ids.append(edge_id)

    logger.debug(
        "Classified %d tree edges and %d chords",
        len(symbolic.tree_edge_ids),
        len(symbolic.chord_ids),
    )
    return symbolic


def compute_theta_to_root(
    key: int,
    tree: PredecessorMap,
    delta_theta: Dict[int, float],
    theta_to_root: Dict[int, float],
) -> float:
    """Accumulate tree deltas from ``key`` up to the root.

    The walk stops early at the first ancestor already present in
    ``theta_to_root``. The root has orientation zero.

    Args:
        key: Key whose orientation is computed.
        tree: Predecessor map.
        delta_theta: Tree deltas from ``classify_edges``.
        theta_to_root: Orientations computed so far.

    Returns:
        Unwrapped orientation of ``key`` with respect to the root.

    Raises:
        ValueError: If the predecessor map contains a cycle.
    """
    node_theta = 0.0
    child = key
    for _ in range(len(tree)):
        parent = tree[child]
        if parent == child:
            return node_theta
        node_theta += delta_theta[child]
        if parent in theta_to_root:
            return node_theta + theta_to_root[parent]
        child = parent

    raise ValueError(f"Predecessor map contains a cycle reachable from key {key}")


def compute_thetas_to_root(
    delta_theta: Dict[int, float],
    tree: PredecessorMap,
) -> Dict[int, float]:
    """Compute the unwrapped orientation of every tree key with respect to the root.

    Args:
        delta_theta: Tree deltas from ``classify_edges``.
        tree: Predecessor map.

    Returns:
        Mapping from key to orientation; includes the root with 0.0.
    """
    root = find_root(tree)
    theta_to_root: Dict[int, float] = {root: 0.0}
    for key in delta_theta:
        theta_to_root[key] = compute_theta_to_root(key, tree, delta_theta, theta_to_root)
    return theta_to_root
