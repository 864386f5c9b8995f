"""Spanning tree over the orientation subgraph, using networkx."""

import logging
from typing import Callable, Dict, Optional, Sequence

import networkx as nx

from ..exceptions import DisconnectedGraphError
from ..pose_graph.measurement import OrientationEdge
from ..utils.config import ANCHOR_KEY

logger = logging.getLogger(__name__)

# child key -> parent key; the root maps to itself
PredecessorMap = Dict[int, int]

SpanningTreeService = Callable[[Sequence[OrientationEdge]], PredecessorMap]


def to_networkx(edges: Sequence[OrientationEdge]) -> nx.Graph:
    """Build an undirected unit-weight graph, nodes in order of first appearance.

    Args:
        edges: Orientation edges.

    Returns:
        Simple graph; parallel measurements collapse into one edge.
    """
    graph = nx.Graph()
    for edge in edges:
        graph.add_edge(edge.key1, edge.key2, weight=1.0)
    return graph


def minimum_spanning_tree(
    edges: Sequence[OrientationEdge],
    root: Optional[int] = None,
    anchor_key: int = ANCHOR_KEY,
) -> PredecessorMap:
    """Compute a rooted minimum spanning tree of the orientation subgraph.

    Args:
        edges: Orientation edges.
        root: Root key. Defaults to ``anchor_key`` when priors are present,
            otherwise to the first key of the first edge.
        anchor_key: Key of the fictitious prior node.

    Returns:
        Predecessor map covering every key of the subgraph.

    Raises:
        ValueError: If there are no edges or the root is not in the subgraph.
        DisconnectedGraphError: If the subgraph has more than one component.
    """
    if len(edges) == 0:
        raise ValueError("Cannot build a spanning tree without edges")

    graph = to_networkx(edges)
    if root is None:
        root = anchor_key if graph.has_node(anchor_key) else edges[0].key1
    elif not graph.has_node(root):
        raise ValueError(f"Root key {root} is not part of the subgraph")

    if not nx.is_connected(graph):
        components = nx.number_connected_components(graph)
        raise DisconnectedGraphError(
            f"Orientation subgraph has {components} connected components, expected 1"
        )

    mst = nx.minimum_spanning_tree(graph, weight="weight", algorithm="kruskal")

    tree: PredecessorMap = {root: root}
    for child, parent in nx.bfs_predecessors(mst, root):
        tree[child] = parent

    logger.debug("Spanning tree over %d keys rooted at %d", len(tree), root)
    return tree


def find_root(tree: PredecessorMap) -> int:
    """Return the unique key that is its own parent.

    Args:
        tree: Predecessor map.

    Returns:
        Root key.

    Raises:
        ValueError: If the map has no root or several roots.
    """
    roots = [key for key, parent in tree.items() if key == parent]
    if len(roots) != 1:
        raise ValueError(f"Predecessor map must have exactly one root, found {len(roots)}")
    return roots[0]
