"""Extraction of the relative-orientation subgraph."""

import logging
from typing import List, Sequence

from ..pose_graph.measurement import PRIOR_KINDS, RELATIVE_KINDS, Measurement, OrientationEdge
from ..utils.config import ANCHOR_KEY

logger = logging.getLogger(__name__)


def extract_orientation_subgraph(
    measurements: Sequence[Measurement],
    anchor_key: int = ANCHOR_KEY,
) -> List[OrientationEdge]:
    """Select the measurements that constrain relative orientations.

    Between measurements are kept as they are. Priors are rewritten as relative
    measurements from ``anchor_key`` to the constrained key, with the same
    value and noise. Every other kind is dropped.

    Args:
        measurements: Full measurement collection, in order.
        anchor_key: Key of the fictitious node that priors are attached to.

    Returns:
        Orientation edges in input order.
    """
    edges: List[OrientationEdge] = []
    dropped = 0

    for index, measurement in enumerate(measurements):
        if measurement.kind in RELATIVE_KINDS:
            key1, key2 = measurement.keys
            if key1 == key2:
                logger.debug("Skipping self-loop measurement %d on key %d", index, key1)
                dropped += 1
                continue
        elif measurement.kind in PRIOR_KINDS:
            key1, key2 = anchor_key, measurement.keys[0]
        else:
            dropped += 1
            continue

        edges.append(
            OrientationEdge(
                key1=key1,
                key2=key2,
                delta=measurement.theta,
                noise_model=measurement.noise_model,
                source_index=index,
            )
        )

    logger.debug("Orientation subgraph: %d edges, %d measurements dropped", len(edges), dropped)
    return edges
