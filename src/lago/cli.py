"""Command line tool: LAGO initialization of a planar g2o dataset."""

import logging
from pathlib import Path
from typing import List, Optional

from .exceptions import LagoError, MissingInitialValueError
from .initialization import initialize_poses, poses_to_values
from .pose_graph import GraphOptimizer, add_origin_prior, graph_error, has_prior
from .utils.config import LagoParams, parse_args
from .utils.io import load_g2o, save_g2o

logger = logging.getLogger(__name__)


def default_output_path(input_path: Path) -> Path:
    """Return ``<input stem>_lago.g2o`` next to the input file."""
    return input_path.with_name(f"{input_path.stem}_lago.g2o")


def main(argv: Optional[List[str]] = None) -> int:
    """Run LAGO on a g2o file and write the initialized (optionally refined) estimate."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else default_output_path(input_path)

    try:
        graph, initial = load_g2o(input_path)
        logger.info(
            "Loaded %d factors and %d poses from %s", graph.size(), initial.size(), input_path
        )

        if not args.no_prior and not has_prior(graph) and initial.size() > 0:
            prior_key = args.prior_key
            if prior_key is None:
                prior_key = min(initial.keys())
            elif not initial.exists(prior_key):
                raise MissingInitialValueError(f"No pose with key {prior_key} for the prior")
            logger.info("Adding prior on pose %d", prior_key)
            add_origin_prior(graph, prior_key)

        params = LagoParams(anchor_variance=args.anchor_variance)
        estimate = poses_to_values(initialize_poses(graph, initial, params))

        # Poses not reached by any measurement keep their initial value
        for key in initial.keys():
            if not estimate.exists(key):
                estimate.insert(key, initial.atPose2(key))

        logger.info(
            "Graph error: initial %.6g, LAGO %.6g",
            graph_error(graph, initial),
            graph_error(graph, estimate),
        )

        if args.refine:
            optimizer = GraphOptimizer(method=args.optimizer, max_iterations=args.max_iterations)
            estimate = optimizer.optimize(graph, estimate)

        save_g2o(graph, estimate, output_path)
    except (LagoError, FileNotFoundError) as exc:
        logger.error("LAGO initialization failed: %s", exc)
        return 1

    logger.info("Wrote %s", output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
