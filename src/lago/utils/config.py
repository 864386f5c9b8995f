"""Configuration for the LAGO pipeline and the ``lago-init`` command line."""

import argparse
from dataclasses import dataclass
from typing import List, Optional

import gtsam

# Fictitious root used to express absolute priors as relative measurements
ANCHOR_KEY: int = gtsam.symbol("A", 0)

# Variance of the scalar prior pinning the root orientation to zero
ANCHOR_VARIANCE: float = 1e-8


@dataclass(frozen=True)
class LagoParams:
    """Parameters of the orientation initialization.

    Attributes:
        anchor_key: Key of the synthetic node that absolute priors attach to.
        anchor_variance: Variance of the equation fixing the root orientation.
    """

    anchor_key: int = ANCHOR_KEY
    anchor_variance: float = ANCHOR_VARIANCE

    def __post_init__(self) -> None:
        """Validate parameters."""
        if not self.anchor_variance > 0.0:
            raise ValueError("Anchor variance must be positive")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Initialize a planar pose graph (g2o) with LAGO orientations"
    )

    # Input / output
    parser.add_argument("input", type=str, help="Path to the input g2o file")
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Path of the g2o file to write (defaults to <input>_lago.g2o)",
    )

    # Prior
    parser.add_argument(
        "--no-prior",
        action="store_true",
        help="Do not add a prior on the first pose when the graph has none",
    )
    parser.add_argument(
        "--prior-key",
        type=int,
        default=None,
        help="Key of the pose receiving the origin prior (defaults to the smallest pose key)",
    )

    # Initialization
    parser.add_argument(
        "--anchor-variance",
        type=float,
        default=ANCHOR_VARIANCE,
        help="Variance of the equation anchoring the root orientation",
    )

    # Refinement
    parser.add_argument(
        "--refine",
        action="store_true",
        help="Run nonlinear optimization starting from the LAGO estimate",
    )
    parser.add_argument(
        "--optimizer",
        type=str,
        default="LevenbergMarquardt",
        choices=["LevenbergMarquardt", "GaussNewton"],
        help="Nonlinear optimizer used with --refine",
    )
    parser.add_argument("--max-iterations", type=int, default=100, help="Maximum iterations")

    # Verbose
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)
