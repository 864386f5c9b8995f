"""Nonlinear refinement of a LAGO initial estimate using GTSAM."""

import logging

import gtsam

logger = logging.getLogger(__name__)


class GraphOptimizer:
    """Optimizes planar pose graphs using GTSAM backend solvers.

    Supports Levenberg-Marquardt and Gauss-Newton optimization.
    """

    METHODS = ("LevenbergMarquardt", "GaussNewton")

    def __init__(
        self,
        method: str = "LevenbergMarquardt",
        max_iterations: int = 100,
        relative_error_tol: float = 1e-5,
        absolute_error_tol: float = 1e-5,
    ) -> None:
        """Initialize optimizer.

        Args:
            method: Optimization method ("LevenbergMarquardt" or "GaussNewton").
            max_iterations: Maximum number of iterations.
            relative_error_tol: Relative error tolerance for convergence.
            absolute_error_tol: Absolute error tolerance for convergence.
        """
        if method not in self.METHODS:
            raise ValueError(f"Unknown optimizer type: {method}")
        self.method = method
        self.max_iterations = max_iterations
        self.relative_error_tol = relative_error_tol
        self.absolute_error_tol = absolute_error_tol

    def optimize(
        self,
        graph: gtsam.NonlinearFactorGraph,
        initial: gtsam.Values,
    ) -> gtsam.Values:
        """Optimize the pose graph.

        Args:
            graph: The factor graph to optimize.
            initial: Initial estimate, typically from ``initialize_poses``.

        Returns:
            The optimized values.
        """
        if self.method == "LevenbergMarquardt":
            params = gtsam.LevenbergMarquardtParams()
            params.setMaxIterations(self.max_iterations)
            params.setRelativeErrorTol(self.relative_error_tol)
            params.setAbsoluteErrorTol(self.absolute_error_tol)
            optimizer = gtsam.LevenbergMarquardtOptimizer(graph, initial, params)
        else:
            params = gtsam.GaussNewtonParams()
            params.setMaxIterations(self.max_iterations)
            params.setRelativeErrorTol(self.relative_error_tol)
            params.setAbsoluteErrorTol(self.absolute_error_tol)
            optimizer = gtsam.GaussNewtonOptimizer(graph, initial, params)

        result = optimizer.optimize()
        logger.info(
            "%s finished after %d iterations, error %.6g -> %.6g",
            self.method,
            optimizer.iterations(),
            graph.error(initial),
            graph.error(result),
        )
        return result
