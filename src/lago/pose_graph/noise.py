"""Noise model helpers for GTSAM.

This module provides constructors for the noise models used by planar
measurements and the reduction of a model to its angular standard deviation.
"""

import math

import gtsam
import numpy as np
import numpy.typing as npt

from ..exceptions import InvalidNoiseModelError


def create_noise_model_diagonal(
    sigmas: npt.NDArray[np.float64],
) -> gtsam.noiseModel.Diagonal:
    """Create a diagonal noise model for GTSAM.

    Args:
        sigmas: Standard deviations for each dimension (3D for Pose2, 1D for Rot2).

    Returns:
        GTSAM diagonal noise model.
    """
    return gtsam.noiseModel.Diagonal.Sigmas(np.asarray(sigmas, dtype=np.float64))


def create_noise_model_isotropic(dim: int, sigma: float) -> gtsam.noiseModel.Isotropic:
    """Create an isotropic noise model.

    Args:
        dim: Dimension of the noise model.
        sigma: Standard deviation (same for all dimensions).

    Returns:
        GTSAM isotropic noise model.
    """
    return gtsam.noiseModel.Isotropic.Sigma(dim, sigma)


def angular_sigma(noise_model: gtsam.noiseModel.Base) -> float:
    """Extract the standard deviation of the rotation component.

    The rotation is the last tangent-space coordinate for both Pose2 (x, y, theta)
    and Rot2 (theta), so the last sigma of a diagonal model is returned.

    Args:
        noise_model: Noise model attached to a planar measurement.

    Returns:
        Angular standard deviation in radians.

    Raises:
        InvalidNoiseModelError: If the model is not diagonal or its angular
            sigma is not a positive finite number.
    """
    if not isinstance(noise_model, gtsam.noiseModel.Diagonal):
        raise InvalidNoiseModelError(
            f"Only diagonal noise models are supported, got {type(noise_model).__name__}"
        )

    sigmas = np.asarray(noise_model.sigmas(), dtype=np.float64).ravel()
    if sigmas.size == 0:
        raise InvalidNoiseModelError("Noise model has no dimensions")

    sigma = float(sigmas[-1])
    if not math.isfinite(sigma) or sigma <= 0.0:
        raise InvalidNoiseModelError(f"Angular sigma must be positive and finite, got {sigma}")
    return sigma
