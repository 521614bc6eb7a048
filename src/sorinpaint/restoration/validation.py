"""
Quality assessment for image restoration.

The metric is only meaningful when a ground-truth image is available
(simulation mode). In a real restoration the unknown pixels have no
reference, so the value is a diagnostic and not a production signal.
"""

import logging

import numpy as np

from .data_structures import Tensor, as_known_mask
from .exceptions import PreconditionViolation

logger = logging.getLogger(__name__)


def rmse_on_missing(source: Tensor, reconstructed: Tensor, known) -> float:
    """
    Compute the RMSE restricted to pixels that were unknown.

    Squared per-channel differences are accumulated over every channel of
    each pixel with known == 0, averaged over the number of such
    (pixel, channel) terms, and square-rooted:

        rmse = sqrt(sum_{i: known_i = 0} sum_c (s_ic - r_ic)^2 / (n_unknown * C))

    Parameters
    ----------
    source : Tensor
        Ground-truth image.
    reconstructed : Tensor
        Restored image, same shape as source.
    known : array-like
        Known-mask with one flag per pixel.

    Returns
    -------
    float
        RMSE over the missing pixels, or 0.0 if no pixel is unknown.

    Raises
    ------
    PreconditionViolation
        If the tensor shapes or the mask length disagree.
    """
    if source.data.shape != reconstructed.data.shape:
        raise PreconditionViolation(
            f"source shape {source.data.shape} inconsistent with reconstructed shape {reconstructed.data.shape}"
        )
    mask = as_known_mask(known, source.height, source.width)
    unknown = mask.reshape(source.height, source.width) == 0

    if not np.any(unknown):
        return 0.0

    diff = source.data[unknown] - reconstructed.data[unknown]
    rmse = float(np.sqrt(np.mean(diff**2)))
    logger.debug(f"RMSE over {diff.shape[0]} missing pixels: {rmse:.4f}")
    return rmse
