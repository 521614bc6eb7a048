"""
Damage simulation: blank out unknown pixels of a source image.
"""

import numpy as np

from .data_structures import Tensor, as_known_mask


def make_damaged_view(source: Tensor, known) -> Tensor:
    """
    Derive the damaged view of a source tensor.

    The source is copied and every channel of each pixel with known == 0 is
    set to 0. The source tensor is left untouched.

    Parameters
    ----------
    source : Tensor
        Ground-truth image.
    known : array-like
        Known-mask with one flag per pixel (1 = known, 0 = unknown).

    Returns
    -------
    Tensor
        Damaged tensor, the initial state and boundary data of the solver.

    Raises
    ------
    PreconditionViolation
        If the mask length differs from the number of pixels.
    """
    mask = as_known_mask(known, source.height, source.width)
    damaged = source.copy()
    unknown = mask.reshape(source.height, source.width) == 0
    damaged.data[unknown] = 0.0
    return damaged


def count_unknown(known) -> int:
    """Number of unknown (0) entries in a known-mask."""
    return int(np.count_nonzero(np.asarray(known) == 0))
