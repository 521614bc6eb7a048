"""
Known-mask construction for image restoration.

Two mutually exclusive strategies produce a known-mask (1 = known pixel,
0 = pixel to fill):

- Manual: the complement of a user-painted damage mask, accumulated in a
  caller-owned PaintMask.
- Random: each pixel independently unknown with probability p/100.
"""

import logging
from typing import Optional, Union

import numpy as np

from .exceptions import EmptyMaskError, PreconditionViolation

logger = logging.getLogger(__name__)


class PaintMask:
    """
    Accumulator of brush strokes over a width x height raster.

    Entries are 1 where the user marked a pixel as damaged and 0 elsewhere.
    The mask is owned by the caller and only changes through stamp() and clear().

    Parameters
    ----------
    width : int
        Raster width in pixels.
    height : int
        Raster height in pixels.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"PaintMask dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._mask = np.zeros((height, width), dtype=np.uint8)

    def stamp(self, x: int, y: int, brush_size: int) -> int:
        """
        Paint a filled disc centred on (x, y).

        Every in-bounds pixel with dx^2 + dy^2 <= r^2, r = brush_size // 2,
        is marked as damaged. Pixels outside the raster are ignored.

        Parameters
        ----------
        x, y : int
            Brush centre in pixel coordinates.
        brush_size : int
            Brush diameter in pixels.

        Returns
        -------
        int
            Number of pixels newly marked by this stamp.
        """
        if brush_size < 1:
            raise ValueError(f"brush_size must be >= 1, got {brush_size}")
        radius = brush_size // 2

        y0, y1 = max(0, y - radius), min(self.height - 1, y + radius)
        x0, x1 = max(0, x - radius), min(self.width - 1, x + radius)
        if y0 > y1 or x0 > x1:
            return 0

        dy = np.arange(y0, y1 + 1)[:, np.newaxis] - y
        dx = np.arange(x0, x1 + 1)[np.newaxis, :] - x
        disc = (dx * dx + dy * dy) <= radius * radius

        region = self._mask[y0 : y1 + 1, x0 : x1 + 1]
        newly_painted = int(np.count_nonzero(disc & (region == 0)))
        region[disc] = 1
        return newly_painted

    def merge(self, strokes) -> None:
        """
        Add an externally drawn damage mask to the accumulated strokes.

        Parameters
        ----------
        strokes : array-like
            Mask of shape (height, width) or (height * width,); non-zero
            entries are marked as damaged.
        """
        strokes = np.asarray(strokes).reshape(-1)
        if strokes.size != self.width * self.height:
            raise PreconditionViolation(
                f"Stroke mask length {strokes.size} inconsistent with {self.height}x{self.width}"
            )
        self._mask[strokes.reshape(self.height, self.width) != 0] = 1

    def clear(self) -> None:
        """Erase all strokes."""
        self._mask.fill(0)

    @property
    def painted_count(self) -> int:
        return int(np.count_nonzero(self._mask))

    @property
    def data(self) -> np.ndarray:
        """Copy of the mask as a flat uint8 array of length width * height."""
        return self._mask.reshape(-1).copy()


def build_known_mask_from_paint(paint_mask: Union[PaintMask, np.ndarray]) -> np.ndarray:
    """
    Build a known-mask as the complement of a painted damage mask.

    known[i] = 1 where paint[i] == 0, and 0 where the pixel was painted.

    Parameters
    ----------
    paint_mask : PaintMask or array-like
        Damage mask with 1 = painted (damaged), 0 = untouched.

    Returns
    -------
    np.ndarray
        Known-mask, flat uint8 array of the same length as paint_mask.

    Raises
    ------
    EmptyMaskError
        If no pixel is painted.
    """
    if isinstance(paint_mask, PaintMask):
        width, height = paint_mask.width, paint_mask.height
        paint = paint_mask.data
    else:
        paint = np.asarray(paint_mask).reshape(-1)
        width = height = None
        if paint.size == 0:
            raise PreconditionViolation("Paint mask is empty (zero pixels)")

    painted = paint != 0
    painted_count = int(np.count_nonzero(painted))
    if painted_count == 0:
        raise EmptyMaskError(width=width, height=height)

    known = (~painted).astype(np.uint8)
    logger.info(f"Manual mask applied: {painted_count} pixels marked as unknown")
    return known


def build_random_known_mask(
    width: int,
    height: int,
    damage_percent: float,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Build a random known-mask.

    Each pixel is drawn independently: it stays known when a uniform draw in
    [0, 1) exceeds damage_percent / 100, so it becomes unknown with
    probability damage_percent / 100.

    Parameters
    ----------
    width, height : int
        Raster dimensions.
    damage_percent : float
        Percentage of pixels to damage, in [0, 100].
    rng : np.random.Generator, optional
        Random source. If None, a fresh unseeded generator is used; pass a
        seeded generator for reproducible masks.

    Returns
    -------
    np.ndarray
        Known-mask, flat uint8 array of length width * height.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Mask dimensions must be positive, got {width}x{height}")
    if not 0 <= damage_percent <= 100:
        raise ValueError(f"damage_percent must be in [0, 100], got {damage_percent}")

    if rng is None:
        rng = np.random.default_rng()

    draws = rng.random(width * height)
    known = (draws > damage_percent / 100.0).astype(np.uint8)

    logger.info(
        f"Random damage: {damage_percent}% requested, "
        f"{known.size - int(known.sum())}/{known.size} pixels unknown"
    )
    return known
