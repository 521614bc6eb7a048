"""
Data structures for image restoration.
"""

from dataclasses import dataclass

import numpy as np

from .exceptions import PreconditionViolation


@dataclass(eq=False)
class Tensor:
    """
    Dense multi-channel raster buffer with samples in [0, 1].

    The buffer is a C-contiguous float64 array of shape (H, W, C), so its flat
    view is row-major with channel as the fastest-varying axis:
    index = (y * W + x) * C + c.

    Attributes
    ----------
    data : np.ndarray
        Sample buffer of shape (H, W, C). A 2-D input is promoted to a single
        channel. The input is always copied; two Tensors never share memory.

    Notes
    -----
    Samples are expected in [0, 1]; this is the caller's precondition and is
    not checked here. Out-of-range samples are carried through the solver
    unchanged and only clamped when encoding with to_uint8().
    """

    data: np.ndarray

    def __post_init__(self):
        data = np.array(self.data, dtype=np.float64, order="C", copy=True)
        if data.ndim == 2:
            data = data[:, :, np.newaxis]
        if data.ndim != 3:
            raise PreconditionViolation(f"Tensor data must have shape (H, W, C), got {data.shape}")
        if data.shape[2] < 1:
            raise PreconditionViolation("Tensor must have at least one channel")
        self.data = data

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def channels(self) -> int:
        return self.data.shape[2]

    @property
    def n_pixels(self) -> int:
        return self.height * self.width

    @property
    def flat(self) -> np.ndarray:
        """Read-only flat view of the samples, length H*W*C."""
        view = self.data.reshape(-1)
        view.flags.writeable = False
        return view

    def copy(self) -> "Tensor":
        return Tensor(self.data)

    @classmethod
    def from_flat(cls, samples, height: int, width: int, channels: int = 3) -> "Tensor":
        """
        Build a tensor from a flat row-major, channel-minor sample sequence.

        Parameters
        ----------
        samples : array-like
            Sequence of height * width * channels floats.
        height, width, channels : int
            Raster dimensions.

        Returns
        -------
        Tensor
            New tensor owning a copy of the samples.
        """
        samples = np.asarray(samples, dtype=np.float64).reshape(-1)
        expected = height * width * channels
        if samples.size != expected:
            raise PreconditionViolation(
                f"Sample count {samples.size} inconsistent with {height}x{width}x{channels} = {expected}"
            )
        return cls(samples.reshape(height, width, channels))

    @classmethod
    def from_uint8(cls, pixels: np.ndarray) -> "Tensor":
        """
        Decode 8-bit samples into a normalized tensor.

        Samples are divided by 255. A fourth (alpha) channel is dropped, so
        both RGB and RGBA buffers yield a 3-channel tensor.

        Parameters
        ----------
        pixels : np.ndarray
            Array of shape (H, W), (H, W, 3) or (H, W, 4) with values in [0, 255].

        Returns
        -------
        Tensor
            Normalized tensor.
        """
        pixels = np.asarray(pixels)
        if pixels.ndim == 3 and pixels.shape[2] == 4:
            pixels = pixels[:, :, :3]
        return cls(pixels.astype(np.float64) / 255.0)

    def to_uint8(self) -> np.ndarray:
        """
        Encode the tensor as 8-bit samples.

        Samples are multiplied by 255, rounded to the nearest integer (halves
        round up) and clamped to [0, 255].

        Returns
        -------
        np.ndarray
            uint8 array of shape (H, W, C).
        """
        scaled = np.clip(np.floor(self.data * 255.0 + 0.5), 0, 255)
        return scaled.astype(np.uint8)


def as_known_mask(known, height: int, width: int) -> np.ndarray:
    """
    Coerce a known-mask to a flat uint8 array of length height * width.

    Any non-zero entry is treated as known (1).

    Raises
    ------
    PreconditionViolation
        If the mask does not hold exactly one flag per pixel.
    """
    mask = np.asarray(known).reshape(-1)
    if mask.size != height * width:
        raise PreconditionViolation(
            f"Mask length {mask.size} inconsistent with image size {height}x{width} = {height * width}"
        )
    return (mask != 0).astype(np.uint8)
