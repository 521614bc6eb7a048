"""
Main pipeline orchestrator for SORInpaint package.
"""

import logging
from typing import Optional

import numpy as np

from .config import InpaintConfig
from ..restoration.data_structures import Tensor
from ..restoration.exceptions import InpaintingError
from ..restoration.masks import PaintMask, build_known_mask_from_paint, build_random_known_mask
from ..restoration.damage import make_damaged_view, count_unknown
from ..restoration.solver import ReconstructionResult, reconstruct
from ..utils.helpers import setup_logging

logger = logging.getLogger(__name__)


class InpaintingPipeline:
    """
    Step-by-step pipeline: load image, paint or randomise damage, reconstruct.

    Loading a new image resets every derived artefact (mask, damaged view,
    result). A failed damage step leaves the previous state untouched.
    """

    def __init__(self, config: Optional[InpaintConfig] = None):
        """
        Initialize pipeline with configuration.

        Parameters
        ----------
        config : InpaintConfig, optional
            Pipeline configuration. Defaults to InpaintConfig().
        """
        self.config = config if config is not None else InpaintConfig()
        self.rng = np.random.default_rng(self.config.seed)

        self.source: Optional[Tensor] = None
        self.paint_mask: Optional[PaintMask] = None
        self.known_mask: Optional[np.ndarray] = None
        self.damaged: Optional[Tensor] = None
        self.result: Optional[ReconstructionResult] = None

    def load_tensor(self, tensor: Tensor) -> None:
        """Load a source image and reset all derived state."""
        self.source = tensor.copy()
        self.paint_mask = PaintMask(tensor.width, tensor.height)
        self.known_mask = None
        self.damaged = None
        self.result = None
        logger.info(f"Loaded image {tensor.width}x{tensor.height} with {tensor.channels} channels")

    def load_uint8(self, pixels: np.ndarray) -> None:
        """Decode 8-bit RGB or RGBA samples and load them as the source image."""
        self.load_tensor(Tensor.from_uint8(pixels))

    def _require_source(self) -> Tensor:
        if self.source is None:
            raise InpaintingError("No image loaded; call load_tensor() or load_uint8() first")
        return self.source

    def paint(self, x: int, y: int, brush_size: Optional[int] = None) -> int:
        """
        Stamp the brush on the damage mask.

        Returns
        -------
        int
            Number of newly painted pixels.
        """
        self._require_source()
        size = self.config.brush_size if brush_size is None else brush_size
        return self.paint_mask.stamp(x, y, size)

    def clear_paint(self) -> None:
        """Erase every painted stroke."""
        self._require_source()
        self.paint_mask.clear()

    @property
    def painted_pixel_count(self) -> int:
        return self.paint_mask.painted_count if self.paint_mask is not None else 0

    @property
    def unknown_pixel_count(self) -> int:
        return count_unknown(self.known_mask) if self.known_mask is not None else 0

    def apply_damage(self) -> Tensor:
        """
        Build the known-mask and the damaged view of the source image.

        Uses the painted mask if config.use_manual_mask is set, otherwise a
        random mask with config.damage_percent.

        Returns
        -------
        Tensor
            Damaged view.

        Raises
        ------
        EmptyMaskError
            If manual masking is selected and nothing has been painted.
        """
        source = self._require_source()

        if self.config.use_manual_mask:
            known = build_known_mask_from_paint(self.paint_mask)
        else:
            known = build_random_known_mask(
                source.width, source.height, self.config.damage_percent, rng=self.rng
            )

        self.known_mask = known
        self.damaged = make_damaged_view(source, known)
        self.result = None
        logger.info(f"Region to reconstruct: {self.unknown_pixel_count} unknown pixels")
        return self.damaged

    def run_reconstruction(self) -> ReconstructionResult:
        """
        Reconstruct the damaged view with the configured solver parameters.

        Raises
        ------
        InpaintingError
            If apply_damage() has not run since the image was loaded.
        """
        if self.damaged is None or self.known_mask is None:
            raise InpaintingError("No damaged image available; call apply_damage() first")

        cfg = self.config
        logger.info(
            f"Running reconstruction: lambda={cfg.lambda_fidelity}, beta={cfg.beta_smoothness}, "
            f"max_iter={cfg.max_iter}, tol={cfg.tol}"
        )
        self.result = reconstruct(
            self.damaged,
            self.known_mask,
            max_iter=cfg.max_iter,
            tol=cfg.tol,
            lambda_fidelity=cfg.lambda_fidelity,
            beta_smoothness=cfg.beta_smoothness,
            source=self.source,
            show_progress=cfg.show_progress,
        )
        logger.info(
            f"Reconstruction complete: {self.result.iterations} iterations, RMSE={self.result.rmse:.4f}"
        )
        return self.result


def run_pipeline(
    pixels: np.ndarray,
    paint_mask: Optional[np.ndarray] = None,
    log_level: str = "INFO",
    **config_kwargs,
) -> ReconstructionResult:
    """
    Convenience function to damage and reconstruct an 8-bit image in one call.

    Parameters
    ----------
    pixels : np.ndarray
        8-bit image of shape (H, W, 3) or (H, W, 4).
    paint_mask : np.ndarray, optional
        Damage mask of shape (H, W) with 1 = damaged. If given, manual masking
        is used; otherwise damage is random.
    log_level : str
        Logging level.
    **config_kwargs
        Additional InpaintConfig parameters.

    Returns
    -------
    ReconstructionResult
        Reconstruction output.
    """
    setup_logging(log_level)

    config_kwargs["use_manual_mask"] = paint_mask is not None
    pipeline = InpaintingPipeline(InpaintConfig(**config_kwargs))
    pipeline.load_uint8(pixels)

    if paint_mask is not None:
        pipeline.paint_mask.merge(paint_mask)

    pipeline.apply_damage()
    return pipeline.run_reconstruction()
