"""
SORInpaint: image inpainting by Gauss-Seidel / successive over-relaxation.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("sorinpaint")
except PackageNotFoundError:
    # Package is not installed, use fallback (for development)
    __version__ = "0.1.0"  # Sync with pyproject.toml manually for development

from .core.config import InpaintConfig, export_default_config
from .core.pipeline import InpaintingPipeline, run_pipeline
from .restoration import (
    Tensor,
    PaintMask,
    ReconstructionResult,
    ConvergenceTracker,
    InpaintingError,
    EmptyMaskError,
    PreconditionViolation,
    build_known_mask_from_paint,
    build_random_known_mask,
    make_damaged_view,
    reconstruct,
    rmse_on_missing,
)

__all__ = [
    "InpaintConfig",
    "export_default_config",
    "InpaintingPipeline",
    "run_pipeline",
    "Tensor",
    "PaintMask",
    "ReconstructionResult",
    "ConvergenceTracker",
    "InpaintingError",
    "EmptyMaskError",
    "PreconditionViolation",
    "build_known_mask_from_paint",
    "build_random_known_mask",
    "make_damaged_view",
    "reconstruct",
    "rmse_on_missing",
]
