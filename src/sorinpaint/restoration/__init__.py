"""
Image restoration by Gauss-Seidel / SOR relaxation.

This module fills unknown pixels of a raster image by iterating a
4-neighbour average over the unknown region, holding known pixels fixed:

    u <- u + omega * (mean_4(u) - u),    omega = 1.25

where:
    - Known pixels form a Dirichlet boundary and are never altered
    - Out-of-image neighbours fold back onto the edge (zero-flux boundary)
    - Sweeps are in-place and row-major (Gauss-Seidel)

Main Classes
------------
Tensor : Dense (H, W, C) raster buffer with samples in [0, 1]
PaintMask : Caller-owned accumulator of brush strokes
ConvergenceTracker : Per-sweep residuals and stopping decision
ReconstructionResult : Container for reconstruction outputs

Main Functions
--------------
build_known_mask_from_paint : Known-mask as the complement of a painted mask
build_random_known_mask : Known-mask with random per-pixel damage
make_damaged_view : Zero the unknown pixels of a source image
reconstruct : Run the relaxation solver
rmse_on_missing : RMSE restricted to originally unknown pixels

Examples
--------
>>> import numpy as np
>>> from sorinpaint.restoration import Tensor, build_random_known_mask, make_damaged_view, reconstruct
>>> source = Tensor(np.full((32, 32, 3), 0.5))
>>> known = build_random_known_mask(32, 32, 30, rng=np.random.default_rng(0))
>>> damaged = make_damaged_view(source, known)
>>> result = reconstruct(damaged, known, max_iter=500, tol=1e-4, source=source)
>>> result.iterations <= 500
True
"""

from .data_structures import Tensor, as_known_mask
from .exceptions import InpaintingError, EmptyMaskError, PreconditionViolation
from .masks import PaintMask, build_known_mask_from_paint, build_random_known_mask
from .damage import make_damaged_view, count_unknown
from .convergence import ConvergenceTracker
from .solver import ReconstructionResult, reconstruct, SOR_OMEGA
from .validation import rmse_on_missing

__all__ = [
    # Data structures
    "Tensor",
    "as_known_mask",
    "PaintMask",
    # Errors
    "InpaintingError",
    "EmptyMaskError",
    "PreconditionViolation",
    # Mask model and damage
    "build_known_mask_from_paint",
    "build_random_known_mask",
    "make_damaged_view",
    "count_unknown",
    # Solver
    "ConvergenceTracker",
    "ReconstructionResult",
    "reconstruct",
    "SOR_OMEGA",
    # Quality
    "rmse_on_missing",
]
