"""
Convergence tracking for iterative relaxation.
"""

import logging
from typing import List

import numpy as np

logger = logging.getLogger(__name__)


class ConvergenceTracker:
    """
    Record per-sweep residuals and decide when the solver must stop.

    The loop stops as soon as a residual falls strictly below ``tol`` (that
    sweep still counts) or once ``max_iter`` residuals have been recorded.

    Parameters
    ----------
    tol : float
        Early-exit threshold on the residual.
    max_iter : int
        Hard upper bound on the number of sweeps.
    """

    def __init__(self, tol: float, max_iter: int):
        self.tol = tol
        self.max_iter = max(int(max_iter), 0)
        self.converged = False
        self._residuals: List[float] = []

    def record(self, residual: float) -> bool:
        """
        Append the residual of a completed sweep.

        Returns
        -------
        bool
            True if no further sweeps should run.
        """
        if residual < 0:
            raise ValueError(f"Residual must be non-negative, got {residual}")
        self._residuals.append(float(residual))

        if residual < self.tol:
            self.converged = True
            logger.debug(f"Converged at sweep {self.iterations}: residual={residual:.3e} < tol={self.tol:.1e}")
            return True
        return self.iterations >= self.max_iter

    @property
    def iterations(self) -> int:
        return len(self._residuals)

    @property
    def residuals(self) -> np.ndarray:
        return np.array(self._residuals, dtype=np.float64)

    @property
    def last_residual(self) -> float:
        return self._residuals[-1] if self._residuals else float("nan")
