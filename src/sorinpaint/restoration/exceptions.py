"""
Exception hierarchy for image restoration.

All exceptions inherit from InpaintingError for unified handling.
"""

from typing import Optional


class InpaintingError(Exception):
    """Base exception for all restoration errors."""
    pass


class EmptyMaskError(InpaintingError):
    """Raised when a manual damage mask has no painted pixels."""

    def __init__(
        self, message: Optional[str] = None, width: Optional[int] = None, height: Optional[int] = None
    ):
        if message is None:
            message = "No pixels are painted in the damage mask; paint the damaged region and try again."
        super().__init__(message)
        self.width = width
        self.height = height


class PreconditionViolation(InpaintingError, ValueError):
    """Raised when tensor and mask dimensions do not line up."""
    pass
