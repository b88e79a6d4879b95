"""Exception types raised by the smoothing kernel and task runner."""

from typing import Optional


class SmoothingError(Exception):
    """Base class for all peaksmooth errors."""


class UnsupportedDegreeError(SmoothingError, ValueError):
    """Raised when a B-spline degree other than the quadratic one is requested."""

    def __init__(self, degree: int):
        self.degree = degree
        super().__init__(
            f"Unsupported smoothing degree {degree}: only quadratic (2) B-splines are implemented"
        )


class InvalidInputSizeError(SmoothingError, ValueError):
    """Raised when an input or output size is below what the B-spline needs."""


class SequenceSealedError(SmoothingError, RuntimeError):
    """Raised when a point sequence is used against its sealed/unsealed state."""


class TaskFailureError(SmoothingError, RuntimeError):
    """A smoothing task failed; the original exception is chained as __cause__."""

    def __init__(self, curve_id: Optional[str], message: str):
        self.curve_id = curve_id
        super().__init__(f"Smoothing task for curve {curve_id} failed: {message}")
