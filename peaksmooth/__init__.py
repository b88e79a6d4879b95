"""
peaksmooth - Quadratic B-spline smoothing of chromatographic elution curves.

This package resamples irregularly sampled elution profiles onto evenly
parameterized curves with a quadratic B-spline, and runs that smoothing over
very large numbers of curves in parallel with per-worker scratch buffers.
"""

from .config import RunnerConfig, SmoothingConfig
from .core import Curve, PointSequence, Sample
from .errors import (
    InvalidInputSizeError,
    SequenceSealedError,
    SmoothingError,
    TaskFailureError,
    UnsupportedDegreeError,
)
from .processing import SmoothingRunResult, SmoothingTask, SmoothingTaskRunner
from .regions import PeakRegion, PeakRegionSplitter
from .smoothing import ScratchBuffers
from .smoothing.bspline import evaluate_quadratic_bspline
from .smoothing.buffer_pool import BufferPool
from .smoothing.resampler import CurveResampler, resample_padded, resample_unpadded

__version__ = "0.1.0"

# Expose main API
__all__ = [
    "__version__",
    "BufferPool",
    "Curve",
    "CurveResampler",
    "InvalidInputSizeError",
    "PeakRegion",
    "PeakRegionSplitter",
    "PointSequence",
    "RunnerConfig",
    "Sample",
    "ScratchBuffers",
    "SequenceSealedError",
    "SmoothingConfig",
    "SmoothingError",
    "SmoothingRunResult",
    "SmoothingTask",
    "SmoothingTaskRunner",
    "TaskFailureError",
    "UnsupportedDegreeError",
    "evaluate_quadratic_bspline",
    "resample_padded",
    "resample_unpadded",
]
