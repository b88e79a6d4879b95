"""
Configuration constants for peaksmooth.

This module centralizes all configuration values, magic numbers, and default
settings used by the smoothing kernel and the task runner so they can be
tuned for different acquisition densities and machine sizes.
"""

# B-spline settings
SUPPORTED_SMOOTH_DEGREE = 2  # Only the quadratic kernel is implemented
MIN_CONTROL_POINTS = 4  # Evaluator needs two leading and two trailing knots
MIN_OUTPUT_POINTS = 2  # Both clamped endpoints must exist
MIN_PADDED_SAMPLES = 2  # Padding adds two duplicates -> 4 control points
MIN_UNPADDED_SAMPLES = MIN_CONTROL_POINTS

# Scratch buffer settings
INITIAL_BUFFER_CAPACITY = 1 << 5  # Elements per array on first use
BUFFER_GROWTH_FACTOR = 2  # Reallocate to requested size * factor
BYTES_PER_FLOAT32 = 4

# Smoothing defaults
DEFAULT_POINTS_PER_MINUTE = 150.0  # Density of the smoothed elution curve
DEFAULT_SN_THRESHOLD = 2.0  # Signal-to-noise cutoff handed to splitting
DEFAULT_DETECT_BY_CWT = False

# Task runner settings
MIN_WORKERS = 1
MAX_WORKERS = 64
WORKERS_PER_CPU = 1  # Smoothing is CPU bound, one worker per core
DEFAULT_PROGRESS_UPDATE_INTERVAL = 0.5  # Seconds between progress updates

# Configuration classes
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SmoothingConfig:
    """Per-task smoothing options, read-only once built"""
    detect_by_cwt: bool = DEFAULT_DETECT_BY_CWT
    sn_threshold: float = DEFAULT_SN_THRESHOLD
    smooth_degree: int = SUPPORTED_SMOOTH_DEGREE

    # Output density of the smoothed curve (points per retention minute)
    points_per_minute: float = DEFAULT_POINTS_PER_MINUTE

    def __post_init__(self):
        """Validate configuration after initialization"""
        if self.sn_threshold < 0:
            raise ValueError(f"sn_threshold must be non-negative, got {self.sn_threshold}")

        if self.points_per_minute <= 0:
            raise ValueError(
                f"points_per_minute must be positive, got {self.points_per_minute}"
            )

        # smooth_degree is checked by the resampler so the failure surfaces
        # as UnsupportedDegreeError when the task actually smooths.
        if not isinstance(self.smooth_degree, int):
            raise ValueError(f"smooth_degree must be an integer, got {self.smooth_degree!r}")

    def get_summary(self) -> dict:
        """Get configuration summary for logging"""
        return {
            "detect_by_cwt": self.detect_by_cwt,
            "sn_threshold": self.sn_threshold,
            "smooth_degree": self.smooth_degree,
            "points_per_minute": self.points_per_minute,
        }


@dataclass
class RunnerConfig:
    """Configuration for running many smoothing tasks in parallel"""
    max_workers: Optional[int] = None  # None = derive from CPU count
    show_progress: bool = False
    raise_on_error: bool = False
    release_buffers_on_finish: bool = True

    def __post_init__(self):
        """Validate configuration after initialization"""
        if self.max_workers is not None and not MIN_WORKERS <= self.max_workers <= MAX_WORKERS:
            raise ValueError(
                f"max_workers must satisfy {MIN_WORKERS} <= max_workers <= {MAX_WORKERS}, "
                f"got {self.max_workers}"
            )

    def get_summary(self) -> dict:
        """Get configuration summary for logging"""
        return {
            "max_workers": self.max_workers,
            "show_progress": self.show_progress,
            "raise_on_error": self.raise_on_error,
        }
