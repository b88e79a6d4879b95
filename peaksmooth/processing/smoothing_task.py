"""
Smoothing task: the unit of parallel work for one elution curve.
"""

import logging
from typing import List, Optional

import numpy as np

from ..config import MIN_OUTPUT_POINTS, SmoothingConfig
from ..core.curve import Curve
from ..errors import InvalidInputSizeError
from ..regions.base_splitter import PeakRegionSplitter
from ..smoothing import ScratchBuffers
from ..smoothing.resampler import CurveResampler, get_default_resampler


class SmoothingTask:
    """
    Smooths one curve and optionally splits it into unimodal curves.

    The smoothed sequence is computed into a local value and published on the
    curve only once it is complete, so a failing task leaves the curve
    exactly as it was. Exceptions are not caught here; they reach whoever
    runs the task.
    """

    def __init__(self,
                 curve: Curve,
                 config: SmoothingConfig,
                 splitter: Optional[PeakRegionSplitter] = None,
                 buffers: Optional[ScratchBuffers] = None,
                 resampler: Optional[CurveResampler] = None):
        """
        Initialize a smoothing task.

        Args:
            curve: Curve to smooth; owned by this task until it finishes
            config: Smoothing options
            splitter: Region detection/splitting collaborator, required when
                      ``config.detect_by_cwt`` is set
            buffers: Scratch buffers of the execution context running the task.
                     When omitted the resampler's pool entry for the calling
                     thread is used.
            resampler: Resampler to use; defaults to the process-wide one
        """
        if config.detect_by_cwt and splitter is None:
            raise ValueError("A peak region splitter is required when detect_by_cwt is enabled")

        self.curve = curve
        self.config = config
        self.splitter = splitter
        self.buffers = buffers
        self.resampler = resampler if resampler is not None else get_default_resampler()
        self.result_curves: Optional[List[Curve]] = None

    def smoothed_point_count(self) -> int:
        """Length of the smoothed curve: one point per 1/points_per_minute of
        retention time, never fewer points than the raw curve has."""
        points = self.curve.points
        span = float(points.rt_width()) * self.config.points_per_minute
        if not np.isfinite(span):
            raise InvalidInputSizeError(
                f"Curve {self.curve.curve_id} has a non-finite retention span"
            )
        return max(int(span), points.count(), MIN_OUTPUT_POINTS)

    def execute(self) -> List[Curve]:
        """
        Run the task.

        Returns:
            The result curves, also stored on ``result_curves``
        """
        smoothed = self.resampler.resample_padded(
            self.curve.points,
            self.smoothed_point_count(),
            smooth_degree=self.config.smooth_degree,
            buffers=self.buffers,
        )
        self.curve.publish_smoothed(smoothed)

        if self.config.detect_by_cwt:
            regions = self.splitter.detect_regions(self.curve)
            results = list(
                self.splitter.split_by_regions(self.curve, regions, self.config.sn_threshold)
            )
            logging.debug(
                f"Curve {self.curve.curve_id}: {len(regions)} regions, {len(results)} curves kept"
            )
        else:
            results = [self.curve]

        self.result_curves = results
        return results

    def __repr__(self):
        return (f"SmoothingTask(curve={self.curve.curve_id!r}, "
                f"detect_by_cwt={self.config.detect_by_cwt})")
