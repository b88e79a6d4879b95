"""
Curve resampling with the quadratic B-spline kernel.

Two boundary conventions are exposed as separate entry points:

* :meth:`CurveResampler.resample_padded` duplicates the first and last
  samples (clamped uniform knots) so the curve runs exactly through both
  input endpoints.
* :meth:`CurveResampler.resample_unpadded` feeds the samples as they are and
  evaluates one extra point, returning only the requested number. Callers
  that depend on this boundary behaviour must use it explicitly.
"""

from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from ..config import (
    MIN_OUTPUT_POINTS,
    MIN_PADDED_SAMPLES,
    MIN_UNPADDED_SAMPLES,
    SUPPORTED_SMOOTH_DEGREE,
)
from ..core.point_sequence import PointSequence
from ..errors import InvalidInputSizeError, UnsupportedDegreeError
from . import ScratchBuffers
from .bspline import evaluate_quadratic_bspline
from .buffer_pool import BufferPool


class CurveResampler:
    """Resamples point sequences onto evenly parameterized B-spline curves.

    Scratch memory comes either from the ``buffers`` argument of each call or,
    when omitted, from the buffer pool entry of the calling thread.
    """

    def __init__(self, buffer_pool: Optional[BufferPool] = None):
        self.buffer_pool = buffer_pool if buffer_pool is not None else BufferPool()

    def resample_padded(self,
                        points: PointSequence,
                        num_output_points: int,
                        smooth_degree: int = SUPPORTED_SMOOTH_DEGREE,
                        buffers: Optional[ScratchBuffers] = None) -> PointSequence:
        """
        Resample with duplicated boundary samples.

        Args:
            points: Input samples, at least two
            num_output_points: Length of the returned sequence, at least two
            smooth_degree: B-spline degree, must be 2
            buffers: Scratch buffers owned by the caller's execution context

        Returns:
            New sealed sequence of ``num_output_points`` samples whose first
            and last samples equal the first and last input samples

        Raises:
            UnsupportedDegreeError: If ``smooth_degree`` is not 2
            InvalidInputSizeError: If the input or output is too short
        """
        _check_degree(smooth_degree)
        count = points.count()
        if count < MIN_PADDED_SAMPLES:
            raise InvalidInputSizeError(
                f"Padded resampling needs at least {MIN_PADDED_SAMPLES} samples, got {count}"
            )
        _check_output_count(num_output_points)

        n = count + 2
        x, y = _channels(points)
        buffers = self._prepare_buffers(buffers, n, num_output_points)

        arr_x = buffers.input_x[:n]
        arr_y = buffers.input_y[:n]
        arr_x[1:n - 1] = x
        arr_y[1:n - 1] = y
        arr_x[0] = x[0]
        arr_y[0] = y[0]
        arr_x[n - 1] = x[-1]
        arr_y[n - 1] = y[-1]

        return _evaluate_channels(arr_x, arr_y, num_output_points, num_output_points, buffers)

    def resample_unpadded(self,
                          points: PointSequence,
                          num_output_points: int,
                          smooth_degree: int = SUPPORTED_SMOOTH_DEGREE,
                          buffers: Optional[ScratchBuffers] = None) -> PointSequence:
        """
        Resample the samples as-is, evaluating one extra point internally.

        The kernel is run for ``num_output_points + 1`` points and the first
        ``num_output_points`` are returned, so the last returned sample is
        not clamped to the last input sample.

        Args:
            points: Input samples, at least four
            num_output_points: Length of the returned sequence, at least two
            smooth_degree: B-spline degree, must be 2
            buffers: Scratch buffers owned by the caller's execution context

        Returns:
            New sealed sequence of exactly ``num_output_points`` samples

        Raises:
            UnsupportedDegreeError: If ``smooth_degree`` is not 2
            InvalidInputSizeError: If the input or output is too short
        """
        _check_degree(smooth_degree)
        count = points.count()
        if count < MIN_UNPADDED_SAMPLES:
            raise InvalidInputSizeError(
                f"Unpadded resampling needs at least {MIN_UNPADDED_SAMPLES} samples, got {count}"
            )
        _check_output_count(num_output_points)

        n = count
        evaluated_points = num_output_points + 1
        x, y = _channels(points)
        buffers = self._prepare_buffers(buffers, n, evaluated_points)

        arr_x = buffers.input_x[:n]
        arr_y = buffers.input_y[:n]
        arr_x[:] = x
        arr_y[:] = y

        return _evaluate_channels(arr_x, arr_y, evaluated_points, num_output_points, buffers)

    def _prepare_buffers(self,
                         buffers: Optional[ScratchBuffers],
                         n: int,
                         num_output_points: int) -> ScratchBuffers:
        if buffers is None:
            return self.buffer_pool.acquire_current(n, num_output_points)
        buffers.ensure_capacity(n, num_output_points)
        return buffers


def _check_degree(smooth_degree: int) -> None:
    if smooth_degree != SUPPORTED_SMOOTH_DEGREE:
        raise UnsupportedDegreeError(smooth_degree)


def _check_output_count(num_output_points: int) -> None:
    # Checked before any buffer write
    if num_output_points < MIN_OUTPUT_POINTS:
        raise InvalidInputSizeError(
            f"At least {MIN_OUTPUT_POINTS} output points are required, got {num_output_points}"
        )


def _channels(points: PointSequence) -> Tuple[NDArray[np.float32], NDArray[np.float32]]:
    if points.is_sealed:
        return points.x_values, points.y_values
    samples = list(points)
    return (np.array([s.x for s in samples], dtype=np.float32),
            np.array([s.y for s in samples], dtype=np.float32))


def _evaluate_channels(arr_x: NDArray[np.float32],
                       arr_y: NDArray[np.float32],
                       evaluated_points: int,
                       emitted_points: int,
                       buffers: ScratchBuffers) -> PointSequence:
    smoothed_x = evaluate_quadratic_bspline(arr_x, evaluated_points, out=buffers.output_x)
    smoothed_y = evaluate_quadratic_bspline(arr_y, evaluated_points, out=buffers.output_y)
    # from_arrays copies, the result never aliases scratch memory
    return PointSequence.from_arrays(smoothed_x[:emitted_points], smoothed_y[:emitted_points])


_default_resampler = CurveResampler()


def get_default_resampler() -> CurveResampler:
    """Process-wide resampler whose pool is keyed by calling thread"""
    return _default_resampler


def resample_padded(points: PointSequence,
                    num_output_points: int,
                    smooth_degree: int = SUPPORTED_SMOOTH_DEGREE,
                    buffers: Optional[ScratchBuffers] = None) -> PointSequence:
    """Module-level :meth:`CurveResampler.resample_padded` on a shared pool"""
    return _default_resampler.resample_padded(points, num_output_points, smooth_degree, buffers)


def resample_unpadded(points: PointSequence,
                      num_output_points: int,
                      smooth_degree: int = SUPPORTED_SMOOTH_DEGREE,
                      buffers: Optional[ScratchBuffers] = None) -> PointSequence:
    """Module-level :meth:`CurveResampler.resample_unpadded` on a shared pool"""
    return _default_resampler.resample_unpadded(points, num_output_points, smooth_degree, buffers)
