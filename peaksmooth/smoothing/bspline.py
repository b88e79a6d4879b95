"""Closed-form evaluation of uniform quadratic B-splines."""

from typing import Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..config import MIN_CONTROL_POINTS, MIN_OUTPUT_POINTS, SUPPORTED_SMOOTH_DEGREE
from ..errors import InvalidInputSizeError

_HALF = np.float32(0.5)
_ONE = np.float32(1.0)
_TWO = np.float32(2.0)


def evaluate_quadratic_bspline(
    control_points: ArrayLike,
    num_output_points: int,
    out: Optional[NDArray[np.float32]] = None,
) -> NDArray[np.float32]:
    """Sample a uniform quadratic B-spline at evenly spaced parameters.

    The control points span a knot domain of ``n - 2`` unit intervals. The
    first and last outputs are clamped to the first and last control points;
    interior outputs blend three neighbouring control points with the
    quadratic basis weights ``(1-r)^2/2``, ``1 - b0 - b2`` and ``r^2/2``.
    With the padded convention (first and last control points duplicated)
    the curve passes smoothly into its clamped endpoints.

    All arithmetic is single precision.

    Args:
        control_points: 1-D sequence of at least four control points
        num_output_points: Number of evaluated points, at least two
        out: Optional float32 array receiving the result in its first
             ``num_output_points`` slots

    Returns:
        View of length ``num_output_points`` holding the evaluated values
        (a slice of ``out`` when given)

    Raises:
        InvalidInputSizeError: If there are too few control points or output
            points, or ``out`` is too small. Raised before ``out`` is written.
    """
    data = np.asarray(control_points, dtype=np.float32)
    if data.ndim != 1:
        raise InvalidInputSizeError(f"Control points must be 1-D, got shape {data.shape}")

    n = data.size
    if n < MIN_CONTROL_POINTS:
        raise InvalidInputSizeError(
            f"Quadratic B-spline needs at least {MIN_CONTROL_POINTS} control points, got {n}"
        )
    if num_output_points < MIN_OUTPUT_POINTS:
        raise InvalidInputSizeError(
            f"At least {MIN_OUTPUT_POINTS} output points are required, got {num_output_points}"
        )

    if out is None:
        out = np.empty(num_output_points, dtype=np.float32)
    elif len(out) < num_output_points:
        raise InvalidInputSizeError(
            f"Output buffer holds {len(out)} values, {num_output_points} requested"
        )
    result = out[:num_output_points]

    p = SUPPORTED_SMOOTH_DEGREE
    int_len = np.float32((n + p - 2) - 2) / np.float32(num_output_points - 1)

    if num_output_points > 2:
        i = np.arange(1, num_output_points - 1, dtype=np.float32)
        t = _TWO + i * int_len
        # float rounding may land t on the end of the domain
        ti = np.minimum(t.astype(np.intp), n - 1)
        rem = np.minimum(t - ti.astype(np.float32), _ONE)

        b0 = np.square(_ONE - rem) * _HALF
        b2 = np.square(rem) * _HALF
        b1 = _ONE - b0 - b2
        result[1:-1] = b0 * data[ti - 2] + b1 * data[ti - 1] + b2 * data[ti]

    result[0] = data[0]
    result[-1] = data[n - 1]
    return result
