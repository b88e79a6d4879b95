"""
B-spline Smoothing Module

This module resamples irregularly spaced elution profiles onto evenly
parameterized curves with a quadratic B-spline, using per-context scratch
buffers so that millions of invocations do not allocate in steady state.
"""

from dataclasses import dataclass
import numpy as np
from numpy.typing import NDArray

from ..config import BUFFER_GROWTH_FACTOR, BYTES_PER_FLOAT32, INITIAL_BUFFER_CAPACITY


# Scratch space for one execution context
@dataclass
class ScratchBuffers:
    """Reusable float32 arrays for one execution context.

    Capacity only ever grows. Contents are overwritten on every use and are
    never zeroed, so readers must only look at the prefix they just wrote.
    """
    input_x: NDArray[np.float32]
    input_y: NDArray[np.float32]
    output_x: NDArray[np.float32]
    output_y: NDArray[np.float32]
    growth_count: int = 0

    @classmethod
    def allocate(cls, capacity: int = INITIAL_BUFFER_CAPACITY) -> "ScratchBuffers":
        """Create a fresh buffer set with ``capacity`` elements per array"""
        return cls(
            input_x=np.empty(capacity, dtype=np.float32),
            input_y=np.empty(capacity, dtype=np.float32),
            output_x=np.empty(capacity, dtype=np.float32),
            output_y=np.empty(capacity, dtype=np.float32),
        )

    @property
    def input_capacity(self) -> int:
        return len(self.input_x)

    @property
    def output_capacity(self) -> int:
        return len(self.output_x)

    def ensure_capacity(self, min_input: int, min_output: int) -> bool:
        """Grow the arrays so they hold at least the requested sizes.

        Args:
            min_input: Number of control points about to be written
            min_output: Number of evaluated points about to be written

        Returns:
            True if any array was reallocated
        """
        grew = False
        if self.input_capacity < min_input:
            self.input_x = np.empty(min_input * BUFFER_GROWTH_FACTOR, dtype=np.float32)
            self.input_y = np.empty(min_input * BUFFER_GROWTH_FACTOR, dtype=np.float32)
            grew = True
        if self.output_capacity < min_output:
            self.output_x = np.empty(min_output * BUFFER_GROWTH_FACTOR, dtype=np.float32)
            self.output_y = np.empty(min_output * BUFFER_GROWTH_FACTOR, dtype=np.float32)
            grew = True
        if grew:
            self.growth_count += 1
        return grew

    @property
    def nbytes(self) -> int:
        return 2 * (self.input_capacity + self.output_capacity) * BYTES_PER_FLOAT32


__all__ = [
    'ScratchBuffers',
]
