"""Ordered (x, y) sample storage used as smoothing input and output."""

from typing import Iterator, List, NamedTuple, Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..errors import SequenceSealedError


class Sample(NamedTuple):
    """One point of an elution profile"""
    x: float  # retention time
    y: float  # intensity


class PointSequence:
    """Insertion-ordered sequence of samples with a one-way seal.

    Samples are appended while the sequence is open. ``finalize_sequence``
    seals it: the channels are frozen into read-only float32 arrays and any
    further ``append`` raises :class:`SequenceSealedError`.
    """

    def __init__(self):
        self._x: Optional[List[float]] = []
        self._y: Optional[List[float]] = []
        self._x_values: Optional[NDArray[np.float32]] = None
        self._y_values: Optional[NDArray[np.float32]] = None

    @classmethod
    def from_arrays(cls, x: ArrayLike, y: ArrayLike) -> "PointSequence":
        """Build a sealed sequence from two equal-length channel arrays.

        The arrays are copied, so the sequence never aliases caller memory.

        Raises:
            ValueError: If the channels are not 1-D or differ in length
        """
        x_arr = np.array(x, dtype=np.float32, copy=True)
        y_arr = np.array(y, dtype=np.float32, copy=True)
        if x_arr.ndim != 1 or y_arr.ndim != 1:
            raise ValueError("x and y channels must be one-dimensional")
        if x_arr.shape != y_arr.shape:
            raise ValueError(
                f"x ({x_arr.shape}) and y ({y_arr.shape}) channels must have same shape"
            )

        sequence = cls()
        sequence._seal_arrays(x_arr, y_arr)
        return sequence

    @property
    def is_sealed(self) -> bool:
        return self._x_values is not None

    def append(self, x: float, y: float) -> None:
        if self.is_sealed:
            raise SequenceSealedError("Cannot append to a finalized point sequence")
        self._x.append(float(x))
        self._y.append(float(y))

    def finalize_sequence(self) -> None:
        """Seal the sequence. Calling it again is a no-op."""
        if self.is_sealed:
            return
        self._seal_arrays(
            np.asarray(self._x, dtype=np.float32),
            np.asarray(self._y, dtype=np.float32),
        )

    def _seal_arrays(self, x_arr: NDArray[np.float32], y_arr: NDArray[np.float32]) -> None:
        x_arr.flags.writeable = False
        y_arr.flags.writeable = False
        self._x_values = x_arr
        self._y_values = y_arr
        self._x = None
        self._y = None

    def count(self) -> int:
        if self.is_sealed:
            return int(self._x_values.size)
        return len(self._x)

    def get(self, index: int) -> Sample:
        if self.is_sealed:
            return Sample(float(self._x_values[index]), float(self._y_values[index]))
        return Sample(self._x[index], self._y[index])

    @property
    def x_values(self) -> NDArray[np.float32]:
        """Read-only retention channel; only available once sealed."""
        if not self.is_sealed:
            raise SequenceSealedError("Channel arrays are only available after finalize_sequence()")
        return self._x_values

    @property
    def y_values(self) -> NDArray[np.float32]:
        """Read-only intensity channel; only available once sealed."""
        if not self.is_sealed:
            raise SequenceSealedError("Channel arrays are only available after finalize_sequence()")
        return self._y_values

    def rt_width(self) -> float:
        """Retention span covered by the samples (last x minus first x)."""
        if self.count() < 2:
            return 0.0
        return self.get(-1).x - self.get(0).x

    def __len__(self) -> int:
        return self.count()

    def __getitem__(self, index: int) -> Sample:
        return self.get(index)

    def __iter__(self) -> Iterator[Sample]:
        for i in range(self.count()):
            yield self.get(i)

    def __repr__(self):
        state = "sealed" if self.is_sealed else "open"
        return f"PointSequence(n_points={self.count()}, {state})"
