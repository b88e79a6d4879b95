"""Elution curve container carrying raw and smoothed point sequences."""

import uuid
from typing import Optional

from ..errors import SequenceSealedError
from .point_sequence import PointSequence


class Curve:
    """An elution profile plus its smoothing state.

    A curve is handed to exactly one smoothing task. The task publishes the
    smoothed representation with :meth:`publish_smoothed` once it has been
    fully computed; until then ``smoothed_points`` is ``None``.
    """

    def __init__(self,
                 points: PointSequence,
                 curve_id: Optional[str] = None,
                 parent_id: Optional[str] = None):
        """
        Initialize a curve.

        Args:
            points: Raw samples. The sequence is sealed if it is still open.
            curve_id: Identifier; a random one is generated when omitted
            parent_id: Identifier of the curve this one was split from
        """
        points.finalize_sequence()
        self.points = points
        self.curve_id = curve_id or uuid.uuid4().hex[:12]
        self.parent_id = parent_id
        self._smoothed: Optional[PointSequence] = None

    @property
    def smoothed_points(self) -> Optional[PointSequence]:
        return self._smoothed

    @property
    def is_smoothed(self) -> bool:
        return self._smoothed is not None

    @property
    def working_points(self) -> PointSequence:
        """Smoothed samples when available, raw samples otherwise."""
        return self._smoothed if self._smoothed is not None else self.points

    def publish_smoothed(self, smoothed: PointSequence) -> None:
        """Attach a fully computed smoothed sequence to the curve.

        Raises:
            SequenceSealedError: If ``smoothed`` has not been finalized
        """
        if not smoothed.is_sealed:
            raise SequenceSealedError("Only finalized sequences can be published on a curve")
        self._smoothed = smoothed

    def derive(self, points: PointSequence, suffix: Optional[str] = None) -> "Curve":
        """Create a child curve (e.g. one region of a split) from ``points``."""
        child_id = f"{self.curve_id}-{suffix}" if suffix is not None else None
        return Curve(points, curve_id=child_id, parent_id=self.curve_id)

    def __repr__(self):
        return (f"Curve(curve_id={self.curve_id!r}, n_points={self.points.count()}, "
                f"smoothed={self.is_smoothed})")
