"""Base abstract class for peak region detection and splitting."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence

from ..core.curve import Curve


@dataclass(frozen=True)
class PeakRegion:
    """One unimodal region of a smoothed curve, as indices into its samples."""

    start_index: int
    apex_index: int
    end_index: int

    def __post_init__(self):
        """Validate the region bounds after initialization."""
        if self.start_index < 0:
            raise ValueError("start_index must be non-negative")
        if not self.start_index <= self.apex_index <= self.end_index:
            raise ValueError(
                "Region indices must satisfy start_index <= apex_index <= end_index, "
                f"got ({self.start_index}, {self.apex_index}, {self.end_index})"
            )

    @property
    def width(self) -> int:
        return self.end_index - self.start_index + 1


class PeakRegionSplitter(ABC):
    """Abstract collaborator that splits multimodal curves.

    Implementations receive a curve whose smoothed representation has already
    been published (``curve.smoothed_points`` is set) and decide how it breaks
    into unimodal curves.
    """

    @abstractmethod
    def detect_regions(self, curve: Curve) -> Sequence[PeakRegion]:
        """Find the peak regions of a smoothed curve.

        Args:
            curve: Curve carrying its smoothed samples

        Returns:
            Regions ordered by start index
        """
        pass

    @abstractmethod
    def split_by_regions(self,
                         curve: Curve,
                         regions: Sequence[PeakRegion],
                         sn_threshold: float) -> List[Curve]:
        """Split a curve into one curve per region passing ``sn_threshold``.

        Args:
            curve: Curve carrying its smoothed samples
            regions: Output of :meth:`detect_regions` for this curve
            sn_threshold: Minimum signal-to-noise ratio for a region to be kept

        Returns:
            Derived curves, possibly empty
        """
        pass
