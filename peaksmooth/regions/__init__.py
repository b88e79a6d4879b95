"""
Interfaces for the region detection and splitting step that follows smoothing.
"""

from .base_splitter import PeakRegion, PeakRegionSplitter

__all__ = ["PeakRegion", "PeakRegionSplitter"]
