"""
Core data structures: samples, point sequences and curves.
"""

from .curve import Curve
from .point_sequence import PointSequence, Sample

__all__ = ["Curve", "PointSequence", "Sample"]
