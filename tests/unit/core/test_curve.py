"""Tests for Curve."""

import pytest

from peaksmooth.core.curve import Curve
from peaksmooth.core.point_sequence import PointSequence
from peaksmooth.errors import SequenceSealedError


def _sequence(values):
    sequence = PointSequence()
    for x, y in values:
        sequence.append(x, y)
    return sequence


class TestCurve:
    """Tests for Curve smoothing state."""

    def setup_method(self):
        """Set up test fixtures."""
        self.raw = _sequence([(0.0, 1.0), (1.0, 3.0), (2.0, 2.0)])
        self.curve = Curve(self.raw, curve_id="c1")

    def test_construction_seals_points(self):
        """Test that a curve always holds a sealed raw sequence."""
        assert self.curve.points is self.raw
        assert self.raw.is_sealed

    def test_generated_id(self):
        """Test that curves without an id get a unique one."""
        first = Curve(_sequence([(0.0, 0.0)]))
        second = Curve(_sequence([(0.0, 0.0)]))

        assert first.curve_id
        assert first.curve_id != second.curve_id

    def test_initially_unsmoothed(self):
        """Test state before smoothing."""
        assert self.curve.smoothed_points is None
        assert not self.curve.is_smoothed
        assert self.curve.working_points is self.raw

    def test_publish_smoothed(self):
        """Test publishing a finished smoothed sequence."""
        smoothed = PointSequence.from_arrays([0.0, 1.0, 2.0], [1.0, 2.0, 2.0])
        self.curve.publish_smoothed(smoothed)

        assert self.curve.is_smoothed
        assert self.curve.smoothed_points is smoothed
        assert self.curve.working_points is smoothed

    def test_publish_requires_sealed_sequence(self):
        """Test that open sequences cannot be published."""
        with pytest.raises(SequenceSealedError):
            self.curve.publish_smoothed(_sequence([(0.0, 1.0)]))
        assert self.curve.smoothed_points is None

    def test_derive(self):
        """Test creating a child curve from a region of this one."""
        child = self.curve.derive(_sequence([(0.0, 1.0), (1.0, 3.0)]), suffix=0)

        assert child.curve_id == "c1-0"
        assert child.parent_id == "c1"
        assert child.points.count() == 2
        assert not child.is_smoothed
