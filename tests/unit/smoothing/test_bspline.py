"""Tests for the quadratic B-spline evaluator."""

import numpy as np
import pytest
from scipy.interpolate import BSpline

from peaksmooth.errors import InvalidInputSizeError
from peaksmooth.smoothing.bspline import evaluate_quadratic_bspline


class TestQuadraticBSpline:
    """Tests for evaluate_quadratic_bspline."""

    def setup_method(self):
        """Set up test fixtures."""
        self.rng = np.random.default_rng(7)
        self.control = np.array([0.0, 0.0, 2.0, 0.0, 2.0, 0.0, 0.0], dtype=np.float32)

    def test_known_values(self):
        """Test blending weights on a hand-computed example."""
        result = evaluate_quadratic_bspline(self.control, 5)

        assert result.dtype == np.float32
        np.testing.assert_allclose(result, [0.0, 1.375, 0.5, 1.375, 0.0], atol=1e-6)

    def test_endpoints_clamped(self):
        """Test that the first and last outputs equal the first and last control points."""
        control = self.rng.uniform(-5, 5, size=40).astype(np.float32)
        result = evaluate_quadratic_bspline(control, 17)

        assert result[0] == control[0]
        assert result[-1] == control[-1]

    def test_two_output_points(self):
        """Test the smallest output, which has no interior points."""
        result = evaluate_quadratic_bspline([1.0, 2.0, 3.0, 4.0], 2)
        np.testing.assert_array_equal(result, [1.0, 4.0])

    def test_matches_scipy_bspline(self):
        """Test interior points against scipy's uniform quadratic B-spline."""
        n = 25
        num_points = 61
        control = self.rng.uniform(0, 100, size=n).astype(np.float32)

        result = evaluate_quadratic_bspline(control, num_points)

        spline = BSpline(np.arange(n + 3, dtype=np.float64), control.astype(np.float64), 2)
        # Same float32 parameters as the kernel, so only the blending is compared
        int_len = np.float32(n - 2) / np.float32(num_points - 1)
        params = np.float32(2) + np.arange(1, num_points - 1, dtype=np.float32) * int_len
        expected = spline(params.astype(np.float64))

        np.testing.assert_allclose(result[1:-1], expected, rtol=1e-4, atol=1e-3)

    def test_constant_control_points(self):
        """Test that a constant signal stays constant (weights sum to one)."""
        result = evaluate_quadratic_bspline(np.full(12, 3.5, dtype=np.float32), 50)
        np.testing.assert_allclose(result, 3.5, rtol=1e-6)

    def test_dense_output_stays_in_bounds(self):
        """Test many output points over few control points."""
        control = np.array([1.0, 1.0, 5.0, 9.0, 9.0], dtype=np.float32)
        result = evaluate_quadratic_bspline(control, 10001)

        assert np.all(np.isfinite(result))
        assert result.min() >= 1.0 - 1e-5
        assert result.max() <= 9.0 + 1e-5

    def test_writes_into_out_buffer(self):
        """Test evaluation into a larger caller-provided buffer."""
        out = np.full(32, np.nan, dtype=np.float32)
        result = evaluate_quadratic_bspline(self.control, 5, out=out)

        assert np.shares_memory(result, out)
        assert len(result) == 5
        np.testing.assert_allclose(out[:5], [0.0, 1.375, 0.5, 1.375, 0.0], atol=1e-6)
        assert np.all(np.isnan(out[5:]))

    @pytest.mark.parametrize("n", [0, 1, 2, 3])
    def test_too_few_control_points(self, n):
        """Test that fewer than four control points are rejected."""
        with pytest.raises(InvalidInputSizeError, match="at least 4 control points"):
            evaluate_quadratic_bspline(np.zeros(n, dtype=np.float32), 5)

    @pytest.mark.parametrize("num_points", [-1, 0, 1])
    def test_too_few_output_points(self, num_points):
        """Test that fewer than two output points are rejected."""
        with pytest.raises(InvalidInputSizeError, match="output points"):
            evaluate_quadratic_bspline(self.control, num_points)

    def test_small_out_buffer_left_untouched(self):
        """Test that an undersized buffer is rejected before any write."""
        out = np.full(3, -1.0, dtype=np.float32)
        with pytest.raises(InvalidInputSizeError, match="Output buffer"):
            evaluate_quadratic_bspline(self.control, 5, out=out)
        np.testing.assert_array_equal(out, -1.0)

    def test_rejects_2d_input(self):
        """Test that control points must be one-dimensional."""
        with pytest.raises(InvalidInputSizeError, match="1-D"):
            evaluate_quadratic_bspline(np.zeros((4, 2)), 5)
