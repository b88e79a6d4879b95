"""Tests for configuration classes."""

import dataclasses

import pytest

from peaksmooth.config import (
    DEFAULT_POINTS_PER_MINUTE,
    DEFAULT_SN_THRESHOLD,
    MAX_WORKERS,
    SUPPORTED_SMOOTH_DEGREE,
    RunnerConfig,
    SmoothingConfig,
)


class TestSmoothingConfig:
    """Test cases for SmoothingConfig."""

    def test_defaults(self):
        """Test default smoothing options."""
        config = SmoothingConfig()

        assert config.detect_by_cwt is False
        assert config.sn_threshold == DEFAULT_SN_THRESHOLD
        assert config.smooth_degree == SUPPORTED_SMOOTH_DEGREE
        assert config.points_per_minute == DEFAULT_POINTS_PER_MINUTE

    def test_read_only(self):
        """Test that a config cannot be changed once built."""
        config = SmoothingConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.sn_threshold = 5.0

    def test_negative_sn_threshold(self):
        """Test validation of the signal-to-noise cutoff."""
        with pytest.raises(ValueError, match="sn_threshold must be non-negative"):
            SmoothingConfig(sn_threshold=-1.0)

    @pytest.mark.parametrize("density", [0.0, -10.0])
    def test_non_positive_density(self, density):
        """Test validation of the output point density."""
        with pytest.raises(ValueError, match="points_per_minute must be positive"):
            SmoothingConfig(points_per_minute=density)

    def test_degree_not_validated_here(self):
        """Test that unsupported degrees are accepted until smoothing time."""
        assert SmoothingConfig(smooth_degree=3).smooth_degree == 3

    def test_non_integer_degree(self):
        """Test that the degree must be an integer."""
        with pytest.raises(ValueError, match="smooth_degree must be an integer"):
            SmoothingConfig(smooth_degree=2.0)

    def test_get_summary(self):
        """Test configuration summary."""
        summary = SmoothingConfig(detect_by_cwt=True, sn_threshold=3.5).get_summary()

        assert summary == {
            "detect_by_cwt": True,
            "sn_threshold": 3.5,
            "smooth_degree": 2,
            "points_per_minute": DEFAULT_POINTS_PER_MINUTE,
        }


class TestRunnerConfig:
    """Test cases for RunnerConfig."""

    def test_defaults(self):
        """Test default runner options."""
        config = RunnerConfig()

        assert config.max_workers is None
        assert config.show_progress is False
        assert config.raise_on_error is False
        assert config.release_buffers_on_finish is True

    @pytest.mark.parametrize("workers", [0, -2, MAX_WORKERS + 1])
    def test_invalid_max_workers(self, workers):
        """Test worker bound validation."""
        with pytest.raises(ValueError, match="max_workers"):
            RunnerConfig(max_workers=workers)

    def test_get_summary(self):
        """Test configuration summary."""
        assert RunnerConfig(max_workers=3).get_summary()["max_workers"] == 3
