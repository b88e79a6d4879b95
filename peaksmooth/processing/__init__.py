# peaksmooth/processing/__init__.py

"""
Processing utilities for smoothing many elution curves.

This package contains the per-curve smoothing task and the thread-pool
runner that executes batches of tasks with per-worker scratch buffers.
"""

from .smoothing_task import SmoothingTask
from .task_runner import SmoothingRunResult, SmoothingTaskRunner

__all__ = ["SmoothingTask", "SmoothingTaskRunner", "SmoothingRunResult"]
