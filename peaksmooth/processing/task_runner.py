"""
Thread-pool runner for large batches of smoothing tasks.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import psutil
from tqdm import tqdm

from ..config import (
    DEFAULT_PROGRESS_UPDATE_INTERVAL,
    MAX_WORKERS,
    MIN_WORKERS,
    WORKERS_PER_CPU,
    RunnerConfig,
    SmoothingConfig,
)
from ..core.curve import Curve
from ..errors import TaskFailureError
from ..regions.base_splitter import PeakRegionSplitter
from ..smoothing.buffer_pool import BufferPool
from ..smoothing.resampler import CurveResampler
from .smoothing_task import SmoothingTask


@dataclass
class SmoothingRunResult:
    """Outcome of a batch run, in the order the curves were submitted."""

    task_results: List[Optional[List[Curve]]]  # None where the task failed
    failures: List[TaskFailureError] = field(default_factory=list)

    @property
    def curves(self) -> List[Curve]:
        """All result curves of the successful tasks, flattened"""
        return [curve for result in self.task_results if result is not None for curve in result]

    @property
    def n_succeeded(self) -> int:
        return sum(1 for result in self.task_results if result is not None)

    @property
    def n_failed(self) -> int:
        return len(self.failures)


class SmoothingTaskRunner:
    """
    Runs one SmoothingTask per curve on a thread pool.

    Every worker thread owns one scratch buffer set in the runner's pool,
    keyed by the thread identity, and hands it to each task it executes.
    Tasks share nothing else, so no locking happens on the hot path.
    """

    def __init__(self,
                 config: SmoothingConfig,
                 runner_config: Optional[RunnerConfig] = None,
                 splitter: Optional[PeakRegionSplitter] = None,
                 buffer_pool: Optional[BufferPool] = None):
        """
        Initialize the runner.

        Args:
            config: Smoothing options applied to every task
            runner_config: Worker and progress settings
            splitter: Region splitting collaborator (required with detect_by_cwt)
            buffer_pool: Pool holding per-worker scratch buffers
        """
        if config.detect_by_cwt and splitter is None:
            raise ValueError("A peak region splitter is required when detect_by_cwt is enabled")

        self.config = config
        self.runner_config = runner_config or RunnerConfig()
        self.splitter = splitter
        self.buffer_pool = buffer_pool if buffer_pool is not None else BufferPool()
        self.resampler = CurveResampler(self.buffer_pool)
        self._contexts = set()

        self.stats = {
            'tasks_submitted': 0,
            'tasks_succeeded': 0,
            'tasks_failed': 0,
            'curves_produced': 0,
            'start_time': 0.0,
            'end_time': 0.0,
            'total_elapsed_time': 0.0,
            'buffer_pool_stats': {},
        }

        logging.info(f"Initialized smoothing runner: {self.config.get_summary()}, "
                     f"{self.runner_config.get_summary()}")

    def resolve_worker_count(self, n_tasks: int) -> int:
        """Worker threads for a batch of ``n_tasks`` curves"""
        if self.runner_config.max_workers is not None:
            n_workers = self.runner_config.max_workers
        else:
            cpu_count = psutil.cpu_count(logical=True) or MIN_WORKERS
            n_workers = max(MIN_WORKERS, min(cpu_count * WORKERS_PER_CPU, MAX_WORKERS))
        return max(MIN_WORKERS, min(n_workers, n_tasks))

    def run(self,
            curves: Iterable[Curve],
            progress_callback: Optional[Callable[[int, int], None]] = None) -> SmoothingRunResult:
        """
        Smooth every curve, in parallel.

        Args:
            curves: Curves to process; each must appear only once
            progress_callback: Optional ``callback(completed, total)``

        Returns:
            Per-curve results in submission order plus the collected failures

        Raises:
            TaskFailureError: First failure in submission order, only when
                ``raise_on_error`` is set; raised after all tasks settled
        """
        curves = list(curves)
        total = len(curves)
        task_results: List[Optional[List[Curve]]] = [None] * total
        failures: List[Tuple[int, TaskFailureError]] = []

        self.stats['start_time'] = time.time()
        self.stats['tasks_submitted'] += total
        if total == 0:
            self.stats['end_time'] = time.time()
            self.stats['total_elapsed_time'] += self.stats['end_time'] - self.stats['start_time']
            return SmoothingRunResult(task_results=[])

        n_workers = self.resolve_worker_count(total)
        logging.info(f"Smoothing {total} curves with {n_workers} workers")

        try:
            with ThreadPoolExecutor(max_workers=n_workers,
                                    thread_name_prefix="SmoothingWorker") as executor:
                futures = {
                    executor.submit(self._run_task, curve): idx
                    for idx, curve in enumerate(curves)
                }

                completed = 0
                with tqdm(total=total,
                          desc="Smoothing curves",
                          unit="curve",
                          mininterval=DEFAULT_PROGRESS_UPDATE_INTERVAL,
                          disable=not self.runner_config.show_progress) as pbar:
                    for future in as_completed(futures):
                        idx = futures[future]
                        try:
                            task_results[idx] = future.result()
                            self.stats['tasks_succeeded'] += 1
                            self.stats['curves_produced'] += len(task_results[idx])
                        except TaskFailureError as e:
                            failures.append((idx, e))
                            self.stats['tasks_failed'] += 1
                            logging.error(f"{e} ({type(e.__cause__).__name__})")

                        completed += 1
                        pbar.update(1)
                        if progress_callback is not None:
                            progress_callback(completed, total)
        finally:
            self.stats['end_time'] = time.time()
            self.stats['total_elapsed_time'] += self.stats['end_time'] - self.stats['start_time']
            self.stats['buffer_pool_stats'] = self.buffer_pool.get_stats()
            if self.runner_config.release_buffers_on_finish:
                self._release_buffers()

        failures.sort(key=lambda item: item[0])
        result = SmoothingRunResult(task_results=task_results,
                                    failures=[e for _, e in failures])

        logging.info(f"Smoothing finished: {result.n_succeeded}/{total} tasks succeeded, "
                     f"{len(result.curves)} curves produced in "
                     f"{self.stats['end_time'] - self.stats['start_time']:.2f}s")

        if result.failures and self.runner_config.raise_on_error:
            raise result.failures[0]
        return result

    def _run_task(self, curve: Curve) -> List[Curve]:
        """Worker body: execute one task with this thread's buffers"""
        context = BufferPool.current_context()
        self._contexts.add(context)
        buffers = self.buffer_pool.acquire(context, 0, 0)

        task = SmoothingTask(curve, self.config,
                             splitter=self.splitter,
                             buffers=buffers,
                             resampler=self.resampler)
        try:
            return task.execute()
        except Exception as e:
            raise TaskFailureError(curve.curve_id, str(e)) from e

    def _release_buffers(self) -> None:
        for context in list(self._contexts):
            self.buffer_pool.release(context)
        self._contexts.clear()

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics of the runs performed so far.

        Returns:
            Dictionary with task counts and timing summed over all runs, the
            duration of the last run, and buffer pool statistics
        """
        total_elapsed = self.stats['total_elapsed_time']
        return {
            'tasks_submitted': self.stats['tasks_submitted'],
            'tasks_succeeded': self.stats['tasks_succeeded'],
            'tasks_failed': self.stats['tasks_failed'],
            'curves_produced': self.stats['curves_produced'],
            'elapsed_time': self.stats['end_time'] - self.stats['start_time'],
            'total_elapsed_time': total_elapsed,
            'throughput_per_sec': self.stats['tasks_succeeded'] / total_elapsed if total_elapsed > 0 else 0.0,
            'buffer_pool_stats': self.stats['buffer_pool_stats'],
            'config': self.config.get_summary(),
        }
