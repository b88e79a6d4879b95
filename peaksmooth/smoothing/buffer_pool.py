"""
Per-execution-context buffer pool for allocation-free smoothing.
"""

from typing import Dict, Hashable
import threading
import logging
import weakref

from ..config import INITIAL_BUFFER_CAPACITY
from . import ScratchBuffers


class BufferPool:
    """Hands out one ScratchBuffers set per execution context.

    Each context key (a worker thread identity, or any hashable task key)
    owns its buffers exclusively, so no lock guards the buffers themselves.
    Contexts must never be shared between concurrently running tasks.
    """

    def __init__(self, initial_capacity: int = INITIAL_BUFFER_CAPACITY):
        """
        Initialize buffer pool.

        Args:
            initial_capacity: Elements per array when a context is first seen
        """
        if initial_capacity < 1:
            raise ValueError(f"initial_capacity must be positive, got {initial_capacity}")
        self.initial_capacity = initial_capacity
        self._buffers: Dict[Hashable, ScratchBuffers] = {}

    @staticmethod
    def current_context() -> int:
        """Context key of the calling thread"""
        return threading.get_ident()

    def acquire(self,
                context: Hashable,
                min_input_capacity: int,
                min_output_capacity: int) -> ScratchBuffers:
        """
        Get the buffers owned by ``context``, grown to the requested sizes.

        Args:
            context: Execution-context key
            min_input_capacity: Control points the caller will write
            min_output_capacity: Evaluated points the caller will write

        Returns:
            The context's scratch buffers with sufficient capacity
        """
        if min_input_capacity < 0 or min_output_capacity < 0:
            raise ValueError("Requested buffer capacities must be non-negative")

        buffers = self._buffers.get(context)
        if buffers is None:
            # setdefault is atomic, distinct contexts never race on one key
            buffers = self._buffers.setdefault(
                context, ScratchBuffers.allocate(self.initial_capacity)
            )

        if buffers.ensure_capacity(min_input_capacity, min_output_capacity):
            logging.debug(
                f"Scratch buffers for context {context} grown to "
                f"input={buffers.input_capacity}, output={buffers.output_capacity}"
            )
        return buffers

    def acquire_current(self,
                        min_input_capacity: int,
                        min_output_capacity: int) -> ScratchBuffers:
        """
        Get the calling thread's buffers, dropped once that thread is gone.

        The first acquisition in a thread ties the entry to the thread object,
        so pools shared by short-lived or caller-owned threads do not keep
        buffers of exited threads.

        Args:
            min_input_capacity: Control points the caller will write
            min_output_capacity: Evaluated points the caller will write

        Returns:
            The calling thread's scratch buffers with sufficient capacity
        """
        context = self.current_context()
        is_new = context not in self._buffers
        buffers = self.acquire(context, min_input_capacity, min_output_capacity)
        if is_new:
            weakref.finalize(threading.current_thread(), self._release_owned, context, buffers)
        return buffers

    def release(self, context: Hashable) -> None:
        """Drop the buffers of a retired context"""
        self._buffers.pop(context, None)

    def _release_owned(self, context: Hashable, buffers: ScratchBuffers) -> None:
        # Thread idents are reused, only drop the entry this thread created
        if self._buffers.get(context) is buffers:
            self._buffers.pop(context, None)

    def __len__(self) -> int:
        return len(self._buffers)

    def get_stats(self) -> dict:
        """
        Get buffer pool statistics.

        Returns:
            Dictionary with pool statistics
        """
        buffers = list(self._buffers.values())
        return {
            "contexts": len(buffers),
            "growth_events": sum(b.growth_count for b in buffers),
            "max_input_capacity": max((b.input_capacity for b in buffers), default=0),
            "max_output_capacity": max((b.output_capacity for b in buffers), default=0),
            "memory_usage_mb": sum(b.nbytes for b in buffers) / 1e6,
        }
