"""
Parallel chunked evaluation for TAR threshold estimation.
"""
import os
import logging
import numpy as np
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple

from ..core.decorators import performance_tracker
from ..core.exceptions import ComputationError

logger = logging.getLogger(__name__)

ChunkFunc = Callable[[int, int], np.ndarray]


def default_worker_count() -> int:
    """Leave one core free for the caller."""
    cpu_count = os.cpu_count() or 4
    return max(1, cpu_count - 1)


def chunk_ranges(n_items: int, chunk_size: int) -> List[Tuple[int, int]]:
    """Split ``range(n_items)`` into contiguous ``(start, stop)`` slices."""
    if chunk_size < 1:
        raise ComputationError(f"chunk_size must be positive, got {chunk_size}")
    return [(start, min(start + chunk_size, n_items)) for start in range(0, n_items, chunk_size)]


class ParallelProcessor:
    """
    Fill a pre-sized array from independent contiguous chunks.

    Each worker owns a disjoint slice ``out[start:stop]``, so no locking is
    needed. Joining on all futures is the only synchronisation point. Worker
    exceptions are re-raised in the caller; nothing is retried.
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        chunk_size: int = 256,
        parallel: bool = True
    ):
        """Initialize the parallel processor with settings."""
        self.max_workers = max_workers if max_workers is not None else default_worker_count()
        if self.max_workers < 1:
            raise ComputationError(f"max_workers must be positive, got {self.max_workers}")
        self.chunk_size = chunk_size
        self.parallel = parallel

    def _run_chunk(self, out: np.ndarray, compute_chunk: ChunkFunc, start: int, stop: int) -> None:
        values = compute_chunk(start, stop)
        if len(values) != stop - start:
            raise ComputationError(
                f"Chunk [{start}, {stop}) returned {len(values)} values, expected {stop - start}"
            )
        out[start:stop] = values

    @performance_tracker()
    def fill(self, out: np.ndarray, n_items: int, compute_chunk: ChunkFunc) -> np.ndarray:
        """
        Evaluate ``compute_chunk(start, stop)`` over all chunks into ``out``.

        Args:
            out: Pre-allocated array with at least ``n_items`` entries
            n_items: Number of items to evaluate
            compute_chunk: Callable returning the values for items start..stop-1

        Returns:
            The filled ``out`` array
        """
        if len(out) < n_items:
            raise ComputationError(f"Output array holds {len(out)} entries, need {n_items}")

        chunks = chunk_ranges(n_items, self.chunk_size)
        if not chunks:
            return out

        n_workers = min(self.max_workers, len(chunks))

        if not self.parallel or n_workers == 1:
            logger.debug(f"Evaluating {n_items} items in {len(chunks)} chunks sequentially")
            for start, stop in chunks:
                self._run_chunk(out, compute_chunk, start, stop)
            return out

        logger.debug(f"Evaluating {n_items} items in {len(chunks)} chunks with {n_workers} threads")

        # numpy releases the GIL inside its kernels, so threads scale here
        with ThreadPoolExecutor(max_workers=n_workers) as executor:
            futures = [
                executor.submit(self._run_chunk, out, compute_chunk, start, stop)
                for start, stop in chunks
            ]
            for future in futures:
                # Re-raises the worker's exception
                future.result()

        return out
