"""
Computation module for TAR threshold estimation.
"""
from .parallel import ParallelProcessor, chunk_ranges, default_worker_count
from .numerical import (
    FitResult, fit_through_origin, is_degenerate, regime_design, evaluate_rss_batch
)

__all__ = [
    'ParallelProcessor', 'chunk_ranges', 'default_worker_count',
    'FitResult', 'fit_through_origin', 'is_degenerate', 'regime_design',
    'evaluate_rss_batch'
]
