"""
Base search class for TAR threshold estimation.
"""
import logging
import numpy as np
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence, Tuple, Union

from ...core.exceptions import DegenerateRegressionError
from ...computation.numerical import FitResult, evaluate_rss_batch, fit_through_origin
from ...computation.parallel import ParallelProcessor
from ...data.preprocessors import DifferencedSeries, prepare_series
from ...data.validators import SeriesLike
from ..schemas import EstimatorConfig
from .candidates import generate_candidates
from .regimes import regime_column
from .results import EstimationResult

logger = logging.getLogger(__name__)

TrajectoryBlock = Callable[[int, int], np.ndarray]


class ThresholdSearch(ABC):
    """Grid search over candidate thresholds minimising the regression RSS."""

    variant: str = ''

    def __init__(self, config: Optional[EstimatorConfig] = None):
        """Initialize the search with a validated configuration."""
        self.config = config or EstimatorConfig()
        self.processor = ParallelProcessor(
            max_workers=self.config.max_workers,
            chunk_size=self.config.chunk_size,
            parallel=self.config.parallel
        )

    @abstractmethod
    def search(self, series: Union[DifferencedSeries, SeriesLike]) -> EstimationResult:
        """Run the search and assemble the result."""
        pass

    def _prepare(self, series: Union[DifferencedSeries, SeriesLike]) -> DifferencedSeries:
        if isinstance(series, DifferencedSeries):
            return series
        return prepare_series(series)

    def _candidates(self, series: DifferencedSeries) -> np.ndarray:
        return generate_candidates(
            series.m,
            min_regime_fraction=self.config.min_regime_fraction,
            grid_points=self.config.grid_points
        )

    def _evaluate(self, series: DifferencedSeries, n_items: int, block: TrajectoryBlock) -> np.ndarray:
        """
        RSS for ``n_items`` trajectories, built chunk by chunk.

        Args:
            series: Differenced series
            n_items: Number of trajectories
            block: Returns the trajectory block for items start..stop-1

        Returns:
            Array of RSS values, NaN where the regression is degenerate
        """
        out = np.full(n_items, np.nan)
        self.processor.fill(
            out, n_items, lambda start, stop: evaluate_rss_batch(series, block(start, stop))
        )

        n_degenerate = int(np.count_nonzero(np.isnan(out)))
        if n_degenerate:
            logger.info(f"{n_degenerate} of {n_items} candidate regressions are degenerate and were skipped")
        return out

    def _fit_with_fallback(
        self,
        series: DifferencedSeries,
        trajectory: np.ndarray,
        fallbacks: Sequence[np.ndarray]
    ) -> Tuple[FitResult, Optional[int]]:
        """
        Fit at the selected trajectory, falling back to tied minimisers in order.

        Averaging tied thresholds can land on a trajectory whose regime column
        is constant even though every tied candidate was well posed.

        Returns:
            Tuple of (fit, index into ``fallbacks`` of the trajectory used, or None)
        """
        _, x = regime_column(series.m_lag, trajectory)
        try:
            return fit_through_origin(series.dm, x), None
        except DegenerateRegressionError as e:
            if not len(fallbacks):
                raise
            logger.warning(f"Selected threshold gives a degenerate regression ({e}); using nearest tied candidate")

        for i, candidate in enumerate(fallbacks):
            _, x = regime_column(series.m_lag, candidate)
            try:
                return fit_through_origin(series.dm, x), i
            except DegenerateRegressionError:
                continue

        raise DegenerateRegressionError("Every tied minimiser gives a degenerate regression")
