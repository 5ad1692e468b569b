"""
Time-varying threshold search for TAR threshold estimation.
"""
import logging
import numpy as np
from typing import Union

from ...core.decorators import performance_tracker
from ...data.preprocessors import DifferencedSeries
from ...data.validators import SeriesLike
from .base import ThresholdSearch
from .regimes import linear_trajectory, linear_trajectories
from .results import TIME_VARYING, EstimationResult, assemble_result
from .threshold_utils import find_minimisers, resolve_ties

logger = logging.getLogger(__name__)


class TimeVaryingThresholdSearch(ThresholdSearch):
    """
    Threshold moving linearly between two endpoints.

    Every ordered pair ``(theta_first, theta_last)`` of admissible candidates
    is evaluated, including pairs with ``theta_first > theta_last``, so the
    cost grows as K^2 * M. Pair ``p`` maps to ``(candidates[p // K], candidates[p % K])``.
    """

    variant = TIME_VARYING

    @performance_tracker("TimeVaryingThresholdSearch.search")
    def search(self, series: Union[DifferencedSeries, SeriesLike]) -> EstimationResult:
        """
        Estimate the endpoints of a linear threshold path.

        Args:
            series: Differenced series, or a raw level series to difference

        Returns:
            EstimationResult with the K x K RSS surface
        """
        series = self._prepare(series)
        candidates = self._candidates(series)
        k = len(candidates)
        n_pairs = k * k
        logger.info(
            f"Time-varying threshold search over {n_pairs} pairs from {k} candidates, "
            f"{series.n_obs} observations"
        )

        def block(start: int, stop: int) -> np.ndarray:
            pairs = np.arange(start, stop)
            return linear_trajectories(candidates[pairs // k], candidates[pairs % k], series.n_obs)

        rss = self._evaluate(series, n_pairs, block)
        surface = rss.reshape(k, k)

        idx = find_minimisers(rss)
        tied = np.column_stack([candidates[idx // k], candidates[idx % k]])
        if self.config.tie_policy == 'first':
            # Row-major order, so the pair with the smallest theta_first, then theta_last
            theta_first, theta_last = float(tied[0, 0]), float(tied[0, 1])
        else:
            theta_first = resolve_ties(tied[:, 0], self.config.tie_policy)
            theta_last = resolve_ties(tied[:, 1], self.config.tie_policy)
        if len(tied) > 1:
            logger.info(f"{len(tied)} pairs tie at RSS {rss[idx[0]]:.6g}; resolved by '{self.config.tie_policy}'")

        distance = np.hypot(tied[:, 0] - theta_first, tied[:, 1] - theta_last)
        order = np.argsort(distance, kind='stable')
        fallbacks = [linear_trajectory(tied[i, 0], tied[i, 1], series.n_obs) for i in order]
        fit, used = self._fit_with_fallback(
            series, linear_trajectory(theta_first, theta_last, series.n_obs), fallbacks
        )
        if used is not None:
            theta_first, theta_last = (float(v) for v in tied[order[used]])

        logger.info(
            f"Selected thresholds {theta_first:.6g} -> {theta_last:.6g} with rho_hat {fit.rho_hat:.4f}"
        )

        return assemble_result(
            series,
            TIME_VARYING,
            candidates,
            surface,
            fit,
            thresholds=(theta_first, theta_last),
            tied=tied,
            trajectory=linear_trajectory(theta_first, theta_last, series.n_obs),
            tie_policy=self.config.tie_policy,
            strict_halflife=self.config.strict_halflife
        )
