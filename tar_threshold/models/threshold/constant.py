"""
Constant threshold search for TAR threshold estimation.
"""
import logging
import numpy as np
from typing import Union

from ...core.decorators import performance_tracker
from ...data.preprocessors import DifferencedSeries
from ...data.validators import SeriesLike
from .base import ThresholdSearch
from .regimes import constant_trajectory
from .results import CONSTANT, EstimationResult, assemble_result
from .threshold_utils import find_minimisers, resolve_ties

logger = logging.getLogger(__name__)


class ConstantThresholdSearch(ThresholdSearch):
    """
    Single threshold held fixed over the sample.

    Every admissible candidate is evaluated; the candidate(s) with minimum
    RSS are selected and ties are collapsed by the configured tie policy.
    """

    variant = CONSTANT

    @performance_tracker("ConstantThresholdSearch.search")
    def search(self, series: Union[DifferencedSeries, SeriesLike]) -> EstimationResult:
        """
        Estimate a constant threshold.

        Args:
            series: Differenced series, or a raw level series to difference

        Returns:
            EstimationResult with the RSS curve over candidates
        """
        series = self._prepare(series)
        candidates = self._candidates(series)
        k = len(candidates)
        logger.info(f"Constant threshold search over {k} candidates, {series.n_obs} observations")

        rss = self._evaluate(series, k, lambda start, stop: candidates[start:stop, np.newaxis])

        idx = find_minimisers(rss)
        tied = candidates[idx]
        threshold = resolve_ties(tied, self.config.tie_policy)
        if len(tied) > 1:
            logger.info(f"{len(tied)} candidates tie at RSS {rss[idx[0]]:.6g}; resolved by '{self.config.tie_policy}'")

        # Nearest tied candidates first
        order = np.argsort(np.abs(tied - threshold), kind='stable')
        fallbacks = [constant_trajectory(tied[i], series.n_obs) for i in order]
        fit, used = self._fit_with_fallback(series, constant_trajectory(threshold, series.n_obs), fallbacks)
        if used is not None:
            threshold = float(tied[order[used]])

        logger.info(f"Selected threshold {threshold:.6g} with rho_hat {fit.rho_hat:.4f}")

        return assemble_result(
            series,
            CONSTANT,
            candidates,
            rss,
            fit,
            thresholds=(threshold,),
            tied=tied,
            trajectory=constant_trajectory(threshold, series.n_obs),
            tie_policy=self.config.tie_policy,
            strict_halflife=self.config.strict_halflife
        )
