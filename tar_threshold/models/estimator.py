"""
Estimator facade for TAR threshold estimation.
"""
import logging
from typing import Optional, Union

from ..core.decorators import performance_tracker
from ..data.preprocessors import DifferencedSeries, prepare_series, from_differences
from ..data.validators import SeriesLike
from .schemas import EstimatorConfig
from .threshold.base import ThresholdSearch
from .threshold.constant import ConstantThresholdSearch
from .threshold.time_varying import TimeVaryingThresholdSearch
from .threshold.results import CONSTANT, TIME_VARYING, EstimationResult

logger = logging.getLogger(__name__)

_SEARCHES = {
    CONSTANT: ConstantThresholdSearch,
    TIME_VARYING: TimeVaryingThresholdSearch
}


def normalize_variant(variant: str) -> str:
    """Accept ``time-varying`` and other spellings of the variant name."""
    key = variant.strip().lower().replace('-', '_')
    if key not in _SEARCHES:
        raise ValueError(f"Unknown variant '{variant}'; expected 'constant' or 'time_varying'")
    return key


class TarThresholdEstimator:
    """Preprocess a series and run the chosen threshold search."""

    def __init__(self, config: Optional[EstimatorConfig] = None):
        """Initialize with an explicit configuration; defaults when omitted."""
        self.config = config or EstimatorConfig()

    def make_search(self, variant: str = CONSTANT) -> ThresholdSearch:
        return _SEARCHES[normalize_variant(variant)](self.config)

    @performance_tracker("TarThresholdEstimator.fit", level="info")
    def fit(
        self,
        raw: Union[SeriesLike, DifferencedSeries],
        variant: str = CONSTANT,
        differenced: bool = False
    ) -> EstimationResult:
        """
        Estimate the threshold model.

        Args:
            raw: Level series, or first differences when ``differenced`` is set
            variant: ``'constant'`` or ``'time_varying'``
            differenced: Treat ``raw`` as the first-difference series

        Returns:
            EstimationResult
        """
        search = self.make_search(variant)

        if isinstance(raw, DifferencedSeries):
            series = raw
        elif differenced:
            series = from_differences(raw)
        else:
            series = prepare_series(raw)

        logger.info(f"Fitting {search.variant} TAR threshold model on {series.n_differences} differences")
        return search.search(series)


def estimate_constant_threshold(raw: SeriesLike, differenced: bool = False, **options) -> EstimationResult:
    """Constant threshold estimate; ``options`` are EstimatorConfig fields."""
    return TarThresholdEstimator(EstimatorConfig(**options)).fit(raw, CONSTANT, differenced)


def estimate_time_varying_threshold(raw: SeriesLike, differenced: bool = False, **options) -> EstimationResult:
    """Time-varying threshold estimate; ``options`` are EstimatorConfig fields."""
    return TarThresholdEstimator(EstimatorConfig(**options)).fit(raw, TIME_VARYING, differenced)
