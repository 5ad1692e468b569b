"""
Series preprocessing for TAR threshold estimation.

Every downstream step works on the same derived arrays:

    m_t    first difference of the raw level series, t = 0..M-1
    m_lag  m_{t-1}, the regime variable, t = 1..M-1
    dm_t   m_t - m_{t-1}, the regression response, t = 1..M-1
"""
import logging
import numpy as np
from dataclasses import dataclass, field

from ..core.decorators import performance_tracker
from .validators import SeriesLike, validate_series, check_minimum_observations

logger = logging.getLogger(__name__)


def _read_only(arr: np.ndarray) -> np.ndarray:
    arr = np.array(arr, dtype=np.float64, copy=True)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class DifferencedSeries:
    """Immutable first-difference series with its lagged regression arrays."""
    m: np.ndarray
    m_lag: np.ndarray = field(init=False, repr=False)
    abs_m_lag: np.ndarray = field(init=False, repr=False)
    dm: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        m = _read_only(self.m)
        object.__setattr__(self, 'm', m)
        object.__setattr__(self, 'm_lag', _read_only(m[:-1]))
        object.__setattr__(self, 'abs_m_lag', _read_only(np.abs(m[:-1])))
        object.__setattr__(self, 'dm', _read_only(np.diff(m)))

    @property
    def n_differences(self) -> int:
        """M, the length of the first-difference series."""
        return len(self.m)

    @property
    def n_obs(self) -> int:
        """T = M - 1, the number of regression observations."""
        return len(self.dm)

    @property
    def rss_null(self) -> float:
        """RSS of the no-threshold model dm_t = e_t."""
        return float(np.dot(self.dm, self.dm))


@performance_tracker()
def prepare_series(raw: SeriesLike) -> DifferencedSeries:
    """
    Build the differenced series from a raw level series.

    The first raw observation has no difference and is dropped, so a series
    of length N yields M = N - 1 differences and N - 2 regression pairs.

    Args:
        raw: Ordered level observations, at least three

    Returns:
        DifferencedSeries

    Raises:
        InsufficientDataError: if N < 3
        DataValidationError: if the series holds non-finite values
    """
    levels = validate_series(raw, name="raw series")
    check_minimum_observations(len(levels), 3, name="raw series")

    series = DifferencedSeries(np.diff(levels))
    logger.debug(f"Prepared {series.n_differences} differences from {len(levels)} levels")
    return series


def from_differences(m: SeriesLike) -> DifferencedSeries:
    """
    Build the differenced series directly from first differences.

    Raises:
        InsufficientDataError: if fewer than two differences are supplied
    """
    diffs = validate_series(m, name="difference series")
    check_minimum_observations(len(diffs), 2, name="difference series")
    return DifferencedSeries(diffs)
