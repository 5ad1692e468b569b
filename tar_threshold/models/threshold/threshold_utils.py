"""
Common threshold utilities for TAR threshold estimation.
"""
import logging
import numpy as np
from typing import Sequence
from scipy import stats

from ...core.exceptions import DegenerateRegressionError, UndefinedHalflifeError

logger = logging.getLogger(__name__)

TIE_POLICIES = ('mean', 'first')


def calculate_halflife(rho: float) -> float:
    """
    Periods for an outer-regime deviation to halve.

    ``h = ln(0.5) / ln(1 + rho)``. A positive ``rho`` gives a finite negative
    value, meaning deviations grow rather than decay.

    Args:
        rho: Outer-regime adjustment coefficient

    Returns:
        Halflife in periods

    Raises:
        UndefinedHalflifeError: if ``1 + rho <= 0``, ``rho == 0`` or ``rho`` is not finite
    """
    if rho is None:
        raise UndefinedHalflifeError("Halflife undefined without a fitted coefficient")
    if not np.isfinite(rho):
        raise UndefinedHalflifeError(f"Halflife undefined for non-finite rho={rho}", rho=float(rho))
    if rho == 0:
        raise UndefinedHalflifeError("Halflife undefined for rho=0 (no adjustment)", rho=0.0)
    if 1.0 + rho <= 0:
        raise UndefinedHalflifeError(
            f"Halflife undefined for rho={rho:.6g}: 1 + rho must be positive", rho=float(rho)
        )

    halflife = float(np.log(0.5) / np.log1p(rho))
    if rho > 0:
        logger.warning(f"rho={rho:.6g} is positive; deviations are not mean reverting (halflife {halflife:.4g})")
    return halflife


def find_minimisers(rss: np.ndarray) -> np.ndarray:
    """
    Flat indices of every entry equal to the minimum RSS.

    NaN entries (degenerate regressions) are ignored. Ties use exact equality.

    Raises:
        DegenerateRegressionError: if every entry is NaN
    """
    flat = np.asarray(rss, dtype=np.float64).ravel()
    valid = ~np.isnan(flat)
    if not valid.any():
        raise DegenerateRegressionError(
            f"Every one of {flat.size} candidate regressions is degenerate"
        )
    best = np.min(flat[valid])
    return np.flatnonzero(valid & (flat == best))


def resolve_ties(values: Sequence[float], tie_policy: str = 'mean') -> float:
    """Collapse tied minimisers to one value: their mean, or the smallest."""
    values = np.asarray(values, dtype=np.float64)
    if tie_policy == 'mean':
        return float(np.mean(values))
    if tie_policy == 'first':
        return float(np.min(values))
    raise ValueError(f"Unknown tie policy '{tie_policy}'; expected one of {TIE_POLICIES}")


def f_statistic(rss_null: float, rss: float, n_obs: int) -> float:
    """F statistic of the threshold model against ``dm_t = e_t``."""
    if n_obs < 2:
        return float('nan')
    if rss == 0:
        return float('inf')
    return float((rss_null - rss) / (rss / (n_obs - 1)))


def f_pvalue(f_stat: float, n_obs: int) -> float:
    """
    Nominal p-value of the F statistic on (1, T - 1) degrees of freedom.

    The threshold is chosen by search, so this ignores the Davies problem and
    is only indicative.
    """
    if n_obs < 2 or not np.isfinite(f_stat):
        return 0.0 if f_stat == float('inf') else float('nan')
    return float(stats.f.sf(f_stat, 1, n_obs - 1))
