"""
Estimation result assembly for TAR threshold estimation.
"""
import logging
import numpy as np
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ...core.exceptions import UndefinedHalflifeError
from ...computation.numerical import FitResult
from ...data.preprocessors import DifferencedSeries
from .regimes import regime_balance
from .threshold_utils import calculate_halflife, f_statistic, f_pvalue

logger = logging.getLogger(__name__)

CONSTANT = 'constant'
TIME_VARYING = 'time_varying'


def _frozen(values: Any) -> np.ndarray:
    arr = np.array(values, dtype=np.float64, copy=True)
    arr.flags.writeable = False
    return arr


def _json_safe(value: Any) -> Any:
    """Replace NaN and infinite floats with None, recursing into containers."""
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(_json_safe(item) for item in value)
    if isinstance(value, (float, np.floating)) and not np.isfinite(value):
        return None
    return value


@dataclass(frozen=True)
class EstimationResult:
    """
    Outcome of a threshold search.

    For the constant variant ``threshold`` is set and ``rss_curve`` holds one
    RSS per candidate. For the time-varying variant ``theta_first`` and
    ``theta_last`` are set and ``rss_surface[i, j]`` is the RSS of the pair
    ``(candidates[i], candidates[j])``. Degenerate candidates carry NaN RSS.
    """
    variant: str
    candidates: np.ndarray
    fit: FitResult
    halflife: float
    halflife_error: Optional[str]
    tie_policy: str
    tied_thresholds: np.ndarray
    tied_pairs: np.ndarray
    rss_null: float
    f_statistic: float
    f_pvalue: float
    regime_balance: Mapping[str, float]
    n_evaluated: int
    n_degenerate: int
    threshold: Optional[float] = None
    theta_first: Optional[float] = None
    theta_last: Optional[float] = None
    rss_curve: Optional[np.ndarray] = field(default=None, repr=False)
    rss_surface: Optional[np.ndarray] = field(default=None, repr=False)

    @property
    def rho_hat(self) -> float:
        return self.fit.rho_hat

    @property
    def rss(self) -> float:
        return self.fit.rss

    @property
    def n_candidates(self) -> int:
        return len(self.candidates)

    @property
    def n_ties(self) -> int:
        if self.variant == CONSTANT:
            return len(self.tied_thresholds)
        return len(self.tied_pairs)

    @property
    def halflife_defined(self) -> bool:
        return self.halflife_error is None

    def require_halflife(self) -> float:
        """Return the halflife, raising UndefinedHalflifeError if it is undefined."""
        if self.halflife_error is not None:
            raise UndefinedHalflifeError(self.halflife_error, rho=self.rho_hat)
        return self.halflife

    def rss_curve_points(self) -> List[Tuple[float, float]]:
        """``(theta, rss)`` pairs in candidate order."""
        if self.rss_curve is None:
            return []
        return [(float(t), float(r)) for t, r in zip(self.candidates, self.rss_curve)]

    def rss_surface_points(self) -> List[Tuple[float, float, float]]:
        """``(theta_first, theta_last, rss)`` triples in row-major candidate order."""
        if self.rss_surface is None:
            return []
        k = len(self.candidates)
        return [
            (float(self.candidates[i]), float(self.candidates[j]), float(self.rss_surface[i, j]))
            for i in range(k) for j in range(k)
        ]

    def to_dict(self) -> Dict[str, Any]:
        """
        Plain-Python representation suitable for JSON export.

        Non-finite numbers (degenerate candidates, an infinite F statistic)
        become None so the output is strict JSON.
        """
        halflife = self.halflife if self.halflife_defined else None
        if self.variant == CONSTANT:
            out = {
                'threshold': self.threshold,
                'rho_hat': self.rho_hat,
                'rss_curve': self.rss_curve_points(),
                'halflife': halflife,
                'tied_thresholds': [float(t) for t in self.tied_thresholds]
            }
        else:
            out = {
                'theta_first': self.theta_first,
                'theta_last': self.theta_last,
                'rho_hat': self.rho_hat,
                'rss_surface': self.rss_surface_points(),
                'halflife': halflife,
                'tied_pairs': [(float(a), float(b)) for a, b in self.tied_pairs]
            }

        out.update({
            'variant': self.variant,
            'halflife_error': self.halflife_error,
            'tie_policy': self.tie_policy,
            'fit': self.fit.to_dict(),
            'rss_null': self.rss_null,
            'f_statistic': self.f_statistic,
            'f_pvalue': self.f_pvalue,
            'regime_balance': dict(self.regime_balance),
            'n_candidates': self.n_candidates,
            'n_evaluated': self.n_evaluated,
            'n_degenerate': self.n_degenerate
        })
        return _json_safe(out)


def assemble_result(
    series: DifferencedSeries,
    variant: str,
    candidates: np.ndarray,
    rss_values: np.ndarray,
    fit: FitResult,
    thresholds: Tuple[float, ...],
    tied: np.ndarray,
    trajectory: np.ndarray,
    tie_policy: str = 'mean',
    strict_halflife: bool = False
) -> EstimationResult:
    """
    Package a completed search into an immutable EstimationResult.

    Args:
        series: Differenced series the search ran on
        variant: ``'constant'`` or ``'time_varying'``
        candidates: Candidate thresholds
        rss_values: RSS curve (K,) or surface (K, K)
        fit: Regression at the selected threshold(s)
        thresholds: ``(threshold,)`` or ``(theta_first, theta_last)``
        tied: Tied minimising thresholds (K_tied,) or pairs (K_tied, 2)
        trajectory: Selected threshold trajectory, length T
        tie_policy: Policy used to collapse ties
        strict_halflife: Raise instead of recording an undefined halflife

    Returns:
        EstimationResult

    Raises:
        UndefinedHalflifeError: if the halflife is undefined and ``strict_halflife`` is set
    """
    try:
        halflife = calculate_halflife(fit.rho_hat)
        halflife_error = None
    except UndefinedHalflifeError as e:
        if strict_halflife:
            raise
        logger.warning(f"Halflife undefined: {e}")
        halflife = float('nan')
        halflife_error = str(e)

    rss_values = _frozen(rss_values)
    rss_null = series.rss_null
    f_stat = f_statistic(rss_null, fit.rss, series.n_obs)

    common = dict(
        variant=variant,
        candidates=_frozen(candidates),
        fit=fit,
        halflife=halflife,
        halflife_error=halflife_error,
        tie_policy=tie_policy,
        rss_null=rss_null,
        f_statistic=f_stat,
        f_pvalue=f_pvalue(f_stat, series.n_obs),
        regime_balance=MappingProxyType(regime_balance(series.m_lag, trajectory)),
        n_evaluated=int(rss_values.size),
        n_degenerate=int(np.count_nonzero(np.isnan(rss_values)))
    )

    if variant == CONSTANT:
        return EstimationResult(
            threshold=float(thresholds[0]),
            tied_thresholds=_frozen(tied),
            tied_pairs=_frozen(np.empty((0, 2))),
            rss_curve=rss_values,
            **common
        )
    if variant == TIME_VARYING:
        return EstimationResult(
            theta_first=float(thresholds[0]),
            theta_last=float(thresholds[1]),
            tied_thresholds=_frozen(np.empty(0)),
            tied_pairs=_frozen(np.reshape(tied, (-1, 2))),
            rss_surface=rss_values,
            **common
        )
    raise ValueError(f"Unknown estimation variant '{variant}'")
