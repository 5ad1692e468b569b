"""
Regression kernels for TAR threshold estimation.

The model is fitted through the origin:

    dm_t = rho * x_t + e_t,   x_t = m_{t-1} * 1{|m_{t-1}| > theta_t}
"""
import logging
import warnings
import numpy as np
import statsmodels.api as sm
from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import DegenerateRegressionError, ComputationError
from ..data.preprocessors import DifferencedSeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FitResult:
    """No-intercept OLS fit of the differenced series on the regime column."""
    rho_hat: float
    residuals: np.ndarray
    rss: float
    rho_se: float
    t_statistic: float
    n_obs: int
    n_outside: int
    intercept: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            'rho_hat': self.rho_hat,
            'intercept': self.intercept,
            'rss': self.rss,
            'rho_se': self.rho_se,
            't_statistic': self.t_statistic,
            'n_obs': self.n_obs,
            'n_outside': self.n_outside
        }


def is_degenerate(x: np.ndarray) -> bool:
    """A predictor column is degenerate when all of its values are equal."""
    return bool(np.ptp(x) == 0)


def fit_through_origin(dm: np.ndarray, x: np.ndarray) -> FitResult:
    """
    Regress ``dm`` on ``x`` with no intercept.

    Args:
        dm: Response, length T
        x: Regime column, length T

    Returns:
        FitResult with statsmodels standard error and t statistic

    Raises:
        DegenerateRegressionError: if ``x`` is constant (including all zero)
    """
    dm = np.asarray(dm, dtype=np.float64)
    x = np.asarray(x, dtype=np.float64)

    if dm.shape != x.shape or dm.ndim != 1:
        raise ComputationError(f"Response and predictor shapes differ: {dm.shape} vs {x.shape}")
    if len(x) == 0 or is_degenerate(x):
        raise DegenerateRegressionError(
            f"Regime column is constant over {len(x)} observations; regression is undefined"
        )

    with warnings.catch_warnings():
        # Single-observation fits have zero residual degrees of freedom
        warnings.simplefilter("ignore", RuntimeWarning)
        model = sm.OLS(dm, x).fit()

    residuals = np.array(model.resid, dtype=np.float64)
    residuals.flags.writeable = False

    return FitResult(
        rho_hat=float(model.params[0]),
        residuals=residuals,
        rss=float(model.ssr),
        rho_se=float(model.bse[0]),
        t_statistic=float(model.tvalues[0]),
        n_obs=len(dm),
        n_outside=int(np.count_nonzero(x))
    )


def regime_design(series: DifferencedSeries, trajectories: np.ndarray) -> np.ndarray:
    """
    Build the regime columns for a block of trajectories.

    Args:
        series: Differenced series
        trajectories: Array of shape (k, T), or (k, 1) for constant thresholds

    Returns:
        Array of shape (k, T) whose row i is ``m_lag * 1{|m_lag| > theta_i}``
    """
    trajectories = np.asarray(trajectories, dtype=np.float64)
    if trajectories.ndim != 2 or trajectories.shape[1] not in (1, series.n_obs):
        raise ComputationError(
            f"Trajectory block must have shape (k, {series.n_obs}) or (k, 1), got {trajectories.shape}"
        )
    outside = series.abs_m_lag[np.newaxis, :] > trajectories
    return np.where(outside, series.m_lag[np.newaxis, :], 0.0)


def evaluate_rss_batch(series: DifferencedSeries, trajectories: np.ndarray) -> np.ndarray:
    """
    Residual sum of squares for each trajectory in a block.

    Rows whose regime column is constant are reported as NaN.

    Args:
        series: Differenced series
        trajectories: Array of shape (k, T), or (k, 1) for constant thresholds

    Returns:
        Array of k RSS values
    """
    X = regime_design(series, trajectories)
    dm = series.dm

    degenerate = np.ptp(X, axis=1) == 0
    sxy = (X * dm).sum(axis=1)
    sxx = (X * X).sum(axis=1)

    with np.errstate(divide='ignore', invalid='ignore'):
        beta = np.where(degenerate, np.nan, sxy / np.where(degenerate, 1.0, sxx))

    resid = dm[np.newaxis, :] - beta[:, np.newaxis] * X
    rss = (resid * resid).sum(axis=1)
    rss[degenerate] = np.nan
    return rss
