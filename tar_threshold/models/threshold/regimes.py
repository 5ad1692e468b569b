"""
Threshold trajectories and regime indicators for TAR threshold estimation.
"""
import numpy as np
from typing import Tuple

from ...core.exceptions import ComputationError


def _time_fraction(n_obs: int) -> np.ndarray:
    """t / (T - 1) for t = 0..T-1, or [0] when T = 1."""
    if n_obs < 1:
        raise ComputationError(f"Trajectory length must be positive, got {n_obs}")
    if n_obs == 1:
        return np.zeros(1)
    return np.arange(n_obs, dtype=np.float64) / (n_obs - 1)


def constant_trajectory(theta: float, n_obs: int) -> np.ndarray:
    """Threshold held at ``theta`` for all T regression observations."""
    if n_obs < 1:
        raise ComputationError(f"Trajectory length must be positive, got {n_obs}")
    return np.full(n_obs, float(theta))


def linear_trajectory(theta_first: float, theta_last: float, n_obs: int) -> np.ndarray:
    """
    Threshold moving linearly from ``theta_first`` to ``theta_last``.

    ``theta_t = theta_first + (theta_last - theta_first) * t / (T - 1)``;
    a single-observation trajectory is ``[theta_first]``.
    """
    return theta_first + (theta_last - theta_first) * _time_fraction(n_obs)


def linear_trajectories(theta_first: np.ndarray, theta_last: np.ndarray, n_obs: int) -> np.ndarray:
    """Stack of linear trajectories, shape (k, T), one per endpoint pair."""
    theta_first = np.asarray(theta_first, dtype=np.float64)[:, np.newaxis]
    theta_last = np.asarray(theta_last, dtype=np.float64)[:, np.newaxis]
    return theta_first + (theta_last - theta_first) * _time_fraction(n_obs)[np.newaxis, :]


def regime_column(m_lag: np.ndarray, trajectory: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Outer-regime indicator and regression predictor.

    Args:
        m_lag: Lagged first differences m_{t-1}, length T
        trajectory: Threshold per observation, length T

    Returns:
        Tuple of (z, x) where ``z_t = 1{|m_{t-1}| > theta_t}`` and ``x_t = m_{t-1} * z_t``
    """
    m_lag = np.asarray(m_lag, dtype=np.float64)
    trajectory = np.broadcast_to(np.asarray(trajectory, dtype=np.float64), m_lag.shape)
    z = np.abs(m_lag) > trajectory
    x = np.where(z, m_lag, 0.0)
    return z, x


def regime_balance(m_lag: np.ndarray, trajectory: np.ndarray) -> dict:
    """Inside and outside shares of the lagged differences for a trajectory."""
    z, _ = regime_column(m_lag, trajectory)
    outside = float(np.mean(z))
    return {'inside': 1.0 - outside, 'outside': outside}
