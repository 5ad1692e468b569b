"""
Synthetic series generation for TAR threshold estimation.
"""
import logging
import numpy as np

from .schemas import SimulationConfig
from .threshold.regimes import linear_trajectory

logger = logging.getLogger(__name__)


def generate_tar_series(config: SimulationConfig) -> np.ndarray:
    """
    Simulate a raw level series whose first differences follow a TAR process.

    The first differences evolve as

        m_t = m_{t-1} + rho * m_{t-1} * 1{|m_{t-1}| > theta_t} + e_t

    with Gaussian ``e_t`` of scale ``noise_scale`` and ``theta_t`` constant at
    ``threshold`` or linear from ``threshold`` to ``threshold_end``. Inside
    the band the differences follow a random walk.

    Args:
        config: Simulation parameters

    Returns:
        Level series of length ``n_obs`` starting at ``initial_level``
    """
    rng = np.random.default_rng(config.seed)
    n_diff = config.n_obs - 1
    shocks = rng.normal(0.0, config.noise_scale, size=n_diff)

    end = config.threshold_end if config.threshold_end is not None else config.threshold
    # theta_t applies to the transition from m_{t-1} to m_t, t = 1..M-1
    trajectory = linear_trajectory(config.threshold, end, max(n_diff - 1, 1))

    m = np.empty(n_diff)
    m[0] = shocks[0]
    for t in range(1, n_diff):
        prev = m[t - 1]
        adjust = config.rho * prev if abs(prev) > trajectory[t - 1] else 0.0
        m[t] = prev + adjust + shocks[t]

    levels = np.empty(config.n_obs)
    levels[0] = config.initial_level
    levels[1:] = config.initial_level + np.cumsum(m)

    logger.debug(
        f"Simulated {config.n_obs} observations (rho={config.rho}, "
        f"threshold={config.threshold}, threshold_end={config.threshold_end})"
    )
    return levels
