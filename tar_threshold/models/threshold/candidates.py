"""
Candidate threshold generation for TAR threshold estimation.
"""
import logging
import numpy as np
from typing import Optional, Tuple

from ...core.exceptions import NoAdmissibleThresholdError
from ...data.validators import SeriesLike, validate_series

logger = logging.getLogger(__name__)


def regime_fractions(m: SeriesLike, theta: float) -> Tuple[float, float]:
    """
    Share of first differences inside and outside the band.

    Args:
        m: First-difference series, length M
        theta: Threshold

    Returns:
        Tuple of (inside fraction ``|m_t| <= theta``, outside fraction ``|m_t| > theta``)
    """
    abs_m = np.abs(validate_series(m, name="difference series"))
    n_inside = int(np.count_nonzero(abs_m <= theta))
    return n_inside / len(abs_m), (len(abs_m) - n_inside) / len(abs_m)


def thin_candidates(candidates: np.ndarray, grid_points: Optional[int]) -> np.ndarray:
    """
    Keep at most ``grid_points`` candidates evenly spaced by rank.

    The smallest and largest candidates are always kept.
    """
    if grid_points is None or grid_points >= len(candidates):
        return candidates
    if grid_points < 2:
        return candidates[:1]
    idx = np.unique(np.round(np.linspace(0, len(candidates) - 1, grid_points)).astype(int))
    return candidates[idx]


def generate_candidates(
    m: SeriesLike,
    min_regime_fraction: float = 0.20,
    grid_points: Optional[int] = None
) -> np.ndarray:
    """
    Admissible thresholds from the absolute first differences.

    A value ``theta`` from the distinct sorted ``|m_t|`` is kept when at
    least ``min_regime_fraction`` of all M differences lie on each side of
    it. Both fractions are counted over the full series.

    Args:
        m: First-difference series, length M
        min_regime_fraction: Minimum share required in each regime
        grid_points: Optional cap on the number of candidates returned

    Returns:
        Strictly increasing read-only array of candidates

    Raises:
        NoAdmissibleThresholdError: if no value passes the balance filter
    """
    abs_m = np.abs(validate_series(m, name="difference series"))
    n = len(abs_m)

    sorted_abs = np.sort(abs_m)
    distinct = np.unique(sorted_abs)

    # Count of |m_t| <= theta for every distinct theta
    n_inside = np.searchsorted(sorted_abs, distinct, side='right')
    inside_frac = n_inside / n
    outside_frac = (n - n_inside) / n

    admissible = distinct[(inside_frac >= min_regime_fraction) & (outside_frac >= min_regime_fraction)]

    if len(admissible) == 0:
        raise NoAdmissibleThresholdError(
            f"No threshold leaves {min_regime_fraction:.0%} of {n} observations in each regime"
        )

    candidates = thin_candidates(admissible, grid_points)
    if len(candidates) < len(admissible):
        logger.debug(f"Thinned {len(admissible)} admissible candidates to {len(candidates)}")

    logger.debug(
        f"{len(candidates)} candidate thresholds in [{candidates[0]:.4g}, {candidates[-1]:.4g}]"
    )
    candidates = np.array(candidates, dtype=np.float64)
    candidates.flags.writeable = False
    return candidates
