"""
Input validation for TAR threshold estimation.
"""
import logging
import numpy as np
import pandas as pd
from typing import Sequence, Union

from ..core.exceptions import DataValidationError, InsufficientDataError

logger = logging.getLogger(__name__)

SeriesLike = Union[Sequence[float], np.ndarray, pd.Series]


def validate_series(values: SeriesLike, name: str = "series") -> np.ndarray:
    """
    Convert an ordered sequence of observations to a 1-D float array.

    Args:
        values: List, numpy array or pandas Series of real observations
        name: Label used in error messages

    Returns:
        Contiguous float64 array

    Raises:
        DataValidationError: if the input is not 1-D, not numeric, or holds
            NaN or infinite values
    """
    if values is None:
        raise DataValidationError(f"No {name} provided")

    if isinstance(values, pd.Series):
        values = values.to_numpy()

    try:
        arr = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise DataValidationError(f"{name} must contain real numbers: {e}") from e

    if arr.ndim != 1:
        raise DataValidationError(f"{name} must be one-dimensional, got shape {arr.shape}")

    n_bad = int(np.count_nonzero(~np.isfinite(arr)))
    if n_bad:
        raise DataValidationError(f"{name} contains {n_bad} missing or infinite values")

    return np.ascontiguousarray(arr)


def check_minimum_observations(n_obs: int, minimum: int, name: str = "series") -> None:
    """Raise InsufficientDataError when fewer than ``minimum`` observations exist."""
    if n_obs < minimum:
        raise InsufficientDataError(
            f"Insufficient observations in {name}: {n_obs} < {minimum}"
        )
