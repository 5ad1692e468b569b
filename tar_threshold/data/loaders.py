"""
Data loading functions for TAR threshold estimation.
"""
import os
import logging
import numpy as np
import pandas as pd
from typing import Optional

from ..core.exceptions import DataValidationError
from ..core.decorators import performance_tracker
from .validators import validate_series

logger = logging.getLogger(__name__)


@performance_tracker()
def load_series(file_path: str, column: Optional[str] = None) -> np.ndarray:
    """
    Load an ordered series of observations from a CSV file.

    Args:
        file_path: Path to the CSV file
        column: Column to read; defaults to the last numeric column

    Returns:
        Float array in file order

    Raises:
        FileNotFoundError: if the file does not exist
        DataValidationError: if the column is missing or not numeric
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Data file not found: {file_path}")

    if not file_path.endswith('.csv'):
        raise DataValidationError(f"Unsupported file format: {file_path}")

    df = pd.read_csv(file_path)

    if column is None:
        numeric = df.select_dtypes(include=[np.number]).columns
        if len(numeric) == 0:
            raise DataValidationError(f"No numeric column found in {file_path}")
        column = numeric[-1]
    elif column not in df.columns:
        raise DataValidationError(
            f"Column '{column}' not found in {file_path}; available: {', '.join(map(str, df.columns))}"
        )

    values = pd.to_numeric(df[column], errors='coerce')
    logger.info(f"Loaded {len(values)} observations of '{column}' from {file_path}")
    return validate_series(values, name=f"column '{column}'")


def save_series(values: np.ndarray, file_path: str, column: str = 'value') -> str:
    """Write a series to CSV with a ``t`` index column."""
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    df = pd.DataFrame({column: np.asarray(values, dtype=np.float64)})
    df.index.name = 't'
    df.to_csv(file_path)
    logger.info(f"Saved {len(df)} observations to {file_path}")
    return file_path
