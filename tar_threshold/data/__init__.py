"""
Data module for TAR threshold estimation.
"""
from .validators import SeriesLike, validate_series, check_minimum_observations
from .preprocessors import DifferencedSeries, prepare_series, from_differences
from .loaders import load_series, save_series

__all__ = [
    'SeriesLike', 'validate_series', 'check_minimum_observations',
    'DifferencedSeries', 'prepare_series', 'from_differences',
    'load_series', 'save_series'
]
