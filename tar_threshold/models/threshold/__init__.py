"""
Threshold model package for TAR threshold estimation.
"""
from .candidates import generate_candidates, regime_fractions, thin_candidates
from .regimes import (
    constant_trajectory, linear_trajectory, linear_trajectories,
    regime_column, regime_balance
)
from .threshold_utils import (
    calculate_halflife, find_minimisers, resolve_ties, f_statistic, f_pvalue
)
from .results import EstimationResult, assemble_result, CONSTANT, TIME_VARYING
from .base import ThresholdSearch
from .constant import ConstantThresholdSearch
from .time_varying import TimeVaryingThresholdSearch

__all__ = [
    'generate_candidates', 'regime_fractions', 'thin_candidates',
    'constant_trajectory', 'linear_trajectory', 'linear_trajectories',
    'regime_column', 'regime_balance',
    'calculate_halflife', 'find_minimisers', 'resolve_ties', 'f_statistic', 'f_pvalue',
    'EstimationResult', 'assemble_result', 'CONSTANT', 'TIME_VARYING',
    'ThresholdSearch', 'ConstantThresholdSearch', 'TimeVaryingThresholdSearch'
]
