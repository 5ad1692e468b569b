"""
Models module for TAR threshold estimation.
"""
from .schemas import EstimatorConfig, SimulationConfig
from .threshold import (
    ConstantThresholdSearch, TimeVaryingThresholdSearch, ThresholdSearch,
    EstimationResult, assemble_result, calculate_halflife,
    generate_candidates, regime_fractions, regime_column,
    constant_trajectory, linear_trajectory
)
from .estimator import (
    TarThresholdEstimator, estimate_constant_threshold,
    estimate_time_varying_threshold, normalize_variant
)
from .simulation import generate_tar_series

__all__ = [
    'EstimatorConfig', 'SimulationConfig',
    'ConstantThresholdSearch', 'TimeVaryingThresholdSearch', 'ThresholdSearch',
    'EstimationResult', 'assemble_result', 'calculate_halflife',
    'generate_candidates', 'regime_fractions', 'regime_column',
    'constant_trajectory', 'linear_trajectory',
    'TarThresholdEstimator', 'estimate_constant_threshold',
    'estimate_time_varying_threshold', 'normalize_variant',
    'generate_tar_series'
]
