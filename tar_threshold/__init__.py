"""
Threshold autoregression (TAR) threshold estimation.
"""
from .core import (
    config, get_config, initialize_config, setup_logging,
    TarThresholdError, DataValidationError, InsufficientDataError,
    NoAdmissibleThresholdError, DegenerateRegressionError, UndefinedHalflifeError
)
from .data import DifferencedSeries, prepare_series, from_differences, load_series
from .models import (
    EstimatorConfig, SimulationConfig, EstimationResult,
    ConstantThresholdSearch, TimeVaryingThresholdSearch, TarThresholdEstimator,
    estimate_constant_threshold, estimate_time_varying_threshold,
    calculate_halflife, generate_candidates, generate_tar_series
)

__version__ = "1.0.0"

__all__ = [
    'config', 'get_config', 'initialize_config', 'setup_logging',
    'TarThresholdError', 'DataValidationError', 'InsufficientDataError',
    'NoAdmissibleThresholdError', 'DegenerateRegressionError', 'UndefinedHalflifeError',
    'DifferencedSeries', 'prepare_series', 'from_differences', 'load_series',
    'EstimatorConfig', 'SimulationConfig', 'EstimationResult',
    'ConstantThresholdSearch', 'TimeVaryingThresholdSearch', 'TarThresholdEstimator',
    'estimate_constant_threshold', 'estimate_time_varying_threshold',
    'calculate_halflife', 'generate_candidates', 'generate_tar_series'
]
