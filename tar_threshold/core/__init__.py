"""
Core module for TAR threshold estimation.
"""
from .config import Config, config, get_config, initialize_config, DEFAULT_CONFIG
from .decorators import error_handler, performance_tracker, performance_context
from .exceptions import (
    TarThresholdError, ConfigurationError, DataValidationError, ModelError,
    ThresholdModelError, InsufficientDataError, NoAdmissibleThresholdError,
    DegenerateRegressionError, UndefinedHalflifeError, ComputationError,
    VisualizationError, ReportingError
)
from .logging_setup import setup_logging, setup_logging_from_config, JsonFormatter

__all__ = [
    'Config', 'config', 'get_config', 'initialize_config', 'DEFAULT_CONFIG',
    'error_handler', 'performance_tracker', 'performance_context',
    'TarThresholdError', 'ConfigurationError', 'DataValidationError', 'ModelError',
    'ThresholdModelError', 'InsufficientDataError', 'NoAdmissibleThresholdError',
    'DegenerateRegressionError', 'UndefinedHalflifeError', 'ComputationError',
    'VisualizationError', 'ReportingError',
    'setup_logging', 'setup_logging_from_config', 'JsonFormatter'
]
