"""
Custom exception classes for TAR threshold estimation.
"""


class TarThresholdError(Exception):
    """Base exception for all tar_threshold errors."""
    pass


class ConfigurationError(TarThresholdError):
    """Error in configuration settings."""
    pass


class DataValidationError(TarThresholdError):
    """Input series failed validation."""
    pass


class ModelError(TarThresholdError):
    """Base class for model-related errors."""
    pass


class ThresholdModelError(ModelError):
    """Error in threshold model estimation."""
    pass


class InsufficientDataError(ThresholdModelError):
    """Series too short to form a lagged regression pair."""
    pass


class NoAdmissibleThresholdError(ThresholdModelError):
    """No candidate threshold passes the regime balance filter."""
    pass


class DegenerateRegressionError(ThresholdModelError):
    """Regression predictor column is constant."""
    pass


class UndefinedHalflifeError(ThresholdModelError):
    """Halflife is not finite for the fitted coefficient."""

    def __init__(self, message: str, rho: float = float('nan')):
        super().__init__(message)
        self.rho = rho


class ComputationError(TarThresholdError):
    """Error in computation operations."""
    pass


class VisualizationError(TarThresholdError):
    """Error in diagnostic visualization."""
    pass


class ReportingError(TarThresholdError):
    """Error while exporting results."""
    pass
