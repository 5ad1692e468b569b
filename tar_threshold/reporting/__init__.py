"""
Reporting module for TAR threshold estimation.
"""
from .output_manager import OutputManager, NumpyEncoder

__all__ = ['OutputManager', 'NumpyEncoder']
