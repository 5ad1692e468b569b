"""
Visualization module for TAR threshold estimation.
"""
from .plot_manager import PlotManager, get_plot_manager
from .threshold_plots import plot_rss_curve, plot_rss_surface, plot_threshold_regimes

__all__ = [
    'PlotManager', 'get_plot_manager',
    'plot_rss_curve', 'plot_rss_surface', 'plot_threshold_regimes'
]
