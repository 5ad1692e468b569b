"""
Threshold search visualizations for TAR threshold estimation.
"""
import logging
import numpy as np
import matplotlib.pyplot as plt
from typing import Optional

from ..core.decorators import error_handler, performance_tracker
from ..core.exceptions import VisualizationError
from ..data.preprocessors import DifferencedSeries
from ..models.threshold.regimes import constant_trajectory, linear_trajectory
from ..models.threshold.results import CONSTANT, TIME_VARYING, EstimationResult
from .plot_manager import get_plot_manager

logger = logging.getLogger(__name__)


def _finish(fig: plt.Figure, filename: Optional[str], output_dir: Optional[str], show: bool) -> plt.Figure:
    if filename:
        get_plot_manager().save_figure(fig, filename, output_dir=output_dir)
    if show:
        plt.show()
    return fig


@error_handler(fallback_value=None)
@performance_tracker()
def plot_rss_curve(
    result: EstimationResult,
    title: Optional[str] = None,
    filename: Optional[str] = None,
    output_dir: Optional[str] = None,
    show: bool = False
) -> Optional[plt.Figure]:
    """
    Plot RSS against candidate threshold for a constant search.

    Args:
        result: Constant-variant estimation result
        title: Optional plot title
        filename: Optional filename for saving
        output_dir: Directory for the saved figure
        show: Whether to show the plot

    Returns:
        Figure object if successful, None otherwise
    """
    if result.variant != CONSTANT or result.rss_curve is None:
        raise VisualizationError(f"RSS curve needs a constant result, got '{result.variant}'")

    fig, ax = get_plot_manager().create_figure()

    ax.plot(result.candidates, result.rss_curve, color='gray', marker='.', markersize=3, label='RSS')
    ax.axvline(result.threshold, color='red', linestyle='--', label=f'Threshold ({result.threshold:.4g})')
    if len(result.tied_thresholds) > 1:
        ax.scatter(
            result.tied_thresholds,
            np.full(len(result.tied_thresholds), result.rss_curve[~np.isnan(result.rss_curve)].min()),
            color='red', zorder=3, label=f'Tied minimisers ({len(result.tied_thresholds)})'
        )

    ax.set_title(title or "RSS by Candidate Threshold")
    ax.set_xlabel('Threshold')
    ax.set_ylabel('Residual sum of squares')
    ax.legend(loc='best')
    ax.grid(True, linestyle='--', alpha=0.7)

    return _finish(fig, filename, output_dir, show)


@error_handler(fallback_value=None)
@performance_tracker()
def plot_rss_surface(
    result: EstimationResult,
    title: Optional[str] = None,
    filename: Optional[str] = None,
    output_dir: Optional[str] = None,
    show: bool = False
) -> Optional[plt.Figure]:
    """Heatmap of RSS over (theta_first, theta_last) for a time-varying search."""
    if result.variant != TIME_VARYING or result.rss_surface is None:
        raise VisualizationError(f"RSS surface needs a time-varying result, got '{result.variant}'")

    fig, ax = get_plot_manager().create_figure()

    candidates = result.candidates
    # Cells are centred on the candidates, which are unevenly spaced; rows index theta_first
    mesh = ax.pcolormesh(
        candidates, candidates, np.ma.masked_invalid(result.rss_surface),
        shading='nearest', cmap='viridis'
    )
    fig.colorbar(mesh, ax=ax, label='Residual sum of squares')
    ax.scatter([result.theta_last], [result.theta_first], color='red', marker='x', s=60,
               label=f'Selected ({result.theta_first:.4g} -> {result.theta_last:.4g})')
    ax.plot(candidates[[0, -1]], candidates[[0, -1]], color='white', linestyle=':', linewidth=1, label='Constant threshold')

    ax.set_title(title or "RSS by Threshold Endpoints")
    ax.set_xlabel('Last threshold')
    ax.set_ylabel('First threshold')
    ax.legend(loc='best')

    return _finish(fig, filename, output_dir, show)


@error_handler(fallback_value=None)
@performance_tracker()
def plot_threshold_regimes(
    series: DifferencedSeries,
    result: EstimationResult,
    title: Optional[str] = None,
    filename: Optional[str] = None,
    output_dir: Optional[str] = None,
    show: bool = False
) -> Optional[plt.Figure]:
    """Plot the lagged first differences against the selected threshold band."""
    if result.variant == CONSTANT:
        trajectory = constant_trajectory(result.threshold, series.n_obs)
    else:
        trajectory = linear_trajectory(result.theta_first, result.theta_last, series.n_obs)

    fig, ax = get_plot_manager().create_figure()

    t = np.arange(series.n_obs)
    outside = series.abs_m_lag > trajectory
    outside_pct = outside.mean() * 100

    ax.plot(t, series.m_lag, color='gray', alpha=0.7, label='Lagged difference')
    ax.plot(t, trajectory, color='red', linestyle='--', label='Threshold')
    ax.plot(t, -trajectory, color='red', linestyle='--')
    ax.fill_between(t, -trajectory, trajectory, color='lightgreen', alpha=0.2,
                    label=f'Inner band ({100 - outside_pct:.1f}%)')
    ax.scatter(t[outside], series.m_lag[outside], color='salmon', s=4,
               label=f'Outer regime ({outside_pct:.1f}%)')

    ax.set_title(title or "Threshold Regimes")
    ax.set_xlabel('t')
    ax.set_ylabel('m_{t-1}')
    ax.legend(loc='best')
    ax.grid(True, linestyle='--', alpha=0.7)

    return _finish(fig, filename, output_dir, show)
