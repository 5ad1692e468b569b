"""
Plot styling and management for TAR threshold estimation.
"""
import os
import logging
import numpy as np
import matplotlib.pyplot as plt
from typing import List, Optional, Tuple, Union

from ..core.decorators import error_handler
from ..core.exceptions import VisualizationError

logger = logging.getLogger(__name__)


class PlotManager:
    """Manager for consistent plot styling and configuration."""

    def __init__(
        self,
        style: str = 'seaborn-v0_8-whitegrid',
        figsize: Tuple[int, int] = (10, 6),
        dpi: int = 100,
        font_scale: float = 1.0,
        output_dir: Optional[str] = None
    ):
        """Initialize the plot manager with styling options."""
        self.style = style
        self.figsize = figsize
        self.dpi = dpi
        self.font_scale = font_scale
        self.output_dir = output_dir

        self._setup_style()

    @error_handler(fallback_value=None, log_level="warning", include_traceback=False)
    def _setup_style(self) -> None:
        """Set up plot styling."""
        if self.style in plt.style.available:
            plt.style.use(self.style)

        plt.rcParams['font.size'] = 10 * self.font_scale
        plt.rcParams['axes.titlesize'] = 12 * self.font_scale
        plt.rcParams['axes.labelsize'] = 10 * self.font_scale
        plt.rcParams['legend.fontsize'] = 9 * self.font_scale
        plt.rcParams['lines.linewidth'] = 1.5

        if self.output_dir:
            os.makedirs(self.output_dir, exist_ok=True)

    def create_figure(
        self,
        nrows: int = 1,
        ncols: int = 1,
        figsize: Optional[Tuple[int, int]] = None
    ) -> Tuple[plt.Figure, Union[plt.Axes, np.ndarray]]:
        """Create a new figure with consistent styling."""
        return plt.subplots(
            nrows=nrows,
            ncols=ncols,
            figsize=figsize or self.figsize,
            dpi=self.dpi,
            constrained_layout=True
        )

    def save_figure(
        self,
        fig: plt.Figure,
        filename: str,
        output_dir: Optional[str] = None,
        formats: Optional[List[str]] = None
    ) -> str:
        """
        Save figure to file.

        Args:
            fig: Figure to save
            filename: Base filename; any extension is replaced
            output_dir: Directory overriding the manager's output directory
            formats: Formats to save, default ``['png']``

        Returns:
            Path to the first saved file
        """
        target_dir = output_dir or self.output_dir
        if not target_dir:
            raise VisualizationError("No output directory specified for saving figures")
        os.makedirs(target_dir, exist_ok=True)

        base_filename = os.path.splitext(os.path.basename(filename))[0]
        paths = []
        for fmt in formats or ['png']:
            output_path = os.path.join(target_dir, f"{base_filename}.{fmt}")
            fig.savefig(output_path, dpi=self.dpi, bbox_inches='tight')
            paths.append(output_path)
            logger.debug(f"Saved figure to {output_path}")

        return paths[0]


# Global plot manager instance
plot_manager = PlotManager()


def get_plot_manager() -> PlotManager:
    """Get the global plot manager instance."""
    return plot_manager
