#!/usr/bin/env python
"""
app.py

Command-line application for TAR threshold estimation.
"""
import os
import logging
import typer
from typing import Optional

from ..core.config import initialize_config, get_config
from ..core.decorators import performance_context
from ..core.exceptions import TarThresholdError
from ..core.logging_setup import setup_logging
from ..data.loaders import load_series, save_series
from ..data.preprocessors import prepare_series, from_differences
from ..models.estimator import TarThresholdEstimator, normalize_variant
from ..models.schemas import EstimatorConfig, SimulationConfig
from ..models.simulation import generate_tar_series
from ..models.threshold.results import CONSTANT, EstimationResult
from ..reporting.output_manager import OutputManager
from ..visualization.threshold_plots import plot_rss_curve, plot_rss_surface, plot_threshold_regimes

logger = logging.getLogger(__name__)

app = typer.Typer(help="Threshold autoregression (TAR) threshold estimation")


def _init(config_path: Optional[str], verbose: bool, log_file: bool) -> None:
    if config_path:
        initialize_config(config_path)
    config = get_config()
    setup_logging(
        log_level="DEBUG" if verbose else config.get('logging.log_level', 'INFO'),
        log_to_file=log_file,
        verbose_libraries=config.get('logging.verbose_libraries', {})
    )


def format_summary(result: EstimationResult) -> str:
    """One-block plain-text summary of an estimation result."""
    if result.variant == CONSTANT:
        lines = [f"threshold:     {result.threshold:.6g}"]
    else:
        lines = [
            f"theta_first:   {result.theta_first:.6g}",
            f"theta_last:    {result.theta_last:.6g}"
        ]
    halflife = f"{result.halflife:.4g}" if result.halflife_defined else f"undefined ({result.halflife_error})"
    lines += [
        f"rho_hat:       {result.rho_hat:.6g} (se {result.fit.rho_se:.4g})",
        f"halflife:      {halflife}",
        f"rss:           {result.rss:.6g} (null {result.rss_null:.6g}, F {result.f_statistic:.4g})",
        f"candidates:    {result.n_candidates} ({result.n_degenerate} degenerate, {result.n_ties} tied)"
    ]
    return "\n".join(lines)


@app.command()
def estimate(
    path: str = typer.Argument(..., help='CSV file holding the series'),
    column: Optional[str] = typer.Option(None, help='Column to read; defaults to the last numeric column'),
    variant: str = typer.Option('constant', help='constant or time-varying'),
    differenced: bool = typer.Option(False, help='Treat the column as first differences'),
    grid_points: Optional[int] = typer.Option(None, help='Cap on the number of candidate thresholds'),
    tie_policy: Optional[str] = typer.Option(None, help='mean or first'),
    output: Optional[str] = typer.Option(None, help='Directory for the JSON result and RSS table'),
    plot_dir: Optional[str] = typer.Option(None, help='Directory for diagnostic plots'),
    config: Optional[str] = typer.Option(None, help='Configuration file path'),
    verbose: bool = typer.Option(False, help='Enable verbose logging'),
    log_file: bool = typer.Option(False, help='Also write logs to the configured log directory')
):
    """Estimate a TAR threshold model for one series."""
    _init(config, verbose, log_file)

    try:
        variant = normalize_variant(variant)
        estimator_config = EstimatorConfig.from_config(
            get_config(), grid_points=grid_points, tie_policy=tie_policy
        )
        values = load_series(path, column)
        series = from_differences(values) if differenced else prepare_series(values)

        with performance_context("Estimation", level="info"):
            result = TarThresholdEstimator(estimator_config).fit(series, variant=variant)
    except (TarThresholdError, FileNotFoundError, ValueError) as e:
        logger.error(f"Estimation failed: {e}")
        raise typer.Exit(code=1)

    typer.echo(format_summary(result))

    name = os.path.splitext(os.path.basename(path))[0]
    if output:
        manager = OutputManager(output_dir=output, run_name=name)
        saved = manager.save_result(result, name)
        manager.save_rss_table(result, name)
        manager.save_manifest()
        if saved:
            typer.echo(f"Saved result to {saved}")

    if plot_dir:
        if result.variant == CONSTANT:
            plot_rss_curve(result, filename=f"{name}_rss_curve", output_dir=plot_dir)
        else:
            plot_rss_surface(result, filename=f"{name}_rss_surface", output_dir=plot_dir)
        plot_threshold_regimes(series, result, filename=f"{name}_regimes", output_dir=plot_dir)
        logger.info(f"Plots saved to {plot_dir}")


@app.command()
def simulate(
    output: str = typer.Argument(..., help='CSV file to write'),
    n_obs: int = typer.Option(1000, help='Number of level observations'),
    rho: float = typer.Option(-0.5, help='Outer-regime adjustment coefficient'),
    threshold: float = typer.Option(10.0, help='Threshold (first value of the path)'),
    threshold_end: Optional[float] = typer.Option(None, help='Last threshold value for a linear path'),
    noise_scale: float = typer.Option(10.0, help='Standard deviation of the shocks'),
    initial_level: float = typer.Option(0.0, help='First level observation'),
    seed: Optional[int] = typer.Option(None, help='Random seed'),
    verbose: bool = typer.Option(False, help='Enable verbose logging')
):
    """Write a synthetic TAR level series to CSV."""
    _init(None, verbose, False)

    try:
        sim_config = SimulationConfig(
            n_obs=n_obs, rho=rho, threshold=threshold, threshold_end=threshold_end,
            noise_scale=noise_scale, initial_level=initial_level, seed=seed
        )
    except ValueError as e:
        logger.error(f"Invalid simulation parameters: {e}")
        raise typer.Exit(code=1)

    levels = generate_tar_series(sim_config)
    save_series(levels, output, column='level')
    typer.echo(f"Wrote {len(levels)} observations to {output}")


def main() -> None:
    """Entry point for the ``tar-threshold`` console script."""
    app()


if __name__ == "__main__":
    main()
