"""
Main Runner Script for the Portfolio Simulation
===============================================

This script runs the full random-portfolio workflow:
1. Loading a return (or price) matrix from Excel / CSV
2. Computing mean returns and the covariance matrix
3. Simulating a seeded ensemble of random portfolios
4. Selecting the maximum Sharpe portfolio and the Capital Allocation Line
5. Visualizing results and writing the results table

Usage:
    sf-analyze                              # Run with sample data
    sf-analyze --file returns.csv           # Run with a CSV of returns
    sf-analyze --file prices.xlsx --prices  # Convert prices to returns first
    sf-analyze --tickers AAPL,MSFT --seed 7 # Select assets, change the seed
"""

import sys
import argparse
import logging
import traceback
from datetime import datetime
from typing import Optional
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import pandas as pd

from sampled_frontier.config import SimulationConfig
from sampled_frontier.core.evaluator import ZERO_RISK_POLICIES
from sampled_frontier.core.loader import ReturnDataLoader, generate_sample_returns
from sampled_frontier.core.selector import select_optimal, select_minimum_risk
from sampled_frontier.core.simulation import SimulationEngine, DEFAULT_SEED
from sampled_frontier.core.statistics import asset_statistics
from sampled_frontier.visualization import plot_simulated_portfolios, plot_portfolio_weights


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logger(
    script_name: str = "portfolio_simulation",
    log_dir: Optional[Path] = None
) -> logging.Logger:
    """
    Sets up a logger that writes to both file and console.

    The handlers are attached to the package logger, so messages from the
    core modules end up in the same file as the script's own messages.

    Args:
        script_name: Name of the script (used in log filename)
        log_dir: Directory for log files (default: <package root>/logs)

    Returns:
        Configured logger instance
    """
    if log_dir is None:
        package_root = Path(__file__).parent.parent.parent
        log_dir = package_root / "logs"
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y_%m_%d_%H%M")
    log_filename = log_dir / f"log_{script_name}_{timestamp}.txt"

    logger = logging.getLogger("sampled_frontier")
    logger.setLevel(logging.INFO)
    logger.propagate = False

    # Clear existing handlers (prevent duplicates)
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_filename, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


# =============================================================================
# ANALYSIS CLASS
# =============================================================================

class AnalysisCheckpoint:
    """
    Tracks the progress of a simulation run.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.steps_completed = {}
        self.start_time = datetime.now()

    def start_step(self, step_name: str):
        self.logger.info(f"[CHECKPOINT] Starting: {step_name}")

    def complete_step(self, step_name: str):
        self.steps_completed[step_name] = True
        self.logger.info(f"[CHECKPOINT] Completed: {step_name}")

    def get_progress_summary(self) -> dict:
        elapsed = (datetime.now() - self.start_time).total_seconds()
        return {
            'steps_completed': list(self.steps_completed.keys()),
            'elapsed_seconds': elapsed
        }

    def log_final_report(self):
        summary = self.get_progress_summary()
        self.logger.info("=" * 60)
        self.logger.info("  SIMULATION COMPLETE")
        self.logger.info("=" * 60)
        self.logger.info(f"  Steps completed: {len(summary['steps_completed'])}")
        self.logger.info(f"  Total time: {summary['elapsed_seconds']:.2f} seconds")
        self.logger.info("=" * 60)


# =============================================================================
# MAIN ANALYSIS FUNCTIONS
# =============================================================================

def get_output_dir() -> Path:
    """Get the output directory path."""
    package_root = Path(__file__).parent.parent.parent
    output_dir = package_root / "output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


def run_full_analysis(
    returns: pd.DataFrame,
    config: Optional[SimulationConfig] = None,
    save_plots: bool = True,
    export_csv: bool = False,
    output_dir: Optional[str] = None,
    logger: Optional[logging.Logger] = None,
    close_figures: bool = True
) -> dict:
    """
    Run the complete simulation on a return matrix.

    This function performs:
    1. Asset selection (config.tickers)
    2. Portfolio simulation
    3. Optimal and minimum-risk portfolio selection
    4. Capital Allocation Line derivation
    5. Visualization and optional CSV export

    Args:
        returns: Return matrix (rows = periods, cols = assets)
        config: Simulation assumptions (default: SimulationConfig())
        save_plots: If True, save plots to files
        export_csv: If True, write the results table to CSV
        output_dir: Directory for output files
        logger: Logger instance
        close_figures: If False, leave figures open for plt.show()

    Returns:
        Dictionary with 'results', 'optimal', 'cal', 'min_risk',
        'asset_stats' and 'config'
    """
    if config is None:
        config = SimulationConfig()
    if logger is None:
        logger = logging.getLogger("sampled_frontier")

    if output_dir is None:
        output_dir = get_output_dir()
    else:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

    if config.tickers:
        returns = ReturnDataLoader().select_assets(returns, config.tickers)

    asset_names = [str(c) for c in returns.columns]
    checkpoint = AnalysisCheckpoint(logger)
    analysis = {'config': config}

    logger.info("=" * 70)
    logger.info("  RANDOM PORTFOLIO SIMULATION")
    logger.info("=" * 70)
    logger.info(f"  Assets: {', '.join(asset_names)}")
    logger.info(f"  Periods: {len(returns)}")
    for line in config.describe():
        logger.info(f"  {line}")
    logger.info("=" * 70)

    # Step 1: Simulate
    checkpoint.start_step("Simulate Portfolios")
    engine = SimulationEngine(
        workers=config.workers,
        portfolio_multiplier=config.portfolio_multiplier,
        zero_risk_policy=config.zero_risk_policy
    )
    results = engine.run(
        returns,
        risk_free_rate=config.risk_free_rate,
        seed=config.seed,
        portfolio_count=config.resolve_portfolio_count(len(asset_names)),
        asset_names=asset_names
    )
    analysis['results'] = results
    logger.info(f"Simulated {len(results)} portfolios")
    checkpoint.complete_step("Simulate Portfolios")

    # Step 2: Asset statistics
    checkpoint.start_step("Asset Statistics")
    analysis['asset_stats'] = asset_statistics(
        results.expected_returns, results.cov_matrix, asset_names
    )
    logger.info("\n--- Individual Asset Statistics ---")
    logger.info(f"{'Asset':<12} {'Mean':>12} {'Std Dev':>12}")
    logger.info("-" * 40)
    for name, stats in analysis['asset_stats'].items():
        logger.info(f"{name:<12} {stats['mean']*100:>11.4f}% {stats['std']*100:>11.4f}%")
    checkpoint.complete_step("Asset Statistics")

    # Step 3: Select portfolios
    checkpoint.start_step("Select Optimal Portfolio")
    optimal, cal = select_optimal(results, config.risk_free_rate)
    min_risk = select_minimum_risk(results)
    analysis['optimal'] = optimal
    analysis['cal'] = cal
    analysis['min_risk'] = min_risk

    logger.info("\n--- Optimal Portfolio (Maximum Sharpe Ratio among samples) ---")
    logger.info("Weights:")
    for name, w in zip(asset_names, optimal.weights):
        logger.info(f"  {name}: {w*100:>8.2f}%")
    logger.info(f"Expected Return: {optimal.expected_return*100:.4f}%")
    logger.info(f"Standard Deviation: {optimal.risk*100:.4f}%")
    logger.info(f"Sharpe Ratio: {optimal.sharpe_ratio:.4f}")

    logger.info("\n--- Minimum Risk Portfolio (among samples) ---")
    logger.info(f"Expected Return: {min_risk.expected_return*100:.4f}%")
    logger.info(f"Standard Deviation: {min_risk.risk*100:.4f}%")

    logger.info("\n--- Capital Allocation Line (CAL) ---")
    logger.info(f"CAL Equation: E[r] = {cal.intercept*100:.2f}% + {cal.slope:.4f} * sigma")
    checkpoint.complete_step("Select Optimal Portfolio")

    # Step 4: Outputs
    if export_csv:
        checkpoint.start_step("Export Results")
        csv_path = output_dir / "simulated_portfolios.csv"
        results.to_frame().to_csv(csv_path, index_label='Portfolio')
        logger.info(f"Saved: {csv_path.name}")
        checkpoint.complete_step("Export Results")

    if save_plots:
        checkpoint.start_step("Generate Plots")

        plot_simulated_portfolios(
            results, optimal, cal,
            min_risk=min_risk,
            save_path=str(output_dir / "simulated_portfolios.png")
        )
        logger.info("Saved: simulated_portfolios.png")

        plot_portfolio_weights(
            optimal, asset_names,
            title="Optimal Portfolio Weights",
            save_path=str(output_dir / "optimal_weights.png")
        )
        logger.info("Saved: optimal_weights.png")

        checkpoint.complete_step("Generate Plots")
        if close_figures:
            plt.close('all')

    checkpoint.log_final_report()
    return analysis


def load_returns(
    file_path: str,
    sheet: Optional[str] = None,
    is_prices: bool = False,
    log_returns: bool = False,
    logger: Optional[logging.Logger] = None
) -> pd.DataFrame:
    """
    Load and validate a return matrix from a CSV or Excel file.

    Args:
        file_path: Path to .csv, .xlsx or .xls file
        sheet: Excel sheet name (default: first sheet)
        is_prices: If True, the file holds prices
        log_returns: Use log returns when converting prices

    Returns:
        Clean return matrix

    Raises:
        ValueError: if the data fails validation
    """
    if logger is None:
        logger = logging.getLogger("sampled_frontier")

    logger.info(f"Loading data from: {file_path}")

    loader = ReturnDataLoader(
        is_prices=is_prices,
        return_method='log' if log_returns else 'simple'
    )

    suffix = Path(file_path).suffix.lower()
    if suffix == '.csv':
        returns = loader.load_returns_csv(file_path)
    elif suffix in ('.xlsx', '.xls'):
        logger.info(f"Sheet: {sheet if sheet is not None else 'first'}")
        returns = loader.load_returns_excel(file_path, sheet_name=sheet if sheet is not None else 0)
    else:
        raise ValueError(f"Unsupported file type: {suffix}. Use .csv, .xlsx or .xls")

    validation = loader.validate_returns(returns)
    if not validation['is_valid']:
        for error in validation['errors']:
            logger.error(error)
        raise ValueError("Data validation failed")

    for warning in validation['warnings']:
        logger.warning(warning)

    return returns


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Random Portfolio Simulation and Capital Allocation Line',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sf-analyze                                    # Run with sample data
  sf-analyze --file returns.csv                 # Analyze a CSV of returns
  sf-analyze --file prices.xlsx --prices        # Convert prices first
  sf-analyze --tickers AAPL,BA --portfolios 500
        """
    )

    parser.add_argument('--file', '-f', type=str,
                        help='Path to CSV or Excel file with returns (or prices)')
    parser.add_argument('--sheet', '-s', type=str, default=None,
                        help='Excel sheet name (default: first sheet)')
    parser.add_argument('--prices', action='store_true',
                        help='Input file holds prices instead of returns')
    parser.add_argument('--log-returns', action='store_true',
                        help='Use log returns when converting prices')
    parser.add_argument('--tickers', '-t', type=str, default=None,
                        help='Comma-separated assets to include, in order')
    parser.add_argument('--rf-rate', '-r', type=float, default=0.0,
                        help='Per-period risk-free rate (default: 0)')
    parser.add_argument('--seed', type=int, default=DEFAULT_SEED,
                        help=f'Seed for the weight sampler (default: {DEFAULT_SEED})')
    parser.add_argument('--multiplier', '-m', type=int, default=100,
                        help='Portfolios per asset (default: 100)')
    parser.add_argument('--portfolios', '-n', type=int, default=None,
                        help='Explicit number of portfolios (overrides --multiplier)')
    parser.add_argument('--workers', '-w', type=int, default=1,
                        help='Evaluator threads (default: 1)')
    parser.add_argument('--zero-risk', choices=ZERO_RISK_POLICIES, default='raise',
                        help='Sharpe ratio policy for zero-risk portfolios (default: raise)')
    parser.add_argument('--no-plots', action='store_true',
                        help='Disable plot generation')
    parser.add_argument('--show-plots', action='store_true',
                        help='Show plots interactively (default: just save)')
    parser.add_argument('--output-dir', '-o', type=str, default=None,
                        help='Directory for plots and CSV output')
    parser.add_argument('--export-csv', action='store_true',
                        help='Write the simulated portfolios to CSV')
    parser.add_argument('--log-dir', type=str, default=None,
                        help='Directory for log files (default: ./logs next to the package)')
    return parser


def main(argv=None) -> int:
    """Main entry point for the simulation script."""
    args = build_parser().parse_args(argv)

    if not args.show_plots:
        matplotlib.use('Agg')

    logger = setup_logger("portfolio_simulation", log_dir=args.log_dir)

    try:
        config = SimulationConfig(
            risk_free_rate=args.rf_rate,
            tickers=args.tickers.split(',') if args.tickers else None,
            seed=args.seed,
            portfolio_multiplier=args.multiplier,
            portfolio_count=args.portfolios,
            workers=args.workers,
            zero_risk_policy=args.zero_risk
        )

        if args.file:
            returns = load_returns(
                args.file,
                sheet=args.sheet,
                is_prices=args.prices,
                log_returns=args.log_returns,
                logger=logger
            )
        else:
            logger.info("No file specified. Using sample data...")
            returns = generate_sample_returns(4)

        run_full_analysis(
            returns,
            config,
            save_plots=not args.no_plots,
            export_csv=args.export_csv,
            output_dir=args.output_dir,
            logger=logger,
            close_figures=not args.show_plots
        )

        if args.show_plots and not args.no_plots:
            plt.show()

        logger.info("Simulation completed successfully!")
        return 0

    except Exception as e:
        logger.error(f"Simulation failed: {e}")
        logger.error(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
