"""Core computational modules for the portfolio simulation."""

from sampled_frontier.core.statistics import compute_return_statistics, asset_statistics
from sampled_frontier.core.sampler import sample_weights, default_portfolio_count
from sampled_frontier.core.evaluator import PortfolioEvaluator, PortfolioRecord, evaluate_portfolio
from sampled_frontier.core.simulation import SimulationEngine, ResultsTable, DEFAULT_SEED
from sampled_frontier.core.selector import CapitalAllocationLine, select_optimal, select_minimum_risk
from sampled_frontier.core.loader import ReturnDataLoader, prices_to_returns, generate_sample_returns
from sampled_frontier.core.exceptions import (
    SimulationError,
    InsufficientDataError,
    InvalidDimensionError,
    DimensionMismatchError,
    NumericalError,
    DivisionByZeroError,
    EmptyResultsError,
)

__all__ = [
    "compute_return_statistics",
    "asset_statistics",
    "sample_weights",
    "default_portfolio_count",
    "PortfolioEvaluator",
    "PortfolioRecord",
    "evaluate_portfolio",
    "SimulationEngine",
    "ResultsTable",
    "DEFAULT_SEED",
    "CapitalAllocationLine",
    "select_optimal",
    "select_minimum_risk",
    "ReturnDataLoader",
    "prices_to_returns",
    "generate_sample_returns",
    "SimulationError",
    "InsufficientDataError",
    "InvalidDimensionError",
    "DimensionMismatchError",
    "NumericalError",
    "DivisionByZeroError",
    "EmptyResultsError",
]
