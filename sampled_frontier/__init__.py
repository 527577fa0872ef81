"""
Sampled Frontier - Random Portfolio Search for the Capital Allocation Line
==========================================================================

Estimates the risk/return profile of a basket of assets from historical
returns and searches a seeded ensemble of random long-only portfolios for
the one with the highest Sharpe ratio.

Usage:
    from sampled_frontier import SimulationEngine, select_optimal
    from sampled_frontier.visualization import plot_simulated_portfolios

Classes:
    SimulationEngine - Runs the random-portfolio scan
    ResultsTable - Ordered simulated portfolios
    SimulationConfig - Run assumptions (risk-free rate, seed, counts)
    ReturnDataLoader - Return matrices from Excel/CSV

Functions:
    compute_return_statistics - Mean vector and covariance from returns
    sample_weights - Seeded random weight vectors
    select_optimal - Maximum-Sharpe portfolio and Capital Allocation Line
"""

from sampled_frontier.core.statistics import compute_return_statistics
from sampled_frontier.core.sampler import sample_weights
from sampled_frontier.core.evaluator import PortfolioEvaluator, PortfolioRecord
from sampled_frontier.core.simulation import SimulationEngine, ResultsTable
from sampled_frontier.core.selector import CapitalAllocationLine, select_optimal
from sampled_frontier.core.loader import ReturnDataLoader, generate_sample_returns
from sampled_frontier.config import SimulationConfig

__version__ = "1.0.0"

__all__ = [
    "compute_return_statistics",
    "sample_weights",
    "PortfolioEvaluator",
    "PortfolioRecord",
    "SimulationEngine",
    "ResultsTable",
    "CapitalAllocationLine",
    "select_optimal",
    "ReturnDataLoader",
    "generate_sample_returns",
    "SimulationConfig",
]
