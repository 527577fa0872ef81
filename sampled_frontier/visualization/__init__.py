"""Visualization modules for the portfolio simulation."""

from sampled_frontier.visualization.plots import (
    plot_simulated_portfolios,
    plot_portfolio_weights
)

__all__ = [
    "plot_simulated_portfolios",
    "plot_portfolio_weights",
]
