"""
Plotting Module for the Portfolio Simulation
============================================

This module provides visualization functions for the random-portfolio scan.
It creates plots showing:
- Every simulated portfolio on the risk-return plane, coloured by Sharpe ratio
- Individual asset positions
- The optimal (maximum Sharpe) sampled portfolio
- The Capital Allocation Line (CAL) through the risk-free rate
- The weights of a chosen portfolio
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from typing import Optional, Tuple, List

from sampled_frontier.core.evaluator import PortfolioRecord
from sampled_frontier.core.selector import CapitalAllocationLine
from sampled_frontier.core.simulation import ResultsTable


def plot_simulated_portfolios(
    results: ResultsTable,
    optimal: PortfolioRecord,
    cal: CapitalAllocationLine,
    show_cal: bool = True,
    show_assets: bool = True,
    min_risk: Optional[PortfolioRecord] = None,
    figsize: Tuple[int, int] = (12, 8),
    save_path: Optional[str] = None,
    title: str = "Simulated Portfolios and Capital Allocation Line"
) -> Figure:
    """
    Scatter every simulated portfolio with the CAL and the optimum marked.

    Args:
        results: ResultsTable from SimulationEngine.run
        optimal: Maximum-Sharpe record from select_optimal
        cal: Capital Allocation Line from select_optimal
        show_cal: If True, draw the CAL and the risk-free point
        show_assets: If True, plot individual assets (needs table statistics)
        min_risk: Optional lowest-risk record to highlight
        figsize: Figure size (width, height)
        save_path: If provided, save the figure to this path
        title: Plot title

    Returns:
        matplotlib Figure object
    """
    fig, ax = plt.subplots(figsize=figsize)

    risks = results.risks
    returns = results.returns
    sharpes = results.sharpe_ratios

    scatter = ax.scatter(risks * 100, returns * 100,
                         c=sharpes, cmap='viridis', s=12, alpha=0.7,
                         label='Simulated Portfolios', zorder=2)
    colorbar = fig.colorbar(scatter, ax=ax)
    colorbar.set_label('Sharpe Ratio', fontsize=11)

    max_risk = float(np.nanmax(risks)) if len(risks) else optimal.risk

    if show_assets and results.cov_matrix is not None:
        asset_stds = np.sqrt(np.diag(results.cov_matrix))
        asset_returns = np.asarray(results.expected_returns)
        max_risk = max(max_risk, float(asset_stds.max()))

        ax.scatter(asset_stds * 100, asset_returns * 100,
                   c='red', s=100, marker='o', edgecolors='black',
                   label='Individual Assets', zorder=5)

        for i, name in enumerate(results.asset_names):
            ax.annotate(name,
                        (asset_stds[i] * 100, asset_returns[i] * 100),
                        xytext=(5, 5), textcoords='offset points',
                        fontsize=9, fontweight='bold')

    if show_cal and np.isfinite(cal.slope):
        cal_stds, cal_returns = cal.points(max_risk * 1.1)
        ax.plot(cal_stds * 100, cal_returns * 100,
                'g--', linewidth=2, label='Capital Allocation Line (CAL)', zorder=3)

        ax.scatter([0], [cal.intercept * 100],
                   c='green', s=100, marker='s', edgecolors='black',
                   label=f'Risk-Free Rate ({cal.intercept*100:.2f}%)', zorder=4)

    if min_risk is not None:
        ax.scatter([min_risk.risk * 100], [min_risk.expected_return * 100],
                   c='purple', s=200, marker='*', edgecolors='black',
                   label=f"Min Risk (σ={min_risk.risk*100:.2f}%)", zorder=6)

    ax.scatter([optimal.risk * 100], [optimal.expected_return * 100],
               c='gold', s=250, marker='D', edgecolors='black',
               label=f"Optimal Portfolio (Sharpe={optimal.sharpe_ratio:.3f})",
               zorder=7)
    ax.annotate(f"σ={optimal.risk*100:.2f}%\nμ={optimal.expected_return*100:.2f}%",
                (optimal.risk * 100, optimal.expected_return * 100),
                xytext=(10, -25), textcoords='offset points',
                fontsize=9, arrowprops=dict(arrowstyle='->', color='gray'))

    ax.set_xlabel('Risk (Standard Deviation) %', fontsize=12)
    ax.set_ylabel('Expected Return %', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.legend(loc='upper left', fontsize=10)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_portfolio_weights(
    record: PortfolioRecord,
    asset_names: List[str],
    title: str = "Portfolio Weights",
    figsize: Tuple[int, int] = (10, 6),
    save_path: Optional[str] = None
) -> Figure:
    """
    Create a bar chart of portfolio weights.

    Args:
        record: Portfolio to draw
        asset_names: List of asset names
        title: Plot title
        figsize: Figure size
        save_path: Optional path to save figure

    Returns:
        matplotlib Figure object
    """
    fig, ax = plt.subplots(figsize=figsize)

    weights = np.array(record.weights)
    bars = ax.bar(asset_names, weights * 100, color='steelblue', edgecolor='black')

    for bar, w in zip(bars, weights):
        ax.annotate(f'{w*100:.1f}%',
                    xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                    xytext=(0, 3), textcoords='offset points',
                    ha='center', va='bottom',
                    fontsize=10, fontweight='bold')

    ax.set_xlabel('Assets', fontsize=12)
    ax.set_ylabel('Weight %', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.grid(True, axis='y', alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig
