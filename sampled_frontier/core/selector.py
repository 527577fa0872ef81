"""
Optimal portfolio selection and the Capital Allocation Line.

The optimal portfolio is the sampled record with the highest Sharpe ratio;
the first record in table order wins ties and NaN ratios are never chosen.

The Capital Allocation Line (CAL) joins the risk-free point (0, rf) to that
portfolio:

    E[r] = rf + Sharpe_opt * sigma
"""

import math
from dataclasses import dataclass
from typing import Tuple, Optional

import numpy as np

from sampled_frontier.core.evaluator import PortfolioRecord
from sampled_frontier.core.exceptions import EmptyResultsError


@dataclass(frozen=True)
class CapitalAllocationLine:
    """Line through (0, rf) with slope equal to the optimal Sharpe ratio."""

    intercept: float
    slope: float

    def expected_return(self, risk: float) -> float:
        return self.intercept + self.slope * risk

    def points(self, max_risk: float, n_points: int = 100) -> Tuple[np.ndarray, np.ndarray]:
        """
        Coordinates of the line for plotting.

        Args:
            max_risk: Largest standard deviation to draw the line to
            n_points: Number of points on the line

        Returns:
            Tuple of (stds, returns)
        """
        stds = np.linspace(0, max_risk, n_points)
        returns = self.intercept + self.slope * stds
        return stds, returns


def select_optimal(
    results,
    risk_free_rate: Optional[float] = None
) -> Tuple[PortfolioRecord, CapitalAllocationLine]:
    """
    Pick the maximum-Sharpe portfolio and derive the CAL.

    Args:
        results: ResultsTable (or any sequence of PortfolioRecord)
        risk_free_rate: Intercept of the CAL (default: the rate the table
            was evaluated with, or 0 for a plain sequence)

    Returns:
        Tuple of (optimal_record, capital_allocation_line)

    Raises:
        EmptyResultsError: no records, or none with a comparable Sharpe ratio
    """
    if len(results) == 0:
        raise EmptyResultsError("Cannot select an optimal portfolio from an empty results table")

    best: Optional[PortfolioRecord] = None
    for record in results:
        if math.isnan(record.sharpe_ratio):
            continue
        # Strict comparison: earlier records win ties
        if best is None or record.sharpe_ratio > best.sharpe_ratio:
            best = record

    if best is None:
        raise EmptyResultsError(
            f"None of the {len(results)} portfolios has a defined Sharpe ratio"
        )

    if risk_free_rate is None:
        risk_free_rate = getattr(results, "rf_rate", 0.0)

    cal = CapitalAllocationLine(intercept=risk_free_rate, slope=best.sharpe_ratio)
    return best, cal


def select_minimum_risk(results) -> PortfolioRecord:
    """Lowest-risk sampled portfolio; the first record wins ties."""
    if len(results) == 0:
        raise EmptyResultsError("Cannot select a portfolio from an empty results table")

    best = None
    for record in results:
        if best is None or record.risk < best.risk:
            best = record
    return best
