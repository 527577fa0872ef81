"""
Portfolio Evaluator
===================

Computes the risk/return profile of a single weight vector:

    mu_p    = w^T * mu                  (expected return)
    sigma_p = sqrt(w^T * Sigma * w)     (risk)
    Sharpe  = (mu_p - rf) / sigma_p

Zero-risk policy
----------------
A portfolio with sigma_p == 0 has no defined Sharpe ratio. The evaluator
applies one of three explicit policies instead of letting the platform
produce an infinity:

- "raise" (default): raise DivisionByZeroError
- "nan": record the Sharpe ratio as NaN (never selected as optimal)
- "inf": +inf / -inf by the sign of the excess return, NaN if it is zero

The covariance matrix is rounded to COV_DECIMALS, which can push a
singular (hedged) matrix slightly indefinite. A negative w^T * Sigma * w
within the rounding bound 0.5e-8 * (sum |w|)^2 is treated as zero risk;
anything below it is a malformed covariance.
"""

import math
from dataclasses import dataclass
from typing import Tuple, List, Optional, Dict

import numpy as np

from sampled_frontier.core.exceptions import (
    DimensionMismatchError,
    DivisionByZeroError,
    NumericalError,
)
from sampled_frontier.core.statistics import COV_DECIMALS

ZERO_RISK_POLICIES = ('raise', 'nan', 'inf')

# Floating-point noise allowed below zero in w^T * Sigma * w
NEGATIVE_VARIANCE_TOL = 1e-12


def variance_tolerance(weights: np.ndarray) -> float:
    """Largest |w^T * D * w| for entrywise covariance rounding errors D."""
    rounding = 0.5 * 10.0 ** -COV_DECIMALS
    return rounding * float(np.abs(weights).sum()) ** 2 + NEGATIVE_VARIANCE_TOL


@dataclass(frozen=True)
class PortfolioRecord:
    """One simulated portfolio: its weights and resulting statistics."""

    weights: Tuple[float, ...]
    expected_return: float
    risk: float
    sharpe_ratio: float

    def as_dict(self, asset_names: Optional[List[str]] = None) -> Dict[str, float]:
        """Flatten into {asset: weight, ..., 'Return', 'Risk', 'Sharpe'}."""
        if asset_names is None:
            asset_names = [f"Asset_{i+1}" for i in range(len(self.weights))]
        row = {name: w for name, w in zip(asset_names, self.weights)}
        row['Return'] = self.expected_return
        row['Risk'] = self.risk
        row['Sharpe'] = self.sharpe_ratio
        return row


class PortfolioEvaluator:
    """
    Evaluates weight vectors against fixed asset statistics.

    The mean vector and covariance matrix are validated once and then only
    read, so a single evaluator can be shared by several worker threads.

    Attributes:
        expected_returns (np.ndarray): Mean return of each asset
        cov_matrix (np.ndarray): Covariance matrix of asset returns
        n_assets (int): Number of assets
        rf_rate (float): Risk-free rate
        zero_risk_policy (str): 'raise', 'nan' or 'inf'

    Example:
        >>> evaluator = PortfolioEvaluator([0.0125, 0.01],
        ...                                [[0.000292, 0.0001], [0.0001, 0.000067]])
        >>> record = evaluator.evaluate([0.5, 0.5])
    """

    def __init__(
        self,
        expected_returns: np.ndarray,
        cov_matrix: np.ndarray,
        rf_rate: float = 0.0,
        zero_risk_policy: str = 'raise'
    ):
        self.expected_returns = np.asarray(expected_returns, dtype=float).flatten()
        self.cov_matrix = np.asarray(cov_matrix, dtype=float)
        self.n_assets = len(self.expected_returns)
        self.rf_rate = float(rf_rate)

        if zero_risk_policy not in ZERO_RISK_POLICIES:
            raise ValueError(
                f"Unknown zero-risk policy: {zero_risk_policy}. "
                f"Use one of {', '.join(ZERO_RISK_POLICIES)}"
            )
        self.zero_risk_policy = zero_risk_policy

        if self.cov_matrix.shape != (self.n_assets, self.n_assets):
            raise DimensionMismatchError(
                f"Covariance matrix shape {self.cov_matrix.shape} doesn't match "
                f"number of assets {self.n_assets}"
            )

    def portfolio_return(self, weights: np.ndarray) -> float:
        """Expected return: w^T * mu."""
        return float(np.dot(weights, self.expected_returns))

    def portfolio_variance(self, weights: np.ndarray) -> float:
        """Variance via the quadratic form w^T * Sigma * w."""
        return float(np.dot(weights, np.dot(self.cov_matrix, weights)))

    def evaluate(self, weights, index: Optional[int] = None) -> PortfolioRecord:
        """
        Evaluate one weight vector.

        Args:
            weights: Portfolio weights, one per asset
            index: Position of the portfolio in the ensemble (for error messages)

        Returns:
            PortfolioRecord with return, risk and Sharpe ratio

        Raises:
            DimensionMismatchError: weights length differs from asset count
            NumericalError: variance is negative beyond rounding tolerance
            DivisionByZeroError: zero risk under the 'raise' policy
        """
        weights = np.asarray(weights, dtype=float).flatten()
        where = "" if index is None else f" (portfolio {index})"

        if len(weights) != self.n_assets:
            raise DimensionMismatchError(
                f"Weight vector has {len(weights)} entries but there are "
                f"{self.n_assets} assets{where}"
            )

        ret = self.portfolio_return(weights)
        var = self.portfolio_variance(weights)

        if var < 0:
            if var < -variance_tolerance(weights):
                raise NumericalError(
                    f"Negative portfolio variance {var:.6e}{where}; "
                    f"covariance matrix is not positive semi-definite"
                )
            var = 0.0

        std = math.sqrt(var)
        sharpe = self._sharpe(ret, std, where)

        return PortfolioRecord(
            weights=tuple(float(w) for w in weights),
            expected_return=ret,
            risk=std,
            sharpe_ratio=sharpe
        )

    def _sharpe(self, ret: float, std: float, where: str = "") -> float:
        excess = ret - self.rf_rate
        if std > 0:
            return excess / std

        if self.zero_risk_policy == 'raise':
            raise DivisionByZeroError(f"Sharpe ratio undefined for zero-risk portfolio{where}")
        if self.zero_risk_policy == 'inf' and excess != 0:
            return math.copysign(math.inf, excess)
        return math.nan


def evaluate_portfolio(
    weights: np.ndarray,
    expected_returns: np.ndarray,
    cov_matrix: np.ndarray,
    rf_rate: float = 0.0,
    zero_risk_policy: str = 'raise'
) -> PortfolioRecord:
    """Evaluate a single portfolio without keeping an evaluator around."""
    evaluator = PortfolioEvaluator(expected_returns, cov_matrix, rf_rate, zero_risk_policy)
    return evaluator.evaluate(weights)
