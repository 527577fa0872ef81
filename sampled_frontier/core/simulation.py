"""
Simulation Engine
=================

Runs the random-portfolio scan:

1. Compute mean vector and covariance matrix once
2. Sample all M weight vectors once from the seed
3. Evaluate every weight vector, keeping the sampled order

The scan only finds the best portfolio among the sampled candidates; it is
not a solver for the true tangency portfolio.

Evaluation is O(M * N^2). With workers > 1 contiguous chunks of the
ensemble are evaluated on a thread pool, each chunk writing into its own
pre-indexed slots, so the table is identical to the sequential one.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from sampled_frontier.core.evaluator import PortfolioEvaluator, PortfolioRecord
from sampled_frontier.core.sampler import (
    DEFAULT_MULTIPLIER,
    default_portfolio_count,
    sample_weights,
)
from sampled_frontier.core.statistics import compute_return_statistics

logger = logging.getLogger(__name__)

DEFAULT_SEED = 12


class ResultsTable:
    """
    Ordered, read-only collection of simulated portfolios.

    Attributes:
        records (tuple): PortfolioRecord per simulated portfolio, in sampled order
        asset_names (List[str]): Asset labels, same order as the weights
        expected_returns (np.ndarray): Mean vector the portfolios were evaluated with
        cov_matrix (np.ndarray): Covariance matrix the portfolios were evaluated with
        rf_rate (float): Risk-free rate used for the Sharpe ratios
        seed (int): Seed the weights were sampled from
    """

    def __init__(
        self,
        records: Sequence[PortfolioRecord],
        asset_names: List[str],
        expected_returns: Optional[np.ndarray] = None,
        cov_matrix: Optional[np.ndarray] = None,
        rf_rate: float = 0.0,
        seed: Optional[int] = None
    ):
        self.records = tuple(records)
        self.asset_names = list(asset_names)
        self.expected_returns = expected_returns
        self.cov_matrix = cov_matrix
        self.rf_rate = rf_rate
        self.seed = seed

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __getitem__(self, index: int) -> PortfolioRecord:
        return self.records[index]

    @property
    def n_assets(self) -> int:
        return len(self.asset_names)

    @property
    def weights(self) -> np.ndarray:
        return np.array([r.weights for r in self.records], dtype=float).reshape(-1, self.n_assets)

    @property
    def returns(self) -> np.ndarray:
        return np.array([r.expected_return for r in self.records], dtype=float)

    @property
    def risks(self) -> np.ndarray:
        return np.array([r.risk for r in self.records], dtype=float)

    @property
    def sharpe_ratios(self) -> np.ndarray:
        return np.array([r.sharpe_ratio for r in self.records], dtype=float)

    def to_frame(self) -> pd.DataFrame:
        """One row per portfolio: asset weights, then Return, Risk, Sharpe."""
        columns = self.asset_names + ['Return', 'Risk', 'Sharpe']
        rows = [r.as_dict(self.asset_names) for r in self.records]
        return pd.DataFrame(rows, columns=columns)


class SimulationEngine:
    """
    Orchestrates statistics, weight sampling and portfolio evaluation.

    Args:
        workers: Number of evaluator threads (1 = sequential)
        portfolio_multiplier: Portfolios per asset when no count is given
        zero_risk_policy: Passed to PortfolioEvaluator ('raise', 'nan', 'inf')

    Example:
        >>> engine = SimulationEngine()
        >>> table = engine.run(returns, risk_free_rate=0.0, seed=12)
        >>> len(table) == 100 * returns.shape[1]
        True
    """

    def __init__(
        self,
        workers: int = 1,
        portfolio_multiplier: int = DEFAULT_MULTIPLIER,
        zero_risk_policy: str = 'raise'
    ):
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.workers = workers
        self.portfolio_multiplier = portfolio_multiplier
        self.zero_risk_policy = zero_risk_policy

    def run(
        self,
        returns: Union[np.ndarray, pd.DataFrame],
        risk_free_rate: float = 0.0,
        seed: int = DEFAULT_SEED,
        portfolio_count: Optional[int] = None,
        asset_names: Optional[List[str]] = None
    ) -> ResultsTable:
        """
        Simulate the portfolio ensemble for a return matrix.

        Args:
            returns: Return matrix (rows = periods, cols = assets)
            risk_free_rate: Risk-free rate per period
            seed: Seed for the weight sampler
            portfolio_count: Number of portfolios (default: multiplier x N)
            asset_names: Asset labels (default: DataFrame columns or Asset_i)

        Returns:
            ResultsTable with exactly portfolio_count records

        Raises:
            SimulationError: on the first invalid input or failed evaluation
            (any other exception from an evaluator thread is re-raised as is)
        """
        if asset_names is None and isinstance(returns, pd.DataFrame):
            asset_names = [str(c) for c in returns.columns]

        expected_returns, cov_matrix = compute_return_statistics(returns)
        n_assets = len(expected_returns)

        if asset_names is None:
            asset_names = [f"Asset_{i+1}" for i in range(n_assets)]
        elif len(asset_names) != n_assets:
            raise ValueError(
                f"Got {len(asset_names)} asset names for {n_assets} return columns"
            )

        if portfolio_count is None:
            portfolio_count = default_portfolio_count(n_assets, self.portfolio_multiplier)

        weights = sample_weights(n_assets, portfolio_count, seed)
        evaluator = PortfolioEvaluator(
            expected_returns, cov_matrix, risk_free_rate, self.zero_risk_policy
        )

        logger.info(
            f"Simulating {portfolio_count} portfolios over {n_assets} assets "
            f"(seed={seed}, workers={self.workers})"
        )

        if self.workers == 1 or portfolio_count == 1:
            records = [evaluator.evaluate(w, index=i) for i, w in enumerate(weights)]
        else:
            records = self._run_parallel(evaluator, weights)

        return ResultsTable(
            records,
            asset_names,
            expected_returns=expected_returns,
            cov_matrix=cov_matrix,
            rf_rate=risk_free_rate,
            seed=seed
        )

    def _run_parallel(
        self,
        evaluator: PortfolioEvaluator,
        weights: np.ndarray
    ) -> List[PortfolioRecord]:
        n_portfolios = len(weights)
        workers = min(self.workers, n_portfolios)
        bounds = np.linspace(0, n_portfolios, workers + 1).astype(int)

        slots: List[Optional[PortfolioRecord]] = [None] * n_portfolios

        def evaluate_chunk(start: int, stop: int):
            for i in range(start, stop):
                slots[i] = evaluator.evaluate(weights[i], index=i)

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(evaluate_chunk, int(start), int(stop))
                for start, stop in zip(bounds[:-1], bounds[1:])
            ]
            try:
                # Submission order, so the lowest failing chunk is reported
                for future in futures:
                    future.result()
            except Exception:
                for future in futures:
                    future.cancel()
                raise

        return slots
