"""
Simulation configuration.

Stores all user-configurable assumptions of a simulation run:

1. RISK-FREE RATE: per-period rate in the same unit as the returns (default 0)
2. TICKERS: ordered asset identifiers; selects and orders the return columns
3. SEED: seed of the weight sampler (default 12), fixes the ensemble
4. PORTFOLIO COUNT: multiplier x number of assets (default 100 x N),
   or an explicit count that overrides the multiplier
5. WORKERS: evaluator threads (1 = sequential, same results either way)
6. ZERO-RISK POLICY: 'raise', 'nan' or 'inf' for Sharpe ratios of
   zero-risk portfolios
"""

from dataclasses import dataclass
from typing import List, Optional

from sampled_frontier.core.evaluator import ZERO_RISK_POLICIES
from sampled_frontier.core.sampler import DEFAULT_MULTIPLIER, default_portfolio_count
from sampled_frontier.core.simulation import DEFAULT_SEED


@dataclass
class SimulationConfig:
    """
    Stores all configurable assumptions for a simulation run.

    Attributes:
        risk_free_rate: Per-period risk-free rate (decimal)
        tickers: Ordered asset identifiers, or None for every column
        seed: Seed for the weight sampler
        portfolio_multiplier: Portfolios simulated per asset
        portfolio_count: Explicit portfolio count (overrides the multiplier)
        workers: Number of evaluator threads
        zero_risk_policy: 'raise', 'nan' or 'inf'
    """

    risk_free_rate: float = 0.0
    tickers: Optional[List[str]] = None
    seed: int = DEFAULT_SEED
    portfolio_multiplier: int = DEFAULT_MULTIPLIER
    portfolio_count: Optional[int] = None
    workers: int = 1
    zero_risk_policy: str = 'raise'

    def __post_init__(self):
        if self.portfolio_multiplier < 1:
            raise ValueError(f"portfolio_multiplier must be >= 1, got {self.portfolio_multiplier}")
        if self.portfolio_count is not None and self.portfolio_count < 1:
            raise ValueError(f"portfolio_count must be >= 1, got {self.portfolio_count}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.zero_risk_policy not in ZERO_RISK_POLICIES:
            raise ValueError(
                f"Unknown zero-risk policy: {self.zero_risk_policy}. "
                f"Use one of {', '.join(ZERO_RISK_POLICIES)}"
            )
        if self.tickers is not None:
            self.tickers = [t.strip() for t in self.tickers if t.strip()]
            if len(set(self.tickers)) != len(self.tickers):
                raise ValueError(f"Duplicate tickers: {self.tickers}")

    def resolve_portfolio_count(self, n_assets: int) -> int:
        """Explicit count if set, else multiplier x number of assets."""
        if self.portfolio_count is not None:
            return self.portfolio_count
        return default_portfolio_count(n_assets, self.portfolio_multiplier)

    def describe(self) -> List[str]:
        """Human-readable summary lines for logs and reports."""
        if self.portfolio_count is not None:
            count = f"{self.portfolio_count} (fixed)"
        else:
            count = f"{self.portfolio_multiplier} x number of assets"
        return [
            f"Risk-free rate: {self.risk_free_rate:.4f} ({self.risk_free_rate*100:.2f}%)",
            f"Tickers: {', '.join(self.tickers) if self.tickers else 'all columns'}",
            f"Seed: {self.seed}",
            f"Portfolios: {count}",
            f"Workers: {self.workers}",
            f"Zero-risk policy: {self.zero_risk_policy}",
        ]
