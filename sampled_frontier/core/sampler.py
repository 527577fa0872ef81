"""
Random weight sampling for the portfolio simulation.

Each simulated portfolio draws one value per asset from uniform[1, 10)
and divides the row by its sum. The resulting weights are strictly
positive and sum to one. This is deliberately NOT a uniform draw over the
simplex: the [1, 10) floor keeps allocations away from the corners.

The generator is built from an explicit seed on every call, so the same
(seed, n_assets, n_portfolios) always reproduces the same ensemble.
"""

import numpy as np

from sampled_frontier.core.exceptions import InvalidDimensionError

LOW = 1.0
HIGH = 10.0
DEFAULT_MULTIPLIER = 100


def default_portfolio_count(n_assets: int, multiplier: int = DEFAULT_MULTIPLIER) -> int:
    """Number of portfolios to simulate: multiplier x number of assets."""
    if n_assets < 1:
        raise InvalidDimensionError(f"Asset count must be >= 1, got {n_assets}")
    if multiplier < 1:
        raise InvalidDimensionError(f"Portfolio multiplier must be >= 1, got {multiplier}")
    return multiplier * n_assets


def sample_weights(n_assets: int, n_portfolios: int, seed: int) -> np.ndarray:
    """
    Generate a seeded ensemble of long-only weight vectors.

    Args:
        n_assets: Number of assets (N)
        n_portfolios: Number of portfolios to simulate (M)
        seed: Seed for numpy's default generator

    Returns:
        Read-only array of shape (M, N); each row sums to 1

    Raises:
        InvalidDimensionError: if N < 1 or M < 1
    """
    if n_assets < 1:
        raise InvalidDimensionError(f"Asset count must be >= 1, got {n_assets}")
    if n_portfolios < 1:
        raise InvalidDimensionError(f"Portfolio count must be >= 1, got {n_portfolios}")

    rng = np.random.default_rng(seed)
    raw = rng.uniform(LOW, HIGH, size=(n_portfolios, n_assets))
    weights = raw / raw.sum(axis=1, keepdims=True)

    # Shared across evaluator threads
    weights.setflags(write=False)
    return weights
