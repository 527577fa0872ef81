"""
Return Statistics
=================

Derives the inputs of the portfolio simulation from historical returns:

- Mean vector: arithmetic mean of each asset's returns (5 decimals)
- Covariance matrix: sample covariance, divisor N-1 (8 decimals)

Rounding keeps downstream comparisons stable and the printed output
readable. Asset order of the input columns is preserved everywhere.
"""

import numpy as np
import pandas as pd
from typing import Tuple, List, Dict, Union

from sampled_frontier.core.exceptions import InsufficientDataError

MEAN_DECIMALS = 5
COV_DECIMALS = 8


def compute_return_statistics(
    returns: Union[np.ndarray, pd.DataFrame]
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute the mean vector and covariance matrix from a return matrix.

    Args:
        returns: 2D array of returns (rows = time periods, cols = assets).
            A 1D array is treated as a single asset.

    Returns:
        Tuple of (mean_vector, cov_matrix); cov_matrix is always N x N

    Raises:
        InsufficientDataError: fewer than 2 periods, no assets, or
            missing / infinite values in the matrix

    Example:
        >>> returns = np.array([[0.01, 0.00], [0.02, 0.01],
        ...                     [-0.01, 0.01], [0.03, 0.02]])
        >>> means, cov = compute_return_statistics(returns)
        >>> means
        array([0.0125, 0.01  ])
    """
    returns = np.asarray(returns, dtype=float)

    if returns.ndim == 1:
        returns = returns.reshape(-1, 1)
    if returns.ndim != 2:
        raise InsufficientDataError(
            f"Return matrix must be 2-dimensional, got {returns.ndim} dimensions"
        )

    n_periods, n_assets = returns.shape

    if n_assets < 1:
        raise InsufficientDataError("Return matrix has no assets")
    if n_periods < 2:
        raise InsufficientDataError(
            f"At least 2 periods are required for a covariance, got {n_periods}"
        )
    if not np.all(np.isfinite(returns)):
        bad_rows = np.where(~np.all(np.isfinite(returns), axis=1))[0]
        raise InsufficientDataError(
            f"Return matrix contains missing or infinite values "
            f"(first offending period: {bad_rows[0]})"
        )

    mean_vector = np.round(np.mean(returns, axis=0), MEAN_DECIMALS)

    # Sample covariance (N-1), columns are the variables
    cov_matrix = np.cov(returns, rowvar=False, ddof=1)
    cov_matrix = np.round(np.asarray(cov_matrix).reshape(n_assets, n_assets), COV_DECIMALS)

    return mean_vector, cov_matrix


def asset_statistics(
    mean_vector: np.ndarray,
    cov_matrix: np.ndarray,
    asset_names: List[str]
) -> Dict[str, Dict[str, float]]:
    """
    Get individual asset statistics.

    Returns:
        Dictionary mapping asset names to their mean, std and variance
    """
    stats = {}
    for i, name in enumerate(asset_names):
        stats[name] = {
            'mean': float(mean_vector[i]),
            'std': float(np.sqrt(cov_matrix[i, i])),
            'variance': float(cov_matrix[i, i])
        }
    return stats
