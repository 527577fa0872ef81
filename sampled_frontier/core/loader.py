"""
Return Data Loader
==================

This module turns files into the clean return matrix the simulation
consumes (rows = periods, columns = assets, no missing values):

- CSV files of returns or prices
- Excel files of returns or prices (read through openpyxl)
- Synthetic sample data for demonstrations

Price data is converted to periodic returns, either simple
(P_t / P_{t-1} - 1) or log (ln(P_t / P_{t-1})). Periods with a missing
value in any asset are dropped so every asset shares the same dates.
"""

import warnings
from typing import List, Optional, Dict, Any

import numpy as np
import pandas as pd


class ReturnDataLoader:
    """
    A class for loading return matrices from various sources.

    Example:
        >>> loader = ReturnDataLoader()
        >>> returns = loader.load_returns_csv("returns.csv")
        >>> returns = loader.select_assets(returns, ["AAPL", "MSFT"])
    """

    def __init__(self, is_prices: bool = False, return_method: str = 'simple'):
        """
        Initialize the loader.

        Args:
            is_prices: If True, files hold prices and are converted to returns
            return_method: 'simple' or 'log' (used when is_prices is True)
        """
        if return_method not in ('simple', 'log'):
            raise ValueError(f"Unknown return method: {return_method}. Use 'simple' or 'log'")
        self.is_prices = is_prices
        self.return_method = return_method

    def load_returns_csv(
        self,
        file_path: str,
        has_header: bool = True,
        has_date_column: bool = True
    ) -> pd.DataFrame:
        """
        Load a return matrix from a CSV file.

        Args:
            file_path: Path to CSV file
            has_header: If True, first row contains asset names
            has_date_column: If True, first column is the date index

        Returns:
            DataFrame of returns (rows = periods, cols = assets)
        """
        if has_header:
            df = pd.read_csv(file_path)
        else:
            df = pd.read_csv(file_path, header=None)

        return self._prepare(df, has_header, has_date_column)

    def load_returns_excel(
        self,
        file_path: str,
        sheet_name=0,
        has_header: bool = True,
        has_date_column: bool = True
    ) -> pd.DataFrame:
        """
        Load a return matrix from an Excel sheet.

        Args:
            file_path: Path to the Excel file
            sheet_name: Sheet name or index (default: first sheet)
            has_header: If True, first row contains asset names
            has_date_column: If True, first column is the date index

        Returns:
            DataFrame of returns (rows = periods, cols = assets)
        """
        header = 0 if has_header else None
        df = pd.read_excel(file_path, sheet_name=sheet_name, header=header)

        return self._prepare(df, has_header, has_date_column)

    def _prepare(self, df: pd.DataFrame, has_header: bool, has_date_column: bool) -> pd.DataFrame:
        if has_date_column:
            df = df.set_index(df.columns[0])
            df.index.name = 'Date'

        if not has_header:
            df.columns = [f"Asset_{i+1}" for i in range(df.shape[1])]

        # Drop any columns that contain non-numeric data
        columns_to_drop = []
        for col in df.columns:
            try:
                pd.to_numeric(df[col], errors='raise')
            except (ValueError, TypeError):
                columns_to_drop.append(col)

        if columns_to_drop:
            warnings.warn(f"Dropping non-numeric columns: {columns_to_drop}")
            df = df.drop(columns=columns_to_drop)

        df = df.apply(pd.to_numeric, errors='coerce').astype(float)
        df.columns = [str(c).strip() for c in df.columns]

        if self.is_prices:
            df = prices_to_returns(df, self.return_method)

        return drop_incomplete_periods(df)

    def select_assets(self, returns: pd.DataFrame, tickers: List[str]) -> pd.DataFrame:
        """
        Keep only the given assets, in the given order.

        Raises:
            KeyError: if a ticker is not a column of the return matrix
        """
        missing = [t for t in tickers if t not in returns.columns]
        if missing:
            raise KeyError(
                f"Assets not found in data: {missing}. "
                f"Available: {list(returns.columns)}"
            )
        return returns[list(tickers)]

    def validate_returns(self, returns: pd.DataFrame) -> Dict[str, Any]:
        """
        Validate a return matrix and return diagnostics.

        Checks:
        - At least 2 periods and 1 asset
        - No NaN or Inf values
        - No constant (zero-variance) assets

        Returns:
            Dictionary with validation results
        """
        values = returns.values.astype(float)
        results = {
            'is_valid': True,
            'warnings': [],
            'errors': [],
            'n_periods': values.shape[0],
            'n_assets': values.shape[1] if values.ndim == 2 else 1,
            'asset_names': list(returns.columns)
        }

        if results['n_assets'] < 1:
            results['errors'].append("Return matrix has no assets")
            results['is_valid'] = False

        if results['n_periods'] < 2:
            results['errors'].append(
                f"At least 2 periods are required, got {results['n_periods']}"
            )
            results['is_valid'] = False

        if np.any(~np.isfinite(values)):
            results['errors'].append("Return matrix contains NaN or Inf")
            results['is_valid'] = False

        if results['is_valid']:
            stds = values.std(axis=0)
            for name, std in zip(returns.columns, stds):
                if std == 0:
                    results['warnings'].append(
                        f"Asset {name} has constant returns (zero variance)"
                    )

        return results


def prices_to_returns(prices: pd.DataFrame, method: str = 'simple') -> pd.DataFrame:
    """
    Convert a price table to periodic returns.

    Args:
        prices: DataFrame of prices (rows = periods, cols = assets)
        method: 'simple' for P_t/P_{t-1} - 1, 'log' for ln(P_t/P_{t-1})

    Returns:
        DataFrame of returns, one row shorter than the prices
    """
    if method == 'simple':
        returns = prices / prices.shift(1) - 1
    elif method == 'log':
        returns = np.log(prices / prices.shift(1))
    else:
        raise ValueError(f"Unknown return method: {method}. Use 'simple' or 'log'")

    return returns.iloc[1:]


def drop_incomplete_periods(returns: pd.DataFrame) -> pd.DataFrame:
    """Remove periods where any asset is missing, warning about the count."""
    values = returns.replace([np.inf, -np.inf], np.nan)
    complete = values.dropna(how='any')
    dropped = len(values) - len(complete)
    if dropped:
        warnings.warn(f"Dropped {dropped} period(s) with missing values")
    return complete


def generate_sample_returns(
    n_assets: int = 4,
    n_periods: int = 60,
    seed: int = 42
) -> pd.DataFrame:
    """
    Generate a synthetic monthly return matrix for demonstrations.

    Returns are drawn from a multivariate normal with realistic monthly
    means (1% to 2.5%) and a random positive definite covariance.

    Args:
        n_assets: Number of assets (default: 4)
        n_periods: Number of monthly periods (default: 60)
        seed: Random seed for reproducibility

    Returns:
        DataFrame of returns indexed by month-end dates
    """
    rng = np.random.default_rng(seed)

    means = np.linspace(0.01, 0.025, n_assets)

    # Random matrix times its transpose is positive semi-definite
    A = rng.standard_normal((n_assets, n_assets)) * 0.03
    cov_matrix = np.dot(A, A.T) + np.eye(n_assets) * 0.002
    cov_matrix = cov_matrix / np.max(cov_matrix) * 0.006

    if n_assets == 4:
        asset_names = ['AAPL', 'AXP', 'BA', 'CAT']
    elif n_assets == 6:
        asset_names = ['AAPL', 'AXP', 'BA', 'CAT', 'CSCO', 'CVX']
    else:
        asset_names = [f'Stock_{i+1}' for i in range(n_assets)]

    data = rng.multivariate_normal(means, cov_matrix, size=n_periods)
    dates = pd.date_range('2019-01-31', periods=n_periods, freq='ME')

    return pd.DataFrame(data, index=pd.Index(dates, name='Date'), columns=asset_names)
