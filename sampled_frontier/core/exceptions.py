"""
Error taxonomy for the simulation pipeline.

Every failure aborts the run and reaches the caller unchanged. Each class
also derives from the closest builtin so callers that only know about
ValueError / ArithmeticError still catch it.
"""


class SimulationError(Exception):
    """Base class for all sampled-frontier errors."""


class InsufficientDataError(SimulationError, ValueError):
    """Return matrix has too few periods or assets, or holds missing values."""


class InvalidDimensionError(SimulationError, ValueError):
    """Sampler asked for fewer than one asset or portfolio."""


class DimensionMismatchError(SimulationError, ValueError):
    """Weights, means and covariance disagree on the number of assets."""


class NumericalError(SimulationError, ArithmeticError):
    """Quadratic form w^T * Sigma * w came out negative (malformed covariance)."""


class DivisionByZeroError(SimulationError, ZeroDivisionError):
    """Sharpe ratio requested for a zero-risk portfolio."""


class EmptyResultsError(SimulationError, ValueError):
    """No selectable record in a results table."""
