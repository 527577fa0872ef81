# tests/conftest.py
import logging

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from sampled_frontier.core.loader import generate_sample_returns


@pytest.fixture
def two_asset_returns() -> np.ndarray:
    """A = [0.01, 0.02, -0.01, 0.03], B = [0.00, 0.01, 0.01, 0.02]."""
    return np.array([
        [0.01, 0.00],
        [0.02, 0.01],
        [-0.01, 0.01],
        [0.03, 0.02],
    ])


@pytest.fixture
def single_asset_returns() -> np.ndarray:
    return np.array([[0.01], [0.03], [0.02], [0.04]])


@pytest.fixture
def constant_returns() -> np.ndarray:
    return np.array([[0.01], [0.01], [0.01]])


@pytest.fixture
def sample_frame() -> pd.DataFrame:
    return generate_sample_returns(n_assets=4, n_periods=60, seed=1)


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("sampled_frontier")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
