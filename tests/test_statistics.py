import numpy as np
import pandas as pd
import pytest

from sampled_frontier.core.exceptions import InsufficientDataError
from sampled_frontier.core.statistics import asset_statistics, compute_return_statistics


def test_two_asset_means_and_covariance(two_asset_returns):
    means, cov = compute_return_statistics(two_asset_returns)

    np.testing.assert_allclose(means, [0.0125, 0.01], atol=1e-12)
    assert cov.shape == (2, 2)
    # Sample covariance (divisor 3) rounded to 8 decimals
    assert cov[0, 0] == pytest.approx(0.00029167, abs=1e-12)
    assert cov[1, 1] == pytest.approx(0.00006667, abs=1e-12)
    assert cov[0, 1] == pytest.approx(0.00006667, abs=1e-12)
    assert cov[0, 1] == cov[1, 0]


def test_rounding_precision(sample_frame):
    means, cov = compute_return_statistics(sample_frame)

    np.testing.assert_array_equal(means, np.round(means, 5))
    np.testing.assert_array_equal(cov, np.round(cov, 8))


def test_compute_is_bit_identical_on_repeat(sample_frame):
    means1, cov1 = compute_return_statistics(sample_frame)
    means2, cov2 = compute_return_statistics(sample_frame)

    assert np.array_equal(means1, means2)
    assert np.array_equal(cov1, cov2)


def test_dataframe_and_array_agree(sample_frame):
    from_frame = compute_return_statistics(sample_frame)
    from_array = compute_return_statistics(sample_frame.values)

    assert np.array_equal(from_frame[0], from_array[0])
    assert np.array_equal(from_frame[1], from_array[1])


def test_covariance_is_symmetric_psd(sample_frame):
    _, cov = compute_return_statistics(sample_frame)

    np.testing.assert_array_equal(cov, cov.T)
    assert np.all(np.linalg.eigvalsh(cov) > -1e-10)


def test_single_asset_covariance_is_1x1(single_asset_returns):
    means, cov = compute_return_statistics(single_asset_returns)

    assert means.shape == (1,)
    assert cov.shape == (1, 1)
    assert means[0] == pytest.approx(0.025)
    assert cov[0, 0] == pytest.approx(0.00016667, abs=1e-12)


def test_one_dimensional_input_is_single_asset():
    means, cov = compute_return_statistics(np.array([0.01, 0.03, 0.02, 0.04]))

    assert cov.shape == (1, 1)
    assert means[0] == pytest.approx(0.025)


def test_single_period_raises():
    with pytest.raises(InsufficientDataError, match="2 periods"):
        compute_return_statistics(np.array([[0.01, 0.02]]))


def test_no_assets_raises():
    with pytest.raises(InsufficientDataError, match="no assets"):
        compute_return_statistics(np.empty((5, 0)))


def test_missing_values_raise():
    returns = pd.DataFrame({"A": [0.01, np.nan, 0.02], "B": [0.0, 0.01, 0.02]})

    with pytest.raises(InsufficientDataError, match="period: 1"):
        compute_return_statistics(returns)


def test_insufficient_data_is_value_error():
    with pytest.raises(ValueError):
        compute_return_statistics(np.array([[0.01]]))


def test_asset_statistics(two_asset_returns):
    means, cov = compute_return_statistics(two_asset_returns)
    stats = asset_statistics(means, cov, ["A", "B"])

    assert list(stats) == ["A", "B"]
    assert stats["A"]["mean"] == pytest.approx(0.0125)
    assert stats["B"]["std"] == pytest.approx(np.sqrt(0.00006667))
    assert stats["A"]["variance"] == pytest.approx(0.00029167)
