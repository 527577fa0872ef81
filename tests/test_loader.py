import numpy as np
import pandas as pd
import pytest

from sampled_frontier.core.loader import (
    ReturnDataLoader,
    drop_incomplete_periods,
    generate_sample_returns,
    prices_to_returns,
)


@pytest.fixture
def returns_csv(tmp_path):
    df = pd.DataFrame({
        "Date": ["2024-01-31", "2024-02-29", "2024-03-31", "2024-04-30"],
        "AAPL": [0.01, 0.02, -0.01, 0.03],
        "MSFT": [0.00, 0.01, 0.01, 0.02],
        "IBM": [0.02, None, 0.00, 0.01],
    })
    path = tmp_path / "returns.csv"
    df.to_csv(path, index=False)
    return path


@pytest.fixture
def prices_frame():
    return pd.DataFrame({"A": [100.0, 110.0, 99.0], "B": [50.0, 50.0, 55.0]})


def test_load_csv_drops_incomplete_periods(returns_csv):
    with pytest.warns(UserWarning, match="Dropped 1 period"):
        returns = ReturnDataLoader().load_returns_csv(str(returns_csv))

    assert list(returns.columns) == ["AAPL", "MSFT", "IBM"]
    assert len(returns) == 3
    assert returns.index.name == "Date"
    assert not returns.isna().any().any()


def test_load_csv_without_header(tmp_path):
    path = tmp_path / "raw.csv"
    path.write_text("0.01,0.02\n0.03,0.04\n0.05,0.06\n")

    returns = ReturnDataLoader().load_returns_csv(str(path), has_header=False, has_date_column=False)

    assert list(returns.columns) == ["Asset_1", "Asset_2"]
    assert returns.shape == (3, 2)


def test_load_excel_prices(tmp_path, prices_frame):
    path = tmp_path / "prices.xlsx"
    frame = prices_frame.copy()
    frame.insert(0, "Date", pd.date_range("2024-01-31", periods=3, freq="ME"))
    frame.to_excel(path, index=False)

    returns = ReturnDataLoader(is_prices=True).load_returns_excel(str(path))

    assert returns.shape == (2, 2)
    np.testing.assert_allclose(returns["A"].values, [0.1, -0.1])
    np.testing.assert_allclose(returns["B"].values, [0.0, 0.1])


def test_non_numeric_column_dropped(tmp_path):
    path = tmp_path / "mixed.csv"
    pd.DataFrame({
        "Date": ["d1", "d2", "d3"],
        "A": [0.01, 0.02, 0.03],
        "Note": ["x", "y", "z"],
    }).to_csv(path, index=False)

    with pytest.warns(UserWarning, match="non-numeric"):
        returns = ReturnDataLoader().load_returns_csv(str(path))

    assert list(returns.columns) == ["A"]


def test_simple_returns(prices_frame):
    returns = prices_to_returns(prices_frame, "simple")

    np.testing.assert_allclose(returns.values, [[0.1, 0.0], [-0.1, 0.1]])


def test_log_returns(prices_frame):
    returns = prices_to_returns(prices_frame, "log")

    np.testing.assert_allclose(returns["A"].values, np.log([1.1, 0.9]))


def test_unknown_return_method(prices_frame):
    with pytest.raises(ValueError):
        prices_to_returns(prices_frame, "arithmetic")
    with pytest.raises(ValueError):
        ReturnDataLoader(return_method="arithmetic")


def test_drop_incomplete_periods_handles_inf():
    frame = pd.DataFrame({"A": [0.01, np.inf, 0.02], "B": [0.0, 0.01, 0.02]})

    with pytest.warns(UserWarning):
        clean = drop_incomplete_periods(frame)

    assert len(clean) == 2


def test_select_assets_keeps_requested_order(sample_frame):
    selected = ReturnDataLoader().select_assets(sample_frame, ["CAT", "AAPL"])

    assert list(selected.columns) == ["CAT", "AAPL"]


def test_select_unknown_asset(sample_frame):
    with pytest.raises(KeyError, match="MSFT"):
        ReturnDataLoader().select_assets(sample_frame, ["AAPL", "MSFT"])


def test_validate_returns():
    loader = ReturnDataLoader()

    ok = loader.validate_returns(pd.DataFrame({"A": [0.01, 0.02], "B": [0.01, 0.01]}))
    assert ok["is_valid"]
    assert any("B" in w for w in ok["warnings"])

    short = loader.validate_returns(pd.DataFrame({"A": [0.01]}))
    assert not short["is_valid"]

    missing = loader.validate_returns(pd.DataFrame({"A": [0.01, np.nan, 0.02]}))
    assert not missing["is_valid"]


def test_generate_sample_returns_is_seeded():
    first = generate_sample_returns(6, 24, seed=3)
    second = generate_sample_returns(6, 24, seed=3)

    assert first.shape == (24, 6)
    assert list(first.columns) == ["AAPL", "AXP", "BA", "CAT", "CSCO", "CVX"]
    pd.testing.assert_frame_equal(first, second)
    assert list(generate_sample_returns(3, 5).columns) == ["Stock_1", "Stock_2", "Stock_3"]
