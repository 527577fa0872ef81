import math

import numpy as np
import pytest

from sampled_frontier.core.evaluator import PortfolioRecord
from sampled_frontier.core.exceptions import EmptyResultsError
from sampled_frontier.core.selector import (
    CapitalAllocationLine,
    select_minimum_risk,
    select_optimal,
)
from sampled_frontier.core.simulation import ResultsTable, SimulationEngine


def make_record(sharpe, risk=0.1, ret=0.01):
    return PortfolioRecord(weights=(0.5, 0.5), expected_return=ret, risk=risk, sharpe_ratio=sharpe)


def test_picks_maximum_sharpe(sample_frame):
    table = SimulationEngine().run(sample_frame, risk_free_rate=0.001, portfolio_count=300)
    optimal, _ = select_optimal(table, 0.001)

    assert optimal.sharpe_ratio == table.sharpe_ratios.max()
    assert all(optimal.sharpe_ratio >= r.sharpe_ratio for r in table)


def test_first_record_wins_ties():
    first = make_record(1.5, risk=0.2)
    second = make_record(1.5, risk=0.3)
    table = ResultsTable([make_record(0.5), first, second], ["A", "B"])

    optimal, _ = select_optimal(table)

    assert optimal is first


def test_cal_parameters():
    table = ResultsTable([make_record(0.8), make_record(1.2)], ["A", "B"])
    optimal, cal = select_optimal(table, risk_free_rate=0.003)

    assert cal.intercept == 0.003
    assert cal.slope == optimal.sharpe_ratio == 1.2


def test_cal_defaults_to_table_rate(sample_frame):
    table = SimulationEngine().run(sample_frame, risk_free_rate=0.02, portfolio_count=50)
    optimal, cal = select_optimal(table)

    assert cal.intercept == 0.02
    assert cal.expected_return(optimal.risk) == pytest.approx(optimal.expected_return)

    _, plain_cal = select_optimal(list(table))
    assert plain_cal.intercept == 0.0


def test_single_record_is_optimal():
    only = make_record(-0.4)
    optimal, cal = select_optimal(ResultsTable([only], ["A", "B"]))

    assert optimal is only
    assert cal.slope == -0.4


def test_empty_table_raises():
    with pytest.raises(EmptyResultsError):
        select_optimal(ResultsTable([], ["A"]))


def test_nan_sharpe_never_selected():
    best = make_record(0.3)
    table = ResultsTable([make_record(math.nan), best, make_record(math.nan)], ["A", "B"])

    optimal, _ = select_optimal(table)

    assert optimal is best


def test_all_nan_raises():
    table = ResultsTable([make_record(math.nan), make_record(math.nan)], ["A", "B"])

    with pytest.raises(EmptyResultsError, match="defined Sharpe"):
        select_optimal(table)


def test_infinite_sharpe_is_selected():
    table = ResultsTable([make_record(2.0), make_record(math.inf, risk=0.0)], ["A", "B"])

    optimal, cal = select_optimal(table)

    assert optimal.sharpe_ratio == math.inf
    assert cal.slope == math.inf


def test_select_optimal_accepts_plain_list():
    optimal, _ = select_optimal([make_record(0.1), make_record(0.9)])

    assert optimal.sharpe_ratio == 0.9


def test_minimum_risk():
    low = make_record(0.1, risk=0.05)
    table = ResultsTable([make_record(0.5, risk=0.2), low, make_record(0.2, risk=0.05)], ["A", "B"])

    assert select_minimum_risk(table) is low

    with pytest.raises(EmptyResultsError):
        select_minimum_risk(ResultsTable([], ["A"]))


def test_cal_points():
    cal = CapitalAllocationLine(intercept=0.001, slope=0.5)
    stds, returns = cal.points(max_risk=0.2, n_points=5)

    np.testing.assert_allclose(stds, [0.0, 0.05, 0.1, 0.15, 0.2])
    np.testing.assert_allclose(returns, 0.001 + 0.5 * stds)
    assert cal.expected_return(0.1) == pytest.approx(0.051)
