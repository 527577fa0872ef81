"""
Two-asset walkthrough of the random portfolio search.

Returns over 4 periods:
    A = [0.01, 0.02, -0.01, 0.03]
    B = [0.00, 0.01,  0.01, 0.02]

Risk-free rate: 0, seed: 12, 200 portfolios (100 x 2 assets).
"""

import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path

from sampled_frontier import SimulationEngine, compute_return_statistics, select_optimal
from sampled_frontier.visualization import plot_simulated_portfolios

PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_DIR = PROJECT_ROOT / 'output'
OUTPUT_DIR.mkdir(exist_ok=True)

asset_names = ['A', 'B']
returns = np.array([
    [0.01, 0.00],
    [0.02, 0.01],
    [-0.01, 0.01],
    [0.03, 0.02],
])
rf_rate = 0.0

means, cov = compute_return_statistics(returns)
print("Mean returns:", means)
print("Covariance matrix:\n", cov)

table = SimulationEngine().run(returns, risk_free_rate=rf_rate, seed=12, asset_names=asset_names)
optimal, cal = select_optimal(table, rf_rate)

print(f"\nSimulated {len(table)} portfolios")
print("Optimal weights:", dict(zip(asset_names, np.round(optimal.weights, 4))))
print(f"Return {optimal.expected_return:.5f}  Risk {optimal.risk:.5f}  Sharpe {optimal.sharpe_ratio:.4f}")
print(f"CAL: E[r] = {cal.intercept} + {cal.slope:.4f} * sigma")

plot_simulated_portfolios(table, optimal, cal, save_path=str(OUTPUT_DIR / 'two_assets.png'))
plt.show()
