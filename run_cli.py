"""
CLI entry point for the portfolio simulation.

Usage:
    python run_cli.py                        # Run with sample data
    python run_cli.py --file returns.csv     # Run with a CSV of returns
    python run_cli.py --file prices.xlsx --prices
    python run_cli.py --seed 7 --portfolios 2000

For installed package, use: sf-analyze
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from sampled_frontier.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
