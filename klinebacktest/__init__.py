"""K-line market data with backtesting results, moving averages and chart geometry."""

__version__ = "0.1.0"