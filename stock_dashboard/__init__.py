"""Stock analysis dashboard backed by the Finnhub API."""

__version__ = "0.1.0"
