"""Moving averages derived locally from close prices."""

from typing import Iterable, Sequence

import pandas as pd


DEFAULT_SMA_PERIODS = (50, 200)


def simple_moving_average(close_prices: Sequence[float], period: int) -> list[float]:
    """
    Trailing simple moving average.

    Output k is the plain mean of close_prices[k : k + period], so the first
    value belongs to bar ``period - 1``. With fewer prices than the period
    there is nothing to average and an empty list comes back.

    Args:
        close_prices: Close prices, oldest first
        period: Window length in bars (>= 1)

    Returns:
        len(close_prices) - period + 1 averages, or [] if data is insufficient
    """
    if isinstance(period, bool) or not isinstance(period, int) or period < 1:
        raise ValueError(f"SMA period must be a positive integer, got {period!r}")

    if close_prices is None or len(close_prices) < period:
        return []

    closes = pd.Series(close_prices, dtype="float64")
    averages = closes.rolling(window=period).mean()
    return averages.iloc[period - 1:].tolist()


def moving_averages(
    close_prices: Sequence[float], periods: Iterable[int] = DEFAULT_SMA_PERIODS
) -> dict[int, list[float]]:
    """Compute one independent SMA per period over the same closes."""
    return {period: simple_moving_average(close_prices, period) for period in periods}
