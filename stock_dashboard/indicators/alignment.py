"""Zip parallel API arrays into chart-ready point sequences.

Every series keeps the order of its own timestamp array. Indicator payloads
may be shorter than the candles (warm-up bars trimmed remotely), so each one
is aligned against its own ``t`` array rather than the candle index.
"""

from typing import Mapping, Sequence

from stock_dashboard.indicators.calculator import DEFAULT_SMA_PERIODS, moving_averages
from stock_dashboard.models import CandleSeries, ChartPoint, ChartSeries, RawSeriesBundle


UP_COLOR = "rgba(38, 166, 154, 0.5)"
DOWN_COLOR = "rgba(239, 83, 80, 0.5)"


def align_ohlcv(candles: CandleSeries) -> list[ChartPoint]:
    """One candlestick point per bar."""
    return [
        ChartPoint(time=t, open=o, high=h, low=low, close=c)
        for t, o, h, low, c in zip(candles.t, candles.o, candles.h, candles.l, candles.c, strict=True)
    ]


def align_volume(candles: CandleSeries) -> list[ChartPoint]:
    """Volume bars coloured up only when the bar closed above its open."""
    return [
        ChartPoint(time=t, value=v, color=UP_COLOR if c > o else DOWN_COLOR)
        for t, v, o, c in zip(candles.t, candles.v, candles.o, candles.c, strict=True)
    ]


def align_indicator(series: Mapping[str, Sequence], value_key: str) -> list[ChartPoint]:
    """Pair an indicator's own timestamps with one of its value arrays."""
    return [
        ChartPoint(time=t, value=value)
        for t, value in zip(series["t"], series[value_key], strict=True)
    ]


def align_histogram(series: Mapping[str, Sequence], value_key: str = "macdHist") -> list[ChartPoint]:
    """Like align_indicator, coloured by sign (zero counts as up)."""
    return [
        ChartPoint(time=point.time, value=point.value, color=UP_COLOR if point.value >= 0 else DOWN_COLOR)
        for point in align_indicator(series, value_key)
    ]


def align_derived(
    values: Sequence[float], source_timestamps: Sequence[int], period: int
) -> list[ChartPoint]:
    """
    Attach candle timestamps to a moving average.

    Value k was computed from the window ending at bar k + period - 1, so it
    takes that bar's timestamp, not bar k's.
    """
    offset = period - 1
    return [
        ChartPoint(time=source_timestamps[k + offset], value=value)
        for k, value in enumerate(values)
    ]


def build_chart_series(
    bundle: RawSeriesBundle, sma_periods: Sequence[int] = DEFAULT_SMA_PERIODS
) -> ChartSeries:
    """
    Derive the moving averages and align every series in a bundle.

    Args:
        bundle: Validated payloads for one ticker
        sma_periods: (fast, slow) windows drawn as the sma50 and sma200 lines

    Returns:
        ChartSeries with every named series aligned
    """
    if len(sma_periods) != 2:
        raise ValueError(f"Expected a (fast, slow) pair of SMA periods, got {tuple(sma_periods)}")
    fast_period, slow_period = sma_periods

    candles = CandleSeries.from_payload(bundle.candles)
    averages = moving_averages(candles.c, (fast_period, slow_period))

    return ChartSeries(
        candlestick=align_ohlcv(candles),
        volume=align_volume(candles),
        sma50=align_derived(averages[fast_period], candles.t, fast_period),
        sma200=align_derived(averages[slow_period], candles.t, slow_period),
        rsi=align_indicator(bundle.rsi, "rsi"),
        macd_line=align_indicator(bundle.macd, "macd"),
        macd_signal=align_indicator(bundle.macd, "macdSignal"),
        macd_hist=align_histogram(bundle.macd),
    )
