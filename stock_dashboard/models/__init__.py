"""Data models shared across the pipeline."""

from stock_dashboard.models.market_data import (
    CANDLE_STATUS_OK,
    CandleSeries,
    ChartPoint,
    ChartSeries,
    DashboardState,
    DashboardSummary,
    MetricCard,
    NewsItem,
    RawSeriesBundle,
    TimeRange,
    normalize_ticker,
)

__all__ = [
    "CANDLE_STATUS_OK",
    "CandleSeries",
    "ChartPoint",
    "ChartSeries",
    "DashboardState",
    "DashboardSummary",
    "MetricCard",
    "NewsItem",
    "RawSeriesBundle",
    "TimeRange",
    "normalize_ticker",
]
