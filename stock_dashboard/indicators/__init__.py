"""Indicator derivation and series alignment."""

from stock_dashboard.indicators.calculator import moving_averages, simple_moving_average
from stock_dashboard.indicators.alignment import (
    DOWN_COLOR,
    UP_COLOR,
    align_derived,
    align_histogram,
    align_indicator,
    align_ohlcv,
    align_volume,
    build_chart_series,
)

__all__ = [
    "moving_averages",
    "simple_moving_average",
    "DOWN_COLOR",
    "UP_COLOR",
    "align_derived",
    "align_histogram",
    "align_indicator",
    "align_ohlcv",
    "align_volume",
    "build_chart_series",
]
