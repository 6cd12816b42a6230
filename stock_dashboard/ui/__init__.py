"""Dashboard coordination, summaries and chart rendering."""

from stock_dashboard.ui.chart_renderer import ChartRenderer, PlotlyChartRenderer, SERIES_NAMES
from stock_dashboard.ui.dashboard import DashboardCoordinator
from stock_dashboard.ui.summary import StatusEntry, StatusLog, build_summary

__all__ = [
    "ChartRenderer",
    "PlotlyChartRenderer",
    "SERIES_NAMES",
    "DashboardCoordinator",
    "StatusEntry",
    "StatusLog",
    "build_summary",
]
