"""Chart rendering collaborators.

The coordinator only needs ``set_data`` per named series; how the points are
drawn is up to the renderer. ``PlotlyChartRenderer`` lays the price, RSI and
MACD panels into one plotly figure and can export a self-contained page.
"""

import html
import logging
from dataclasses import fields
from pathlib import Path
from typing import Protocol, Sequence

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from stock_dashboard.models import ChartPoint, ChartSeries, DashboardSummary


logger = logging.getLogger(__name__)

SERIES_NAMES: tuple[str, ...] = tuple(f.name for f in fields(ChartSeries))

GREEN = "#26a69a"
RED = "#ef5350"
RSI_OVERBOUGHT = 70
RSI_OVERSOLD = 30
VOLUME_PANE_SHARE = 0.3  # volume bars use the bottom 30% of the price pane


class ChartRenderer(Protocol):
    """Anything that can display the dashboard's series."""

    def set_data(self, series_name: str, points: Sequence[ChartPoint]) -> None: ...

    def show_summary(self, summary: DashboardSummary) -> None: ...

    def fit_content(self) -> None: ...


def _times(points: list[dict]) -> pd.DatetimeIndex:
    return pd.to_datetime([p["time"] for p in points], unit="s")


class PlotlyChartRenderer:
    """Collects series and turns them into a three-panel plotly figure."""

    def __init__(self) -> None:
        self.series: dict[str, list[dict]] = {name: [] for name in SERIES_NAMES}
        self.summary: DashboardSummary | None = None
        self._fit = False

    def set_data(self, series_name: str, points: Sequence[ChartPoint]) -> None:
        if series_name not in self.series:
            raise KeyError(f"Unknown series: {series_name}")
        self.series[series_name] = [point.to_dict() for point in points]

    def show_summary(self, summary: DashboardSummary) -> None:
        self.summary = summary

    def fit_content(self) -> None:
        self._fit = True

    def figure(self) -> go.Figure:
        """Build the price/volume/SMA, RSI and MACD panels."""
        title = self.summary.chart_title if self.summary else "Daily Chart"
        fig = make_subplots(
            rows=3, cols=1, shared_xaxes=True,
            row_heights=[0.6, 0.2, 0.2], vertical_spacing=0.03,
            specs=[[{"secondary_y": True}], [{}], [{}]],
            subplot_titles=(title, "RSI", "MACD"),
        )

        candles = self.series["candlestick"]
        if candles:
            fig.add_trace(go.Candlestick(
                x=_times(candles),
                open=[p["open"] for p in candles], high=[p["high"] for p in candles],
                low=[p["low"] for p in candles], close=[p["close"] for p in candles],
                increasing_line_color=GREEN, decreasing_line_color=RED,
                name="Price",
            ), row=1, col=1, secondary_y=False)

        volume = self.series["volume"]
        if volume:
            fig.add_trace(go.Bar(
                x=_times(volume), y=[p["value"] for p in volume],
                marker_color=[p["color"] for p in volume], name="Volume",
            ), row=1, col=1, secondary_y=True)
            peak = max(p["value"] for p in volume) or 1
            fig.update_yaxes(range=[0, peak / VOLUME_PANE_SHARE], showgrid=False,
                             showticklabels=False, row=1, col=1, secondary_y=True)

        for name, label, color in (("sma50", "SMA 50", "orange"), ("sma200", "SMA 200", "cyan")):
            self._add_line(fig, name, label, color, row=1)

        self._add_line(fig, "rsi", "RSI", "#2962FF", row=2)
        fig.add_hline(y=RSI_OVERBOUGHT, line_dash="dash", line_color=RED, line_width=1,
                      annotation_text="Overbought", row=2, col=1)
        fig.add_hline(y=RSI_OVERSOLD, line_dash="dash", line_color=GREEN, line_width=1,
                      annotation_text="Oversold", row=2, col=1)

        self._add_line(fig, "macd_line", "MACD", "#2962FF", row=3)
        self._add_line(fig, "macd_signal", "Signal", "#FF6D00", row=3)
        hist = self.series["macd_hist"]
        if hist:
            fig.add_trace(go.Bar(
                x=_times(hist), y=[p["value"] for p in hist],
                marker_color=[p["color"] for p in hist], name="Histogram",
            ), row=3, col=1)

        fig.update_layout(
            height=900, showlegend=False, hovermode="x unified",
            xaxis_rangeslider_visible=False,
            margin=dict(l=0, r=60, t=40, b=0),
        )
        if self._fit:
            fig.update_xaxes(autorange=True)
        return fig

    def _add_line(self, fig: go.Figure, name: str, label: str, color: str, row: int) -> None:
        points = self.series[name]
        if not points:
            return
        fig.add_trace(go.Scatter(
            x=_times(points), y=[p["value"] for p in points],
            mode="lines", line=dict(color=color, width=2), name=label,
        ), row=row, col=1)

    def render_html(self) -> str:
        """Self-contained page: summary header, metric cards, chart, news."""
        chart = self.figure().to_html(full_html=False, include_plotlyjs=True)
        summary = self.summary
        if summary is None:
            return f"<!DOCTYPE html><html><body>{chart}</body></html>"

        cards = "".join(
            f'<div class="metric-card"><span class="label">{html.escape(card.label)}</span>'
            f'<span class="value">{html.escape(card.value)}</span></div>'
            for card in summary.metrics
        )
        news = "".join(
            f'<div class="news-item"><a href="{html.escape(item.url)}" target="_blank">'
            f"{html.escape(item.headline)}</a>"
            f"<p>{item.published.isoformat()} - {html.escape(item.source)}</p></div>"
            for item in summary.news
        )
        return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{html.escape(summary.chart_title)}</title></head>
<body>
    <header>
        <img src="{html.escape(summary.logo)}" alt="" height="40">
        <h1>{html.escape(summary.name)} <small>{html.escape(summary.ticker)}</small></h1>
    </header>
    <section class="metrics">{cards}</section>
    <section class="chart">{chart}</section>
    <section class="profile">
        <p><span>Industry:</span> {html.escape(summary.industry)}</p>
        <p><span>Website:</span> <a href="{html.escape(summary.website)}" target="_blank">{html.escape(summary.website)}</a></p>
        <p><span>Exchange:</span> {html.escape(summary.exchange)}</p>
    </section>
    <section class="news">{news}</section>
</body>
</html>
"""

    def write_html(self, output_path: Path | str) -> Path:
        """Write the page to disk and return its path."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render_html(), encoding="utf-8")
        logger.info(f"Chart written to {output_path}")
        return output_path
