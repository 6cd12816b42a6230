"""Profile, metric and news summaries plus the status log."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from stock_dashboard.models import DashboardSummary, MetricCard, NewsItem, RawSeriesBundle


logger = logging.getLogger(__name__)

NEWS_LIMIT = 5
STATUS_KINDS = ("info", "success", "error")


def format_price(value: float | None) -> str:
    """Dollar amount with two decimals."""
    if value is None:
        return "$0.00"
    return f"${value:.2f}"


def format_market_cap(value: float | None) -> str:
    """Finnhub reports market cap in millions; show billions."""
    if value is None:
        return "0.00B"
    return f"{value / 1000:.2f}B"


def format_ratio(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.2f}"


def build_metric_cards(metrics_payload: dict, quote: dict) -> list[MetricCard]:
    """Headline figures from the quote and the fundamentals payload."""
    metrics = metrics_payload.get("metric") or {}
    return [
        MetricCard("Current Price", format_price(quote.get("c"))),
        MetricCard("Market Cap", format_market_cap(metrics.get("marketCapitalization"))),
        MetricCard("52-Week High", format_price(metrics.get("52WeekHigh"))),
        MetricCard("52-Week Low", format_price(metrics.get("52WeekLow"))),
        MetricCard("P/E Ratio", format_ratio(metrics.get("peNormalizedAnnual"))),
    ]


def build_news_items(news: list[dict], limit: int = NEWS_LIMIT) -> list[NewsItem]:
    """The first articles as returned (Finnhub sends newest first)."""
    items = []
    for article in news[:limit]:
        published = datetime.fromtimestamp(article.get("datetime", 0), tz=timezone.utc).date()
        items.append(
            NewsItem(
                headline=article.get("headline", ""),
                url=article.get("url", ""),
                published=published,
                source=article.get("source", ""),
            )
        )
    return items


def build_summary(bundle: RawSeriesBundle, ticker: str) -> DashboardSummary:
    """Everything shown beside the charts for one ticker."""
    profile = bundle.profile or {}
    name = profile.get("name") or ""
    return DashboardSummary(
        name=name or "Company Name",
        ticker=profile.get("ticker") or ticker,
        logo=profile.get("logo") or "",
        chart_title=f"{name or ticker} Daily Chart",
        industry=profile.get("finnhubIndustry") or "N/A",
        website=profile.get("weburl") or "N/A",
        exchange=profile.get("exchange") or "N/A",
        metrics=build_metric_cards(bundle.metrics or {}, bundle.quote or {}),
        news=build_news_items(bundle.news or []),
    )


@dataclass(frozen=True)
class StatusEntry:
    """One line of the status log."""

    timestamp: datetime
    message: str
    kind: str = "info"

    def __str__(self) -> str:
        return f"[{self.timestamp.strftime('%H:%M:%S')}] {self.message}"


class StatusLog:
    """User-facing activity log, newest entry first."""

    def __init__(self, max_entries: int = 200) -> None:
        self.max_entries = max_entries
        self._entries: list[StatusEntry] = []

    @property
    def entries(self) -> list[StatusEntry]:
        return list(self._entries)

    @property
    def latest(self) -> StatusEntry | None:
        return self._entries[0] if self._entries else None

    def log(self, message: str, kind: str = "info") -> StatusEntry:
        if kind not in STATUS_KINDS:
            raise ValueError(f"Unknown status kind: {kind}")

        entry = StatusEntry(timestamp=datetime.now(), message=message, kind=kind)
        self._entries.insert(0, entry)
        del self._entries[self.max_entries:]

        if kind == "error":
            logger.error(message)
        else:
            logger.info(message)
        return entry

    def errors(self) -> list[StatusEntry]:
        return [entry for entry in self._entries if entry.kind == "error"]
