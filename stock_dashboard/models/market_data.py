"""Data models for market data."""

import re
from dataclasses import dataclass, field, fields
from datetime import date, datetime, timezone
from typing import Any, Iterator

from stock_dashboard.errors import DataIntegrityFailure


SECONDS_PER_DAY = 24 * 60 * 60
CANDLE_STATUS_OK = "ok"

_TICKER_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9.\-]*$")


def normalize_ticker(ticker: str) -> str:
    """Upper-case a user supplied symbol and reject anything that is not one."""
    symbol = (ticker or "").strip().upper()
    if not _TICKER_PATTERN.match(symbol):
        raise ValueError(f"Invalid ticker symbol: {ticker!r}")
    return symbol


@dataclass(frozen=True)
class TimeRange:
    """Window of Unix-epoch seconds, recomputed for every fetch."""

    start: int
    end: int

    @classmethod
    def lookback(cls, days: int, now: datetime | None = None) -> "TimeRange":
        if now is None:
            now = datetime.now(timezone.utc)
        end = int(now.timestamp())
        return cls(start=end - days * SECONDS_PER_DAY, end=end)

    def as_dates(self) -> tuple[str, str]:
        """ISO dates (UTC) for endpoints that take calendar days."""
        start = datetime.fromtimestamp(self.start, tz=timezone.utc).date()
        end = datetime.fromtimestamp(self.end, tz=timezone.utc).date()
        return start.isoformat(), end.isoformat()


@dataclass(frozen=True)
class RawSeriesBundle:
    """Decoded payloads of all seven endpoints for one fetch cycle.

    Only the fetcher builds one, and only once every request succeeded and
    the candle payload carried an ``ok`` status.
    """

    profile: dict
    quote: dict
    metrics: dict
    candles: dict
    rsi: dict
    macd: dict
    news: list

    @classmethod
    def from_results(cls, results: dict[str, Any]) -> "RawSeriesBundle":
        return cls(**{f.name: results[f.name] for f in fields(cls)})

    def keys(self) -> list[str]:
        return [f.name for f in fields(self)]

    def __getitem__(self, key: str) -> Any:
        if key not in self.keys():
            raise KeyError(key)
        return getattr(self, key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(fields(self))


@dataclass(frozen=True)
class CandleSeries:
    """Daily OHLCV bars as parallel, index-aligned arrays."""

    t: tuple[int, ...]
    o: tuple[float, ...]
    h: tuple[float, ...]
    l: tuple[float, ...]  # noqa: E741
    c: tuple[float, ...]
    v: tuple[float, ...]

    def __post_init__(self) -> None:
        lengths = {len(getattr(self, f.name)) for f in fields(self)}
        if len(lengths) > 1:
            raise DataIntegrityFailure("candles", "Candle arrays have mismatched lengths.")

    @classmethod
    def from_payload(cls, payload: dict) -> "CandleSeries":
        try:
            return cls(**{key: tuple(payload[key]) for key in ("t", "o", "h", "l", "c", "v")})
        except (KeyError, TypeError) as e:
            raise DataIntegrityFailure("candles", f"Candle payload is missing {e}.") from e

    def __len__(self) -> int:
        return len(self.t)


@dataclass(frozen=True)
class ChartPoint:
    """One render-ready record; unset fields are left out of the output."""

    time: int
    open: float | None = None
    high: float | None = None
    low: float | None = None
    close: float | None = None
    value: float | None = None
    color: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class ChartSeries:
    """Every aligned series produced from one bundle."""

    candlestick: list[ChartPoint]
    volume: list[ChartPoint]
    sma50: list[ChartPoint]
    sma200: list[ChartPoint]
    rsi: list[ChartPoint]
    macd_line: list[ChartPoint]
    macd_signal: list[ChartPoint]
    macd_hist: list[ChartPoint]

    def items(self) -> list[tuple[str, list[ChartPoint]]]:
        return [(f.name, getattr(self, f.name)) for f in fields(self)]


@dataclass(frozen=True)
class NewsItem:
    """Single company news article."""

    headline: str
    url: str
    published: date
    source: str


@dataclass(frozen=True)
class DashboardState:
    """Coordinator state; every transition builds a new instance."""

    credential: str | None = None
    ticker: str = "AAPL"
    is_loading: bool = False
    rejected_attempts: int = 0
    cycles_started: int = 0

    @property
    def is_locked(self) -> bool:
        return self.credential is None


@dataclass
class MetricCard:
    """Label/value pair for the headline metrics row."""

    label: str
    value: str


@dataclass
class DashboardSummary:
    """Reference data shown next to the charts."""

    name: str
    ticker: str
    logo: str
    chart_title: str
    industry: str
    website: str
    exchange: str
    metrics: list[MetricCard] = field(default_factory=list)
    news: list[NewsItem] = field(default_factory=list)
