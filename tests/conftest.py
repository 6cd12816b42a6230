"""Shared fixtures: synthetic Finnhub payloads and a mocked HTTP client."""

import httpx
import pytest

from stock_dashboard.config import Settings
from stock_dashboard.models import RawSeriesBundle


START_TS = 1_700_000_000
DAY = 86_400


def make_candle_payload(n: int = 300, status: str = "ok") -> dict:
    """n daily bars; even bars close above their open, odd bars below."""
    t = [START_TS + i * DAY for i in range(n)]
    c = [100.0 + i for i in range(n)]
    o = [close - 1.0 if i % 2 == 0 else close + 1.0 for i, close in enumerate(c)]
    return {
        "t": t,
        "o": o,
        "h": [max(a, b) + 2.0 for a, b in zip(o, c)],
        "l": [min(a, b) - 2.0 for a, b in zip(o, c)],
        "c": c,
        "v": [1_000_000 + i for i in range(n)],
        "s": status,
    }


def make_payloads(n_candles: int = 300, n_rsi: int = 250, n_macd: int = 260) -> dict:
    candles = make_candle_payload(n_candles)
    rsi_t = candles["t"][-n_rsi:]
    macd_t = candles["t"][-n_macd:]
    return {
        "profile": {
            "name": "Apple Inc",
            "ticker": "AAPL",
            "logo": "https://static.finnhub.io/logo/aapl.png",
            "finnhubIndustry": "Technology",
            "weburl": "https://www.apple.com/",
            "exchange": "NASDAQ NMS - GLOBAL MARKET",
        },
        "quote": {"c": 187.5, "o": 185.0, "h": 188.0, "l": 184.2, "pc": 186.0},
        "metrics": {
            "metric": {
                "marketCapitalization": 2_950_000.0,
                "52WeekHigh": 199.62,
                "52WeekLow": 164.08,
                "peNormalizedAnnual": 31.25,
            }
        },
        "candles": candles,
        "rsi": {"t": rsi_t, "rsi": [30.0 + (i % 40) for i in range(n_rsi)], "s": "ok"},
        "macd": {
            "t": macd_t,
            "macd": [0.5 - i * 0.01 for i in range(n_macd)],
            "macdSignal": [0.4 - i * 0.01 for i in range(n_macd)],
            "macdHist": [0.1 - i * 0.001 for i in range(n_macd)],
            "s": "ok",
        },
        "news": [
            {
                "headline": f"Headline {i}",
                "url": f"https://news.example.com/{i}",
                "datetime": START_TS + i * 3600,
                "source": "Reuters",
            }
            for i in range(8)
        ],
    }


def endpoint_key(request: httpx.Request) -> str:
    """Map a Finnhub request back to its bundle key."""
    path = request.url.path
    if path.endswith("/stock/profile2"):
        return "profile"
    if path.endswith("/quote"):
        return "quote"
    if path.endswith("/stock/metric"):
        return "metrics"
    if path.endswith("/stock/candle"):
        return "candles"
    if path.endswith("/indicator"):
        return request.url.params["indicator"]
    if path.endswith("/company-news"):
        return "news"
    raise AssertionError(f"Unexpected request: {request.url}")


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(finnhub_api_key="", data_dir=tmp_path / "data")


@pytest.fixture
def payloads() -> dict:
    return make_payloads()


@pytest.fixture
def bundle(payloads) -> RawSeriesBundle:
    return RawSeriesBundle.from_results(payloads)


@pytest.fixture
def make_client():
    """
    Factory for an AsyncClient answering from a payload dict.

    ``fail`` lists endpoints that raise a transport error, ``statuses`` maps
    endpoints to HTTP status codes, and every handled key is appended to
    ``calls``.
    """
    def factory(payloads, fail=(), statuses=None, calls=None, bodies=None):
        def handler(request: httpx.Request) -> httpx.Response:
            key = endpoint_key(request)
            if calls is not None:
                calls.append(key)
            if key in fail:
                raise httpx.ConnectError("connection refused", request=request)
            if bodies and key in bodies:
                return httpx.Response(200, text=bodies[key])
            status = (statuses or {}).get(key, 200)
            return httpx.Response(status, json=payloads[key])

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory
