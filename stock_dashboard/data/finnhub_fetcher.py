"""Finnhub data fetcher.

Loads everything the dashboard shows for one ticker with seven concurrent
requests. The result is all-or-nothing: either every endpoint answered with
a usable payload, or a single labelled error is raised.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable

import httpx

from stock_dashboard.config import ENDPOINT_KEYS, Settings
from stock_dashboard.errors import DataIntegrityFailure, FetchError, NetworkFailure
from stock_dashboard.models import CANDLE_STATUS_OK, CandleSeries, RawSeriesBundle, TimeRange


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EndpointRequest:
    """Path and query parameters for one endpoint."""

    key: str
    path: str
    params: dict[str, Any]


async def gather_labeled(calls: dict[str, Awaitable[Any]]) -> dict[str, Any]:
    """
    Await labelled awaitables concurrently and return their results by label.

    Every call is allowed to settle before anything is decided, so a failure
    never cancels the others. If any failed, the error of the first failed
    label (in declaration order) is raised; errors that do not already name
    an endpoint are wrapped in a NetworkFailure for that label.
    """
    labels = list(calls)
    results = await asyncio.gather(*calls.values(), return_exceptions=True)

    for label, result in zip(labels, results):
        if isinstance(result, FetchError):
            raise result
        if isinstance(result, Exception):
            raise NetworkFailure(label, f"Request for {label} failed: {result}") from result
        if isinstance(result, BaseException):
            raise result

    return dict(zip(labels, results))


class FinnhubFetcher:
    """Fetches the full dashboard bundle from the Finnhub API."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.settings.request_timeout)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "FinnhubFetcher":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    def build_requests(
        self, ticker: str, now: datetime | None = None
    ) -> dict[str, EndpointRequest]:
        """Describe the seven requests for a ticker, keyed by endpoint."""
        history = TimeRange.lookback(self.settings.candle_lookback_days, now)
        news_from, news_to = TimeRange.lookback(self.settings.news_lookback_days, now).as_dates()
        daily = {
            "symbol": ticker,
            "resolution": "D",
            "from": history.start,
            "to": history.end,
        }

        requests = [
            EndpointRequest("profile", "/stock/profile2", {"symbol": ticker}),
            EndpointRequest("quote", "/quote", {"symbol": ticker}),
            EndpointRequest("metrics", "/stock/metric", {"symbol": ticker, "metric": "all"}),
            EndpointRequest("candles", "/stock/candle", dict(daily)),
            EndpointRequest(
                "rsi",
                "/indicator",
                {**daily, "indicator": "rsi", "timeperiod": self.settings.rsi_period},
            ),
            EndpointRequest("macd", "/indicator", {**daily, "indicator": "macd"}),
            EndpointRequest(
                "news",
                "/company-news",
                {"symbol": ticker, "from": news_from, "to": news_to},
            ),
        ]
        return {request.key: request for request in requests}

    async def _request(self, request: EndpointRequest, api_key: str) -> Any:
        """Issue one GET and return the decoded JSON body."""
        params = {**request.params, "token": api_key}
        url = f"{self.settings.base_url}{request.path}"

        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error fetching {request.key}: {e.response.status_code}")
            raise NetworkFailure(request.key, status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error(f"Error fetching {request.key}: {e}")
            raise NetworkFailure(request.key) from e

        try:
            return response.json()
        except ValueError as e:
            raise DataIntegrityFailure(request.key, f"Response for {request.key} is not valid JSON.") from e

    async def fetch_all(
        self, ticker: str, api_key: str, now: datetime | None = None
    ) -> RawSeriesBundle:
        """
        Fetch every endpoint for a ticker concurrently.

        Args:
            ticker: Normalised stock symbol (e.g., "AAPL")
            api_key: Finnhub token appended to every request
            now: Reference time for the lookback windows (default: current time)

        Returns:
            RawSeriesBundle holding all seven payloads

        Raises:
            NetworkFailure: an endpoint failed at the transport or HTTP level
            DataIntegrityFailure: a payload was unusable, including candles
                whose status is not "ok"
        """
        requests = self.build_requests(ticker, now)
        logger.info(f"Fetching {len(requests)} endpoints for {ticker}...")

        results = await gather_labeled(
            {key: self._request(requests[key], api_key) for key in ENDPOINT_KEYS}
        )

        candles = results["candles"]
        if not isinstance(candles, dict) or candles.get("s") != CANDLE_STATUS_OK:
            raise DataIntegrityFailure("candles", "Failed to fetch historical candle data.")
        # Raises DataIntegrityFailure when the arrays disagree in length
        CandleSeries.from_payload(candles)

        logger.info(f"  Received {len(candles['t'])} daily bars for {ticker}")
        return RawSeriesBundle.from_results(results)
