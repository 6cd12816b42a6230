"""Dashboard coordinator: credential lock, loading guard and fetch cycle.

One cycle runs fetch -> moving averages -> alignment -> renderer. The
renderer is only touched after every stage succeeded, so a failed cycle
leaves the previous charts in place.
"""

import asyncio
import logging
from dataclasses import replace

from stock_dashboard.config import Settings
from stock_dashboard.data import CredentialStore, FileCredentialStore, FinnhubFetcher
from stock_dashboard.errors import CredentialMissing, DashboardError
from stock_dashboard.indicators import build_chart_series
from stock_dashboard.models import ChartSeries, DashboardState, normalize_ticker
from stock_dashboard.ui.chart_renderer import ChartRenderer, PlotlyChartRenderer
from stock_dashboard.ui.summary import StatusLog, build_summary


logger = logging.getLogger(__name__)


class DashboardCoordinator:
    """Owns the Locked/Unlocked and Idle/Loading state of the dashboard."""

    def __init__(
        self,
        renderer: ChartRenderer,
        store: CredentialStore,
        fetcher: FinnhubFetcher | None = None,
        settings: Settings | None = None,
        status_log: StatusLog | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.renderer = renderer
        self.store = store
        self.fetcher = fetcher or FinnhubFetcher(self.settings)
        self.status = status_log or StatusLog()
        self.state = DashboardState(
            credential=store.load() or None,
            ticker=self.settings.default_ticker,
        )
        self.current_series: ChartSeries | None = None

    @property
    def is_locked(self) -> bool:
        return self.state.is_locked

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    async def start(self, ticker: str | None = None) -> ChartSeries | None:
        """Unlock with a stored key if there is one and load the first ticker."""
        self.status.log("Application initializing...")
        credential = self.store.load()
        if not credential:
            self.status.log("API Key not found. Please enter a key to begin.")
            return None

        self.state = replace(self.state, credential=credential)
        self.status.log("API Key found in storage.", "success")
        return await self.refresh(ticker)

    async def submit_credential(self, credential: str, ticker: str | None = None) -> bool:
        """Save a key entered by the user, unlock, and load data."""
        credential = (credential or "").strip()
        if not credential:
            self.status.log("Please enter a valid API key.", "error")
            return False

        self.store.save(credential)
        self.state = replace(self.state, credential=credential)
        self.status.log("API Key saved successfully.", "success")
        await self.refresh(ticker)
        return True

    def clear_credential(self) -> None:
        """Forget the saved key and lock the dashboard again."""
        self.store.clear()
        self.state = replace(self.state, credential=None)
        self.status.log("API Key removed. Dashboard locked.")

    async def refresh(self, ticker: str | None = None) -> ChartSeries | None:
        """
        Run one fetch cycle.

        Returns the rendered series, or None when the cycle did not render:
        dashboard locked, a cycle already in flight, or a failure (which is
        written to the status log).
        """
        if self.state.is_locked:
            self.status.log(str(CredentialMissing()), "error")
            return None

        if self.state.is_loading:
            self.state = replace(self.state, rejected_attempts=self.state.rejected_attempts + 1)
            logger.debug("Fetch cycle already in progress; request ignored")
            return None

        try:
            symbol = normalize_ticker(ticker or self.state.ticker)
        except ValueError as e:
            self.status.log(f"Error: {e}", "error")
            return None

        self.state = replace(
            self.state,
            ticker=symbol,
            is_loading=True,
            cycles_started=self.state.cycles_started + 1,
        )
        try:
            return await self._run_cycle(symbol, self.state.credential)
        except DashboardError as e:
            self.status.log(f"Error: {e}", "error")
            return None
        except Exception as e:
            logger.exception(f"Fetch cycle for {symbol} failed")
            self.status.log(f"Error: {e}", "error")
            return None
        finally:
            self.state = replace(self.state, is_loading=False)

    async def _run_cycle(self, symbol: str, credential: str) -> ChartSeries:
        self.status.log(f"Fetching all data for {symbol}...")
        bundle = await self.fetcher.fetch_all(symbol, credential)
        self.status.log("All data received. Processing...")

        summary = build_summary(bundle, symbol)
        chart_series = build_chart_series(bundle, self.settings.sma_periods)

        for name, points in chart_series.items():
            self.renderer.set_data(name, points)
        self.renderer.show_summary(summary)
        self.renderer.fit_content()

        self.current_series = chart_series
        self.status.log(f"Dashboard updated for {symbol}.", "success")
        return chart_series


async def run_once(args) -> int:
    """Run a single cycle from the command line; returns an exit code."""
    settings = Settings()
    store = FileCredentialStore(settings.credential_path, fallback=settings.finnhub_api_key)
    renderer = PlotlyChartRenderer()

    async with FinnhubFetcher(settings) as fetcher:
        coordinator = DashboardCoordinator(renderer, store, fetcher, settings)

        if args.forget_key:
            coordinator.clear_credential()
            return 0

        if args.api_key:
            await coordinator.submit_credential(args.api_key, args.ticker)
        else:
            await coordinator.start(args.ticker)

    for entry in reversed(coordinator.status.entries):
        print(entry)

    if coordinator.current_series is None:
        return 1

    if renderer.summary is not None:
        print(f"\n{renderer.summary.name} ({renderer.summary.ticker})")
        print("-" * 40)
        for card in renderer.summary.metrics:
            print(f"  {card.label:15} | {card.value:>12}")

    path = renderer.write_html(args.output)
    print(f"\nChart exported to: {path}")
    return 0


def main() -> None:
    """CLI entry point."""
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Load a stock analysis dashboard")
    parser.add_argument(
        "-t", "--ticker",
        type=str,
        default=None,
        help="Ticker symbol (default: AAPL)",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="Finnhub API key to save before loading",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default="dist/chart.html",
        help="Output path for the chart (default: dist/chart.html)",
    )
    parser.add_argument(
        "--forget-key",
        action="store_true",
        help="Remove the saved API key and exit",
    )
    args = parser.parse_args()

    raise SystemExit(asyncio.run(run_once(args)))


if __name__ == "__main__":
    main()
