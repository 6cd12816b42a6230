"""Configuration settings for the dashboard."""

from dataclasses import dataclass, field
from pathlib import Path
import os

from dotenv import load_dotenv


load_dotenv()


DEFAULT_BASE_URL = "https://finnhub.io/api/v1"

# Endpoint keys in the order they are declared and reported
ENDPOINT_KEYS: tuple[str, ...] = (
    "profile",
    "quote",
    "metrics",
    "candles",
    "rsi",
    "macd",
    "news",
)


@dataclass
class Settings:
    """Application settings."""

    # Used when no key file has been written yet
    finnhub_api_key: str = field(default_factory=lambda: os.getenv("FINNHUB_API_KEY", ""))
    base_url: str = field(
        default_factory=lambda: os.getenv("FINNHUB_BASE_URL", DEFAULT_BASE_URL)
    )
    default_ticker: str = "AAPL"
    candle_lookback_days: int = 365  # enough history for a 200-day SMA
    news_lookback_days: int = 30
    rsi_period: int = 14
    sma_periods: tuple[int, int] = (50, 200)  # fast, slow
    request_timeout: float = 30.0
    data_dir: Path = field(
        default_factory=lambda: Path(__file__).parent.parent.parent / "data"
    )
    credential_path: Path = field(init=False)

    def __post_init__(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.credential_path = self.data_dir / "finnhub_api_key"
