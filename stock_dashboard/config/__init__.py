"""Application configuration."""

from stock_dashboard.config.settings import DEFAULT_BASE_URL, ENDPOINT_KEYS, Settings

__all__ = ["DEFAULT_BASE_URL", "ENDPOINT_KEYS", "Settings"]
