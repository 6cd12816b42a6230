"""Data fetching and credential storage."""

from .finnhub_fetcher import FinnhubFetcher, gather_labeled
from .credentials import CredentialStore, FileCredentialStore, MemoryCredentialStore

__all__ = [
    "FinnhubFetcher",
    "gather_labeled",
    "CredentialStore",
    "FileCredentialStore",
    "MemoryCredentialStore",
]
