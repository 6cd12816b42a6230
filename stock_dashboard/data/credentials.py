"""Storage for the single Finnhub API key."""

import logging
from pathlib import Path
from typing import Protocol


logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """Where the dashboard keeps its API key between sessions."""

    def load(self) -> str | None: ...

    def save(self, credential: str) -> None: ...

    def clear(self) -> None: ...


class FileCredentialStore:
    """
    Keeps the key in a plain text file.

    When the file does not exist, ``fallback`` (the key configured in the
    environment) is used instead. ``clear`` leaves an empty file behind so a
    forgotten key stays forgotten even while the environment still has one.
    """

    def __init__(self, path: Path, fallback: str | None = None) -> None:
        self.path = Path(path)
        self.fallback = fallback or None

    def load(self) -> str | None:
        if self.path.exists():
            return self.path.read_text(encoding="utf-8").strip() or None
        return self.fallback

    def save(self, credential: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(credential, encoding="utf-8")
        logger.info(f"Saved API key to {self.path}")

    def clear(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("", encoding="utf-8")
        logger.info(f"Cleared API key in {self.path}")


class MemoryCredentialStore:
    """In-process store, for one-off runs that must not touch disk."""

    def __init__(self, credential: str | None = None) -> None:
        self._credential = credential

    def load(self) -> str | None:
        return self._credential

    def save(self, credential: str) -> None:
        self._credential = credential

    def clear(self) -> None:
        self._credential = None
