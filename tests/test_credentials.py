"""Tests for credential storage."""

from stock_dashboard.config import Settings
from stock_dashboard.data import FileCredentialStore, MemoryCredentialStore


class TestFileCredentialStore:

    def test_roundtrip(self, tmp_path):
        store = FileCredentialStore(tmp_path / "key")
        assert store.load() is None

        store.save("abc123")
        assert store.load() == "abc123"
        assert (tmp_path / "key").read_text(encoding="utf-8") == "abc123"

    def test_clear(self, tmp_path):
        store = FileCredentialStore(tmp_path / "key")
        store.save("abc123")
        store.clear()
        store.clear()
        assert store.load() is None

    def test_fallback_until_file_written(self, tmp_path):
        store = FileCredentialStore(tmp_path / "key", fallback="from-env")
        assert store.load() == "from-env"

        store.save("from-file")
        assert store.load() == "from-file"

    def test_clear_overrides_fallback(self, tmp_path):
        FileCredentialStore(tmp_path / "key", fallback="from-env").clear()

        assert FileCredentialStore(tmp_path / "key", fallback="from-env").load() is None

    def test_save_after_clear(self, tmp_path):
        store = FileCredentialStore(tmp_path / "key", fallback="from-env")
        store.clear()
        store.save("new-key")
        assert store.load() == "new-key"

    def test_blank_fallback_ignored(self, tmp_path):
        assert FileCredentialStore(tmp_path / "key", fallback="").load() is None

    def test_fallback_from_settings(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FINNHUB_API_KEY", "env-key")
        settings = Settings(data_dir=tmp_path / "data")

        store = FileCredentialStore(settings.credential_path, fallback=settings.finnhub_api_key)
        assert store.load() == "env-key"


def test_memory_store():
    store = MemoryCredentialStore()
    assert store.load() is None
    store.save("k")
    assert store.load() == "k"
    store.clear()
    assert store.load() is None
