"""Shared test fixtures."""

from __future__ import annotations

import pytest

import reclaim.storage as storage


class FakePurger:
    """Records purge calls instead of touching any trash directory."""

    def __init__(self, count: int = 3, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, bool]] = []
        self._count = count
        self._error = error

    def purge(self, volume: str, apply: bool = True) -> int:
        self.calls.append((volume, apply))
        if self._error is not None:
            raise self._error
        return self._count


@pytest.fixture(autouse=True)
def isolate_xdg(tmp_path, monkeypatch):
    """Point every XDG directory into the test's temp dir."""
    home = tmp_path / "home"
    for name, sub in (
        ("XDG_CACHE_HOME", ".cache"),
        ("XDG_CONFIG_HOME", ".config"),
        ("XDG_DATA_HOME", ".local/share"),
    ):
        path = home / sub
        path.mkdir(parents=True)
        monkeypatch.setenv(name, str(path))
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def isolate_storage(tmp_path, monkeypatch):
    """Redirect storage to a temp directory."""
    data_dir = tmp_path / "reclaim_data"
    data_dir.mkdir()
    history_file = data_dir / "history.json"
    monkeypatch.setattr(storage, "HISTORY_FILE", history_file)
    monkeypatch.setattr(storage, "_DATA_DIR", data_dir)
    return history_file


@pytest.fixture
def purger():
    return FakePurger()


@pytest.fixture
def junk_volume(tmp_path):
    """A fake volume root holding a cache directory and rotated logs."""
    root = tmp_path / "vol"
    cache = root / "var" / "cache" / "app"
    (cache / "sub").mkdir(parents=True)
    (cache / "a.bin").write_bytes(b"a" * 1000)
    (cache / "sub" / "b.bin").write_bytes(b"b" * 2000)

    logs = root / "var" / "log"
    logs.mkdir(parents=True)
    (logs / "syslog.1.gz").write_bytes(b"l" * 500)
    (logs / "syslog.2.gz").write_bytes(b"l" * 300)
    (logs / "syslog").write_bytes(b"c" * 100)
    return root


@pytest.fixture
def junk_catalog():
    return ("var/cache/app", "var/log/*.gz", "missing/dir")
