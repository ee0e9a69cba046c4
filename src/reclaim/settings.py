"""User configuration for reclaim.

Settings live in ``$XDG_CONFIG_HOME/reclaim/settings.json`` as a single
JSON object. Keys are addressed with dots, so ``run.purge_trash`` is
``{"run": {"purge_trash": ...}}`` on disk. A missing or unreadable file
behaves like an empty one; reclaim never refuses to start over it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from reclaim.utils import xdg_config_home

log = logging.getLogger(__name__)


def default_settings_path() -> Path:
    return xdg_config_home() / "reclaim" / "settings.json"


def _read_settings(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        log.warning("Cannot read %s: %s", path, e)
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        log.warning("Ignoring malformed settings in %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        log.warning("Ignoring settings in %s: top level is not an object", path)
        return {}
    return data


class Settings:
    """Dot-addressed view over the settings file.

    Reads happen once at construction; every ``set`` writes the whole
    file back.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_settings_path()
        self._data = _read_settings(self._path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def section(self, name: str) -> dict[str, Any]:
        """The object stored under *name*, or ``{}`` if it is absent or not an object."""
        value = self.get(name)
        return value if isinstance(value, dict) else {}

    def set(self, key: str, value: Any) -> None:
        *parents, leaf = key.split(".")
        node = self._data
        for part in parents:
            if not isinstance(node.get(part), dict):
                node[part] = {}
            node = node[part]
        node[leaf] = value
        self._write()

    def _write(self) -> None:
        text = json.dumps(self._data, indent=2, ensure_ascii=False) + "\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(text, encoding="utf-8")
        except OSError as e:
            log.warning("Settings not saved to %s: %s", self._path, e)


@dataclass(frozen=True)
class RunDefaults:
    """Defaults for ``reclaim run`` read from the ``run`` settings section."""

    log_file: str | None = None
    older_than_days: float | None = None
    purge_trash: bool = True
    accounting: str = "coarse"

    @classmethod
    def from_settings(cls, settings: Settings) -> RunDefaults:
        run = settings.section("run")
        older = run.get("older_than_days")
        if older is not None and (isinstance(older, bool) or not isinstance(older, (int, float)) or older < 0):
            log.warning("Ignoring invalid run.older_than_days: %r", older)
            older = None
        log_file = run.get("log_file")
        return cls(
            log_file=str(log_file) if log_file else None,
            older_than_days=older,
            purge_trash=bool(run.get("purge_trash", True)),
            accounting=str(run.get("accounting", "coarse")),
        )
