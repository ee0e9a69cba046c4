"""JSON file storage for run history."""

from __future__ import annotations

import json
import logging
from typing import Any

from reclaim.utils import xdg_data_home

log = logging.getLogger(__name__)

_DATA_DIR = xdg_data_home() / "reclaim"

HISTORY_FILE = _DATA_DIR / "history.json"

# Oldest runs are dropped beyond this many entries.
MAX_RUNS = 1000


def _empty() -> dict[str, Any]:
    return {"runs": []}


def load_history() -> dict[str, Any]:
    """Load the history file, returning an empty history if missing or unreadable."""
    if not HISTORY_FILE.exists():
        return _empty()
    try:
        with open(HISTORY_FILE) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError):
        log.exception("Failed to load history file: %s", HISTORY_FILE)
        return _empty()
    if not isinstance(data, dict) or not isinstance(data.get("runs"), list):
        log.warning("Unexpected history format in %s, starting fresh", HISTORY_FILE)
        return _empty()
    return data


def save_history(data: dict[str, Any]) -> None:
    """Write the history data to disk."""
    try:
        _DATA_DIR.mkdir(parents=True, exist_ok=True)
        with open(HISTORY_FILE, "w") as f:
            json.dump(data, f, indent=2)
    except OSError:
        log.exception("Failed to save history file: %s", HISTORY_FILE)


def append_run(run: dict[str, Any]) -> int:
    """Append one run record, capping the history at ``MAX_RUNS``.

    Returns the number of runs stored afterwards.
    """
    history = load_history()
    runs = history["runs"]
    runs.append(run)
    if len(runs) > MAX_RUNS:
        del runs[: len(runs) - MAX_RUNS]
    save_history(history)
    return len(runs)
