"""Append-only action log for reclaim runs."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

log = logging.getLogger(__name__)

EchoCallback = Callable[[str], None]


class LogSink:
    """Writes one timestamped line per action.

    Lines go to an optional plain-text file (opened in append mode for each
    write) and to an optional *echo* callback, typically the console.
    """

    def __init__(self, path: Path | str | None = None, echo: EchoCallback | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self._echo = echo

    def write(self, message: str) -> str:
        """Record *message* and return the formatted line."""
        line = f"{datetime.now().isoformat(timespec='seconds')} {message}"
        log.info("%s", message)
        if self.path is not None:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.path, "a", encoding="utf-8") as f:
                    f.write(line + "\n")
            except OSError as e:
                log.warning("Could not write to log file %s: %s", self.path, e)
        if self._echo is not None:
            self._echo(line)
        return line
