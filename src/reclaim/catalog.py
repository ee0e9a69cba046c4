"""Static catalog of junk locations and its resolution against a volume."""

from __future__ import annotations

import glob
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from reclaim.utils import xdg_cache_home, xdg_config_home, xdg_data_home

log = logging.getLogger(__name__)

# Ordered; relative entries are taken relative to the volume root.
DEFAULT_CATALOG: tuple[str, ...] = (
    # Package manager update caches
    "var/cache/apt/archives/*.deb",
    "var/cache/apt/archives/partial",
    "var/cache/dnf",
    "var/cache/pacman/pkg",
    # Installer leftovers and crash dumps
    "var/lib/systemd/coredump",
    "var/tmp",
    # Rotated logs
    "var/log/*.gz",
    "var/log/*.[0-9]",
    "var/log/journal/*/*@*.journal~",
    # Browser caches
    "${XDG_CACHE_HOME}/mozilla/firefox",
    "${XDG_CACHE_HOME}/chromium",
    "${XDG_CACHE_HOME}/google-chrome",
    "${XDG_CACHE_HOME}/BraveSoftware/Brave-Browser",
    "${XDG_CACHE_HOME}/microsoft-edge",
    # Desktop caches
    "${XDG_CACHE_HOME}/thumbnails",
)

_PLACEHOLDER = re.compile(r"\$\{(\w+)\}|\$(\w+)")


def _placeholder_values(volume: str) -> dict[str, str]:
    values = {
        "HOME": str(Path.home()),
        "XDG_CACHE_HOME": str(xdg_cache_home()),
        "XDG_CONFIG_HOME": str(xdg_config_home()),
        "XDG_DATA_HOME": str(xdg_data_home()),
        "TMPDIR": tempfile.gettempdir(),
    }
    values.update(os.environ)
    values["VOLUME"] = str(volume_root(volume))
    return values


def volume_root(volume: str) -> Path:
    """Absolute root path of *volume*."""
    return Path(volume).expanduser().absolute()


def resolve_placeholders(entry: str, volume: str) -> str:
    """Substitute ``$VAR`` and ``${VAR}`` placeholders and a leading ``~``.

    Unknown placeholders are left as they are.
    """
    values = _placeholder_values(volume)

    def _sub(match: re.Match) -> str:
        name = match.group(1) or match.group(2)
        return values.get(name, match.group(0))

    resolved = _PLACEHOLDER.sub(_sub, entry)
    return os.path.expanduser(resolved)


def expand_entry(entry: str, volume: str) -> list[Path]:
    """Resolve one catalog entry to the existing paths it names, sorted."""
    pattern = resolve_placeholders(entry, volume)
    path = Path(pattern)
    if not path.is_absolute():
        path = volume_root(volume) / path

    if not glob.has_magic(str(path)):
        return [path] if os.path.lexists(path) else []

    anchor = Path(path.anchor)
    try:
        return sorted(anchor.glob(str(path.relative_to(anchor))))
    except (OSError, ValueError):
        log.debug("Cannot expand %s", path)
        return []


def load_catalog(settings: Any = None) -> tuple[str, ...]:
    """Catalog from settings, falling back to ``DEFAULT_CATALOG``.

    ``catalog`` replaces the default list; ``catalog_extra`` is appended.
    """
    if settings is None:
        return DEFAULT_CATALOG

    catalog = settings.get("catalog")
    if isinstance(catalog, list) and all(isinstance(e, str) for e in catalog):
        entries = list(catalog)
    else:
        if catalog is not None:
            log.warning("Ignoring invalid 'catalog' setting, using defaults")
        entries = list(DEFAULT_CATALOG)

    extra = settings.get("catalog_extra", [])
    if isinstance(extra, list):
        entries.extend(e for e in extra if isinstance(e, str))
    return tuple(entries)
