"""Shared utility functions."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterator

log = logging.getLogger(__name__)

GIB = 1024**3


def xdg_cache_home() -> Path:
    """Return XDG_CACHE_HOME, defaulting to ~/.cache."""
    return Path(os.environ.get("XDG_CACHE_HOME", Path.home() / ".cache"))


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def xdg_data_home() -> Path:
    """Return XDG_DATA_HOME, defaulting to ~/.local/share."""
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def iter_files(path: Path | str) -> Iterator[os.DirEntry]:
    """Yield every regular file (or symlink) below *path*.

    Walks with ``os.scandir`` and never follows directory symlinks.
    Directories that cannot be listed are skipped silently, so callers
    see whatever part of the tree was readable.
    """
    stack: list[Path | str] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError:
            log.debug("Cannot list: %s", current)
            continue
        subdirs = []
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(entry.path)
                else:
                    yield entry
            except OSError:
                log.debug("Cannot access: %s", entry.path)
        stack.extend(reversed(subdirs))


def entry_size(entry: os.DirEntry) -> int:
    """Size of a scandir entry without following symlinks, 0 on error."""
    try:
        return entry.stat(follow_symlinks=False).st_size
    except OSError:
        return 0


def mtime_of(path: Path | str) -> float | None:
    """Modification time of *path* without following symlinks."""
    try:
        return os.lstat(path).st_mtime
    except OSError:
        return None


def force_unlink(path: Path | str) -> None:
    """Delete a single file, clearing its read-only bit first.

    Errors are swallowed; callers verify the outcome with an existence check.
    """
    try:
        mode = os.lstat(path).st_mode
        if not stat.S_ISLNK(mode) and not mode & stat.S_IWUSR:
            os.chmod(path, mode | stat.S_IWUSR)
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        log.debug("Cannot delete %s: %s", path, e)


def lexists(path: Path | str) -> bool:
    """Whether *path* exists, counting dangling symlinks."""
    return os.path.lexists(path)


def same_device(a: Path | str, b: Path | str) -> bool:
    """Whether *a* and *b* live on the same filesystem. False if either is unreadable."""
    try:
        return os.stat(a).st_dev == os.stat(b).st_dev
    except OSError:
        return False


def prune_empty_dirs(root: Path) -> int:
    """Remove empty directories below *root*, keeping *root* itself.

    Returns the number of directories removed.
    """
    removed = 0
    for dirpath, _dirnames, _filenames in os.walk(root, topdown=False):
        if Path(dirpath) == root:
            continue
        try:
            os.rmdir(dirpath)
            removed += 1
        except OSError:
            pass
    return removed


def bytes_to_gib(size_bytes: int) -> float:
    """Convert a byte count to gibibytes rounded to 2 decimals."""
    return round(max(size_bytes, 0) / GIB, 2)


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes == 0:
        return "0 B"

    units = ("B", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    for unit in units[:-1]:
        if abs(value) < 1024:
            return f"{value:.1f} {unit}" if unit != "B" else f"{int(value)} B"
        value /= 1024
    return f"{value:.1f} {units[-1]}"


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time as a human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds) // 60
    secs = seconds - minutes * 60
    return f"{minutes}m {secs:.0f}s"
