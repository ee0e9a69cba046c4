"""Emptying the freedesktop.org trash stores of a volume."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from reclaim.catalog import volume_root
from reclaim.errors import RecyclePurgeError
from reclaim.utils import same_device, xdg_data_home

log = logging.getLogger(__name__)

_TRASH_SUBDIRS = ("files", "info", "expunged")


class TrashPurger:
    """Empties every trash store that lives on a volume.

    Covers the home trash (``$XDG_DATA_HOME/Trash``) when it is on the
    volume, and the per-user top-level stores ``.Trash/$uid`` and
    ``.Trash-$uid`` at the volume root.
    """

    def trash_dirs(self, volume: str) -> list[Path]:
        """Existing trash directories for *volume*."""
        root = volume_root(volume)
        uid = os.getuid()
        candidates = [
            xdg_data_home() / "Trash",
            root / ".Trash" / str(uid),
            root / f".Trash-{uid}",
        ]

        found: list[Path] = []
        for path in candidates:
            if not path.is_dir() or path in found:
                continue
            if path == candidates[0] and not same_device(path, root):
                continue
            found.append(path)
        return found

    def purge(self, volume: str, apply: bool = True) -> int:
        """Remove every trashed item on *volume*.

        With ``apply=False`` nothing is deleted and the number of items
        that would be removed is returned.

        Returns:
            Number of items removed (or that would be removed).

        Raises:
            RecyclePurgeError: If any item could not be removed.
        """
        count = 0
        errors: list[str] = []

        for trash_dir in self.trash_dirs(volume):
            for subdir in _TRASH_SUBDIRS:
                store = trash_dir / subdir
                if not store.is_dir():
                    continue
                try:
                    items = sorted(store.iterdir())
                except OSError as e:
                    errors.append(f"{store}: {e}")
                    continue
                for item in items:
                    if not apply:
                        count += 1
                        continue
                    try:
                        if item.is_dir() and not item.is_symlink():
                            shutil.rmtree(item)
                        else:
                            item.unlink()
                        count += 1
                    except OSError as e:
                        errors.append(f"{item}: {e}")

        if errors:
            for error in errors:
                log.debug("Trash purge error: %s", error)
            raise RecyclePurgeError(volume, errors)
        return count
