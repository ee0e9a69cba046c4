"""Scan-and-reclaim engine."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Iterable, Protocol

from reclaim.catalog import DEFAULT_CATALOG, expand_entry, volume_root
from reclaim.core.accounting import COARSE, AccountingPolicy
from reclaim.core.trash import TrashPurger
from reclaim.errors import RecyclePurgeError, VolumeNotFound
from reclaim.logsink import LogSink
from reclaim.models.report import ReclaimReport, SizeAccumulator
from reclaim.models.target import ReclaimTarget, TargetKind
from reclaim.utils import (
    bytes_to_human,
    entry_size,
    force_unlink,
    format_elapsed,
    iter_files,
    lexists,
    mtime_of,
    prune_empty_dirs,
    same_device,
)

log = logging.getLogger(__name__)

_ONE_DAY = 86400  # seconds


class Purger(Protocol):
    def purge(self, volume: str, apply: bool = True) -> int: ...


class _Seen:
    """Targets already handled in one run.

    A path is covered when it was a target itself or lies below a
    directory target.
    """

    def __init__(self) -> None:
        self.paths: set[Path] = set()
        self.dirs: set[Path] = set()

    def add(self, target: ReclaimTarget) -> None:
        self.paths.add(target.path)
        if target.kind is TargetKind.DIRECTORY:
            self.dirs.add(target.path)

    def covers(self, path: Path) -> bool:
        return path in self.paths or any(parent in self.dirs for parent in path.parents)


class Reclaimer:
    """Walks a catalog of junk locations, measuring and optionally deleting.

    Every run owns a fresh ``SizeAccumulator``; nothing is shared between
    runs except the injected log sink.
    """

    def __init__(
        self,
        sink: LogSink | None = None,
        purger: Purger | None = None,
        policy: AccountingPolicy = COARSE,
    ) -> None:
        self.sink = sink or LogSink()
        self.purger = purger or TrashPurger()
        self.policy = policy
        self._last_totals: SizeAccumulator | None = None

    def reclaim(
        self,
        volume: str,
        catalog: Iterable[str] = DEFAULT_CATALOG,
        apply: bool = False,
        *,
        older_than_days: float | None = None,
        purge_trash: bool = True,
    ) -> ReclaimReport:
        """Process every catalog entry on *volume* and report the totals.

        Args:
            volume: Volume root, e.g. ``/`` or ``/mnt/data``.
            catalog: Ordered path patterns; relative ones are taken from the
                volume root.
            apply: Delete what is found. When False nothing is deleted and
                the report's removed total is 0.
            older_than_days: Only consider files last modified more than
                this many days ago. None considers every file.
            purge_trash: Empty the volume's trash stores after the catalog.

        Raises:
            VolumeNotFound: If the volume root does not exist.
        """
        root = volume_root(volume)
        if not root.is_dir():
            raise VolumeNotFound(volume, "volume root does not exist")

        catalog = list(catalog)
        cutoff = time.time() - older_than_days * _ONE_DAY if older_than_days is not None else None
        acc = SizeAccumulator()
        started = time.monotonic()

        mode = "Reclaiming" if apply else "Dry run on"
        self.sink.write(f"{mode} {root}: {len(catalog)} catalog entries")
        if cutoff is not None:
            self.sink.write(f"Only files older than {older_than_days:g} days are considered")

        seen = _Seen()
        for entry in catalog:
            for target in self.resolve(entry, volume):
                if seen.covers(target.path):
                    log.debug("Already processed: %s", target.path)
                    continue
                try:
                    self._process(target, acc, apply, cutoff, seen)
                except Exception:
                    log.exception("Failed to process %s (from '%s')", target.path, entry)
                seen.add(target)

        if purge_trash:
            self._purge_trash(volume, apply)

        self._last_totals = acc
        report = ReclaimReport.from_accumulator(volume, acc, apply=apply)
        self.sink.write(
            f"Junk found: {report.junk_found} GiB, removed: {report.junk_removed} GiB, "
            f"not removed: {report.junk_not_removed} GiB ({format_elapsed(time.monotonic() - started)})"
        )
        return report

    def get_last_totals(self) -> SizeAccumulator | None:
        """Raw byte totals of the most recent run."""
        return self._last_totals

    def resolve(self, entry: str, volume: str) -> list[ReclaimTarget]:
        """Existing targets for one catalog entry, in sorted order."""
        try:
            paths = expand_entry(entry, volume)
        except Exception:
            log.exception("Cannot resolve catalog entry '%s'", entry)
            return []
        if not paths:
            log.debug("Nothing at '%s', skipping", entry)

        root = volume_root(volume)
        targets = []
        for path in paths:
            if path.is_symlink() and path.is_dir():
                log.info("Skipping %s: symlink to a directory", path)
                continue
            # A symlink lives where its parent directory is.
            if not same_device(path.parent if path.is_symlink() else path, root):
                log.info("Skipping %s: not on %s", path, root)
                continue
            targets.append(ReclaimTarget.classify(path, entry))
        return targets

    def _process(
        self,
        target: ReclaimTarget,
        acc: SizeAccumulator,
        apply: bool,
        cutoff: float | None,
        seen: _Seen,
    ) -> None:
        if target.is_dir:
            self._reclaim_directory(target, acc, apply, cutoff, seen)
        else:
            self._reclaim_file(target, acc, apply, cutoff)

    def _reclaim_directory(
        self,
        target: ReclaimTarget,
        acc: SizeAccumulator,
        apply: bool,
        cutoff: float | None,
        seen: _Seen,
    ) -> None:
        files = [
            (entry.path, entry_size(entry))
            for entry in iter_files(target.path)
            if _is_candidate(entry.path, cutoff) and not seen.covers(Path(entry.path))
        ]
        dir_size = sum(size for _path, size in files)
        acc.add_found(dir_size)

        if apply and files:
            self.sink.write(f"Removing {len(files)} files ({bytes_to_human(dir_size)}) from {target.path}")

        outcomes = []
        for path, size in files:
            if apply:
                force_unlink(path)
            outcomes.append((size, lexists(path)))
        self.policy.attribute(acc, dir_size, outcomes)

        if apply:
            prune_empty_dirs(target.path)
        else:
            log.debug("Would remove %d files (%d bytes) from %s", len(files), dir_size, target.path)

    def _reclaim_file(
        self,
        target: ReclaimTarget,
        acc: SizeAccumulator,
        apply: bool,
        cutoff: float | None,
    ) -> None:
        if not _is_candidate(target.path, cutoff):
            return
        try:
            size = os.lstat(target.path).st_size
        except OSError:
            log.debug("Cannot access: %s", target.path)
            return
        acc.add_found(size)

        if apply:
            self.sink.write(f"Removing {target.path} ({bytes_to_human(size)})")
            force_unlink(target.path)

        if lexists(target.path):
            acc.add_not_removed(size)
            acc.files_not_removed += 1
        else:
            acc.add_removed(size)
            acc.files_removed += 1

    def _purge_trash(self, volume: str, apply: bool) -> None:
        try:
            count = self.purger.purge(volume, apply=apply)
        except RecyclePurgeError as e:
            self.sink.write(f"Emptying trash failed: {e}")
            return
        except Exception as e:
            log.exception("Trash purge on %s failed", volume)
            self.sink.write(f"Emptying trash failed: {e}")
            return
        if apply:
            self.sink.write(f"Emptied trash: {count} items removed")
        else:
            self.sink.write(f"Trash holds {count} items (dry run, not emptied)")


def _is_candidate(path: Path | str, cutoff: float | None) -> bool:
    if cutoff is None:
        return True
    mtime = mtime_of(path)
    return mtime is not None and mtime < cutoff


def reclaim(
    volume: str,
    catalog: Iterable[str] = DEFAULT_CATALOG,
    apply: bool = False,
    **kwargs,
) -> ReclaimReport:
    """Run a one-off ``Reclaimer`` with default collaborators."""
    return Reclaimer().reclaim(volume, catalog, apply, **kwargs)
