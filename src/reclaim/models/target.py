"""Resolved reclaim target."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


class TargetKind(enum.Enum):
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True, slots=True)
class ReclaimTarget:
    """Existing filesystem object a catalog entry resolved to.

    For a ``DIRECTORY`` target only the contents are removed, the
    directory itself is kept.
    """

    path: Path
    kind: TargetKind
    entry: str

    @classmethod
    def classify(cls, path: Path, entry: str) -> ReclaimTarget:
        """Build a target from an existing path. Symlinks count as files."""
        kind = TargetKind.DIRECTORY if path.is_dir() and not path.is_symlink() else TargetKind.FILE
        return cls(path=path, kind=kind, entry=entry)

    @property
    def is_dir(self) -> bool:
        return self.kind is TargetKind.DIRECTORY
