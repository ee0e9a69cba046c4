"""Size accumulator and the final reclaim report."""

from __future__ import annotations

from dataclasses import dataclass

from reclaim.utils import bytes_to_gib


@dataclass(slots=True)
class SizeAccumulator:
    """Running byte totals for a single reclaim run."""

    found: int = 0
    removed: int = 0
    not_removed: int = 0
    files_removed: int = 0
    files_not_removed: int = 0

    def add_found(self, size: int) -> None:
        self.found += size

    def add_removed(self, size: int) -> None:
        self.removed += size

    def add_not_removed(self, size: int) -> None:
        self.not_removed += size


@dataclass(frozen=True, slots=True)
class ReclaimReport:
    """Immutable result of a reclaim run, in gibibytes.

    ``junk_removed`` is always 0 for a dry run so that the report never
    claims space that was only measured.
    """

    volume: str
    dry_run: bool
    junk_found: float = 0.0
    junk_removed: float = 0.0
    junk_not_removed: float = 0.0
    files_removed: int = 0

    @classmethod
    def from_accumulator(cls, volume: str, acc: SizeAccumulator, *, apply: bool) -> ReclaimReport:
        return cls(
            volume=volume,
            dry_run=not apply,
            junk_found=bytes_to_gib(acc.found),
            junk_removed=bytes_to_gib(acc.removed) if apply else 0.0,
            junk_not_removed=bytes_to_gib(acc.not_removed),
            files_removed=acc.files_removed if apply else 0,
        )

    def to_dict(self) -> dict[str, float]:
        """The three report fields under their external names."""
        return {
            "JunkFound": self.junk_found,
            "JunkRemoved": self.junk_removed,
            "JunkNotRemoved": self.junk_not_removed,
        }
