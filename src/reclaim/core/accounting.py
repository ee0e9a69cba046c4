"""How the outcome of a directory clean is attributed to the accumulator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from reclaim.models.report import SizeAccumulator

# (size_bytes, still_exists) for every file examined in a directory target
FileOutcome = tuple[int, bool]


class AccountingPolicy(ABC):
    """Attributes a directory target's size to removed / not removed."""

    name: str = ""

    @abstractmethod
    def attribute(self, acc: SizeAccumulator, dir_size: int, outcomes: Sequence[FileOutcome]) -> None:
        """Update *acc* after every file of a directory has been checked."""

    @staticmethod
    def _count_files(acc: SizeAccumulator, outcomes: Sequence[FileOutcome]) -> None:
        for _size, exists in outcomes:
            if exists:
                acc.files_not_removed += 1
            else:
                acc.files_removed += 1


class CoarseAccounting(AccountingPolicy):
    """Whole-directory attribution.

    A single surviving file sends the entire directory size to
    ``not_removed``; otherwise the entire size counts as ``removed``.
    """

    name = "coarse"

    def attribute(self, acc: SizeAccumulator, dir_size: int, outcomes: Sequence[FileOutcome]) -> None:
        self._count_files(acc, outcomes)
        if any(exists for _size, exists in outcomes):
            acc.add_not_removed(dir_size)
        else:
            acc.add_removed(dir_size)


class PerFileAccounting(AccountingPolicy):
    """Each file's own size goes to ``removed`` or ``not_removed``."""

    name = "per-file"

    def attribute(self, acc: SizeAccumulator, dir_size: int, outcomes: Sequence[FileOutcome]) -> None:
        self._count_files(acc, outcomes)
        for size, exists in outcomes:
            if exists:
                acc.add_not_removed(size)
            else:
                acc.add_removed(size)


COARSE = CoarseAccounting()
PER_FILE = PerFileAccounting()

POLICIES: dict[str, AccountingPolicy] = {p.name: p for p in (COARSE, PER_FILE)}


def get_policy(name: str) -> AccountingPolicy:
    """Look up a policy by name ('coarse' or 'per-file')."""
    try:
        return POLICIES[name]
    except KeyError:
        raise ValueError(f"Unknown accounting policy '{name}', expected one of: {', '.join(POLICIES)}") from None
