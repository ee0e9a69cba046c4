"""Exceptions raised by reclaim."""

from __future__ import annotations


class ReclaimError(Exception):
    """Base class for reclaim errors."""


class VolumeNotFound(ReclaimError):
    """Raised when a volume identifier does not resolve to a usable volume."""

    def __init__(self, volume: str, reason: str = "not a mounted volume") -> None:
        self.volume = volume
        super().__init__(f"Volume '{volume}': {reason}")


class RecyclePurgeError(ReclaimError):
    """Raised when the trash store of a volume could not be fully emptied."""

    def __init__(self, volume: str, errors: list[str]) -> None:
        self.volume = volume
        self.errors = errors
        super().__init__(f"Could not empty trash on '{volume}': {len(errors)} error(s)")
