"""Volume capacity snapshot."""

from __future__ import annotations

from dataclasses import dataclass

from reclaim.utils import bytes_to_gib


@dataclass(frozen=True, slots=True)
class VolumeInfo:
    """Total and free capacity of one mounted volume."""

    volume: str
    mount_point: str
    total_bytes: int
    free_bytes: int

    @property
    def used_bytes(self) -> int:
        return self.total_bytes - self.free_bytes

    @property
    def total_gib(self) -> float:
        return bytes_to_gib(self.total_bytes)

    @property
    def free_gib(self) -> float:
        return bytes_to_gib(self.free_bytes)

    @property
    def percent_free(self) -> float:
        if self.total_bytes <= 0:
            return 0.0
        return round(self.free_bytes / self.total_bytes * 100, 1)
