"""Reclaim data models."""

from reclaim.models.target import ReclaimTarget, TargetKind
from reclaim.models.report import ReclaimReport, SizeAccumulator
from reclaim.models.volume import VolumeInfo

__all__ = [
    "ReclaimReport",
    "ReclaimTarget",
    "SizeAccumulator",
    "TargetKind",
    "VolumeInfo",
]
