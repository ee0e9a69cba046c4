"""Capacity information for a mounted volume."""

from __future__ import annotations

import logging
import os
import shutil

from reclaim.catalog import volume_root
from reclaim.errors import VolumeNotFound
from reclaim.models.volume import VolumeInfo

log = logging.getLogger(__name__)


class VolumeInspector:
    """Reads total and free space of a volume, fresh on every call."""

    def inspect(self, volume: str) -> VolumeInfo:
        """Return capacity of *volume*.

        Raises:
            VolumeNotFound: If *volume* is not the mount point of a mounted
                filesystem.
        """
        root = volume_root(volume)
        try:
            root = root.resolve(strict=True)
        except OSError:
            raise VolumeNotFound(volume, "path does not exist") from None

        if not os.path.ismount(root):
            raise VolumeNotFound(volume)

        try:
            usage = shutil.disk_usage(root)
        except OSError as e:
            raise VolumeNotFound(volume, f"cannot read capacity ({e})") from e

        info = VolumeInfo(
            volume=volume,
            mount_point=str(root),
            total_bytes=usage.total,
            free_bytes=usage.free,
        )
        log.debug("Volume %s: %d of %d bytes free", root, info.free_bytes, info.total_bytes)
        return info


def inspect_volume(volume: str) -> VolumeInfo:
    """Shortcut for ``VolumeInspector().inspect(volume)``."""
    return VolumeInspector().inspect(volume)
