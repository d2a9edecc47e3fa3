"""Device type classification from kernel device names."""

from __future__ import annotations

from typing import Optional

from .models import DeviceType


def classify_device_type(device_name: str, removable: Optional[str]) -> DeviceType:
    """Guess the general type of a block device.

    This is a heuristic, not a guarantee: only the kernel name prefix and the
    sysfs ``removable`` attribute are considered. Some SD adaptors present
    as ``sd*`` flash drives, and USB hard disks are indistinguishable from
    internal ones.

    Args:
        device_name: Kernel name, e.g. ``"sda"`` or ``"mmcblk0"``.
        removable: Contents of the ``removable`` attribute, or None if the
            file is absent. Absent is treated as not removable.

    Returns:
        SDMMC for ``mmcblk*``; for ``sd*``, InternalDrive when removable is
        ``"0"`` or absent, FlashDrive otherwise; CDROM for ``sr*``; LoopBack
        for ``loop*``; InternalDrive for anything else.
    """
    if device_name.startswith("mmcblk"):
        return DeviceType.SDMMC
    if device_name.startswith("sd"):
        if removable is None or removable.strip() == "0":
            return DeviceType.INTERNAL_DRIVE
        return DeviceType.FLASH_DRIVE
    if device_name.startswith("sr"):
        return DeviceType.CDROM
    if device_name.startswith("loop"):
        return DeviceType.LOOPBACK
    # Unknown devices are never offered as write targets
    return DeviceType.INTERNAL_DRIVE
