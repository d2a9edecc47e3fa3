"""Dataclass contracts for discovered block devices."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

SECTOR_SIZE = 512

_KIB = 1024
_MIB = 1024**2
_GIB = 1024**3
_TIB = 1024**4


class DeviceType(enum.Enum):
    """General type of a block device, guessed from its kernel name.

    FlashDrive and SDMMC are the only types considered safe to write OS
    images to. CDROM and LoopBack are never listed at all.
    """

    FLASH_DRIVE = "Flash Drive"  # USB sticks; some SD adaptors look like this too
    SDMMC = "SD/MMC Card"
    INTERNAL_DRIVE = "Internal Drive"
    EXTERNAL_DRIVE = "External Drive"  # USB HDDs; not yet distinguishable from internal
    CDROM = "CD-ROM"
    LOOPBACK = "LoopBack"

    @property
    def label(self) -> str:
        return self.value

    def is_safe(self) -> bool:
        """True if this type is a write candidate by default."""
        return self in (DeviceType.FLASH_DRIVE, DeviceType.SDMMC)

    def is_excluded(self) -> bool:
        """True if this type is never listed, not even with --show-all."""
        return self in (DeviceType.CDROM, DeviceType.LOOPBACK)

    def __str__(self) -> str:
        return self.value


class Reason(enum.Enum):
    """Risk flags that make a device a poor target for an image write."""

    MOUNTED = "mounted"  # device or one of its partitions is mounted
    ZERO_SIZE = "zero-size"  # usually a card reader with no card inserted
    READ_ONLY = "read-only"  # e.g. SD card with the lock switch set
    LARGE = "large"  # > 36 GiB, more likely a USB HDD than install media

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Size:
    """Device size in 512-byte sectors, as reported by sysfs."""

    sectors: int

    @property
    def bytes(self) -> int:
        return self.sectors * SECTOR_SIZE

    def format(self, precision: int = 1) -> str:
        """Format with binary prefixes, e.g. ``"1.0KiB"`` or ``"29.7GiB"``.

        Sizes under 1 KiB are shown as a plain byte count.
        """
        size = self.bytes
        if size < _KIB:
            return str(size)
        if size < _MIB:
            return f"{size / _KIB:.{precision}f}KiB"
        if size < _GIB:
            return f"{size / _MIB:.{precision}f}MiB"
        if size < _TIB:
            return f"{size / _GIB:.{precision}f}GiB"
        return f"{size / _TIB:.{precision}f}TiB"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class BlockDevice:
    """A block device found under the sysfs block directory.

    Type and flags are a snapshot taken when the record was built; nothing
    is re-read afterwards.
    """

    device_name: str  # "sda", "mmcblk0"
    label: str  # "SanDisk Cruzer Blade" (vendor + model, either may be missing)
    size: Size
    device_type: DeviceType
    flags: tuple[Reason, ...] = ()
    sys_path: Optional[Path] = field(default=None, compare=False)

    @property
    def dev_file(self) -> str:
        return f"/dev/{self.device_name}"

    @property
    def is_safe(self) -> bool:
        """Safe type and no risk flags."""
        return self.device_type.is_safe() and not self.flags

    def format_line(self) -> str:
        """One-line summary used by ``scribe list`` and the selection menu."""
        flags = ",".join(str(flag) for flag in self.flags)
        return (
            f"{self.dev_file:<10} {self.size.format():>10} {self.label:<25} "
            f"{self.device_type.label:<14} {flags}"
        ).rstrip()

    def __str__(self) -> str:
        return self.format_line()
