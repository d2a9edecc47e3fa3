"""Block device scanning under the sysfs block directory."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import Optional

from .classify import classify_device_type
from .config import Settings
from .errors import DeviceReadError, SysfsError
from .log import get_logger
from .models import BlockDevice
from .mounts import MountEntry, read_mount_table
from .safety import evaluate_flags
from .sysfs import (
    DEVICE_MARKER,
    has_device_marker,
    read_label,
    read_read_only,
    read_removable,
    read_size,
)

logger = get_logger(__name__)


def build_block_device(dev_dir: Path, mounts: Sequence[MountEntry]) -> BlockDevice:
    """Read, classify and flag one device directory.

    Raises DeviceReadError if a required attribute is missing or unparsable.
    """
    name = dev_dir.name
    label = read_label(dev_dir)
    size = read_size(dev_dir)
    device_type = classify_device_type(name, read_removable(dev_dir))
    flags = evaluate_flags(name, size, device_type, mounts, read_only=read_read_only(dev_dir))
    logger.debug(
        "%s: %s, %s, flags=[%s]",
        name,
        device_type.label,
        size,
        ",".join(str(f) for f in flags),
    )
    return BlockDevice(
        device_name=name,
        label=label,
        size=size,
        device_type=device_type,
        flags=flags,
        sys_path=dev_dir,
    )


def _list_entries(sys_block: Path) -> list[Path]:
    try:
        return sorted(sys_block.iterdir())
    except OSError as e:
        raise SysfsError(f"Could not list block devices in {sys_block}: {e}") from e


def iter_block_devices(
    settings: Settings,
    on_error: Optional[Callable[[DeviceReadError], None]] = None,
) -> Iterator[BlockDevice]:
    """Yield one BlockDevice per physical entry of the block directory.

    Every call lists the directory and reads the mount table afresh; the
    mount table is read once and shared by all entries of this scan.
    Entries without a ``device`` sub-directory (loop and other virtual
    devices) are skipped.

    A DeviceReadError for one entry is passed to *on_error* and the scan
    continues. Without *on_error* the error propagates and ends the scan.

    Raises:
        SysfsError: the block directory cannot be listed.
        MountTableError: the mount table cannot be read.
    """
    sys_block = Path(settings.sys_block)
    entries = _list_entries(sys_block)
    mounts = read_mount_table(settings.mounts)

    for dev_dir in entries:
        if not has_device_marker(dev_dir):
            logger.debug("Skipping %s: no %s directory", dev_dir.name, DEVICE_MARKER)
            continue
        try:
            device = build_block_device(dev_dir, mounts)
        except DeviceReadError as e:
            if on_error is None:
                raise
            logger.debug("Error reading %s: %s", dev_dir.name, e)
            on_error(e)
            continue
        yield device


def list_block_devices(settings: Settings) -> list[BlockDevice]:
    """Scan all devices, aborting on the first unreadable one."""
    return list(iter_block_devices(settings))
