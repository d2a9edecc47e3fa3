"""Attribute reads from a single sysfs block device directory."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .errors import DeviceReadError
from .models import Size

# Sub-directory present for physical disks; loop and other virtual devices lack it
DEVICE_MARKER = "device"


def read_attribute(dev_dir: Path, name: str) -> Optional[str]:
    """Read and strip an attribute file, or return None if it does not exist.

    *name* may be a relative path such as ``device/vendor``. Errors other
    than a missing file raise DeviceReadError.
    """
    try:
        return (dev_dir / name).read_text(encoding="utf-8", errors="replace").strip()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise DeviceReadError(dev_dir.name, f"could not read '{name}': {e}") from e


def read_size(dev_dir: Path) -> Size:
    """Read the ``size`` attribute (decimal sector count).

    Unlike the other attributes, size is required.
    """
    raw = read_attribute(dev_dir, "size")
    if raw is None:
        raise DeviceReadError(dev_dir.name, "missing 'size' attribute")
    try:
        sectors = int(raw)
    except ValueError:
        raise DeviceReadError(dev_dir.name, f"could not parse device size {raw!r}") from None
    if sectors < 0:
        raise DeviceReadError(dev_dir.name, f"negative device size {sectors}")
    return Size(sectors)


def read_label(dev_dir: Path) -> str:
    """Vendor and model joined by a space; either half may be absent."""
    parts = [
        value
        for value in (
            read_attribute(dev_dir, "device/vendor"),
            read_attribute(dev_dir, "device/model"),
        )
        if value
    ]
    return " ".join(parts)


def read_removable(dev_dir: Path) -> Optional[str]:
    return read_attribute(dev_dir, "removable")


def read_read_only(dev_dir: Path) -> bool:
    """True when the ``ro`` attribute is present and set."""
    return read_attribute(dev_dir, "ro") == "1"


def has_device_marker(dev_dir: Path) -> bool:
    return (dev_dir / DEVICE_MARKER).is_dir()
