"""Safety checks: risk flags, the write-eligibility gate and the TTY guard."""

from __future__ import annotations

import sys
from collections.abc import Iterable

from .errors import NoTerminalError
from .models import BlockDevice, DeviceType, Reason, Size
from .mounts import MountEntry

# ~32 GB rated media plus headroom for manufacturer size variance
LARGE_DEVICE_BYTES = 36 * 1024**3


def is_mounted(dev_file: str, mounts: Iterable[MountEntry]) -> bool:
    """True if any mount source starts with *dev_file*.

    String-prefix matching also catches mounted partitions (``/dev/sda1``
    for ``/dev/sda``). Known limitation: it also matches any device whose
    name has *dev_file* as a literal prefix (``/dev/sdaa`` for ``/dev/sda``).
    """
    return any(entry.source.startswith(dev_file) for entry in mounts)


def evaluate_flags(
    device_name: str,
    size: Size,
    device_type: DeviceType,
    mounts: Iterable[MountEntry],
    read_only: bool = False,
) -> tuple[Reason, ...]:
    """Compute the risk flags for one device.

    Flags are independent; the returned order is always Mounted, ZeroSize,
    ReadOnly, Large. ``device_type`` is accepted so type-derived risks can
    be added alongside the size-derived ones.
    """
    flags: list[Reason] = []
    if is_mounted(f"/dev/{device_name}", mounts):
        flags.append(Reason.MOUNTED)
    if size.sectors == 0:
        flags.append(Reason.ZERO_SIZE)
    if read_only:
        flags.append(Reason.READ_ONLY)
    if size.bytes > LARGE_DEVICE_BYTES:
        flags.append(Reason.LARGE)
    return tuple(flags)


def include(device: BlockDevice, show_all: bool = False) -> bool:
    """The single gate every listing and write target passes through.

    Excluded types (CD-ROM, loopback) never pass. Otherwise ``show_all``
    lets everything through; by default only unflagged flash/SD media pass.
    """
    if device.device_type.is_excluded():
        return False
    return show_all or (device.device_type.is_safe() and not device.flags)


def filter_eligible(devices: Iterable[BlockDevice], show_all: bool = False) -> list[BlockDevice]:
    return [device for device in devices if include(device, show_all)]


def ineligible_reason(device: BlockDevice, show_all: bool = False) -> str | None:
    """Explain why ``include`` rejects *device*, or None if it passes."""
    if include(device, show_all):
        return None
    if device.device_type.is_excluded():
        return f"{device.device_type.label} devices are never write targets"
    if not device.device_type.is_safe():
        return f"{device.device_type.label} is not a removable flash or SD device"
    flags = ", ".join(str(flag) for flag in device.flags)
    return f"device is flagged: {flags}"


def check_tty() -> None:
    """Raise NoTerminalError unless both stdin and stdout are terminals."""
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise NoTerminalError("scribe requires an interactive terminal and none was found.")
