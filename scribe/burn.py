"""List and write commands: enumerate, filter, ask, copy, flush.

``cmd_write`` owns the point of no return. Everything before the device
file is opened is read-only; cancelling or failing a check before that
leaves the device untouched. After it, a failure leaves the device in
whatever partially written state the copy reached.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO, Optional

from .config import Settings
from .discovery import list_block_devices
from .errors import CopyError, DeviceNotEligibleError, ImageTooLargeError
from .log import get_logger
from .menu import select_from
from .models import BlockDevice
from .safety import check_tty, filter_eligible, ineligible_reason

logger = get_logger(__name__)

# Exit codes
EXIT_OK = 0
EXIT_NO_DEVICE = 1

Selector = Callable[[list[BlockDevice]], Optional[BlockDevice]]


def cmd_list(settings: Settings, out, show_all: bool = False) -> int:
    """Print one line per device that passes the write gate.

    Does not need a terminal.
    """
    devices = filter_eligible(list_block_devices(settings), show_all)
    if not devices:
        hint = "" if show_all else " (use --show-all to include flagged devices)"
        out.info("Devices", f"No suitable devices found{hint}.")
        return EXIT_OK
    for device in devices:
        out.line(device.format_line())
    return EXIT_OK


def _default_selector(devices: list[BlockDevice]) -> Optional[BlockDevice]:
    return select_from(devices, render_item=BlockDevice.format_line)


def _normalize_device_name(device: str) -> str:
    """Accept ``sdb`` or ``/dev/sdb``."""
    return Path(device).name


def resolve_explicit_device(
    devices: list[BlockDevice], device: str, show_all: bool = False
) -> BlockDevice:
    """Find *device* in a scan and check it passes the write gate.

    Raises DeviceNotEligibleError if it is unknown or refused.
    """
    name = _normalize_device_name(device)
    for candidate in devices:
        if candidate.device_name == name:
            reason = ineligible_reason(candidate, show_all)
            if reason is not None:
                raise DeviceNotEligibleError(candidate.dev_file, reason)
            return candidate
    raise DeviceNotEligibleError(device, "not a known physical block device")


def check_image_fits(image: Path, device: BlockDevice) -> int:
    """Return the image size in bytes; raise if it exceeds the device."""
    image_bytes = image.stat().st_size
    if image_bytes > device.size.bytes:
        raise ImageTooLargeError(str(image), image_bytes, device.dev_file, device.size.bytes)
    return image_bytes


def copy_image(
    source: BinaryIO,
    target: BinaryIO,
    device_label: str,
    chunk_size: int,
    progress: Optional[Callable[[int], None]] = None,
) -> int:
    """Stream *source* into *target*, flush and fsync. Returns bytes written.

    No retry and no rollback: an OSError mid-stream becomes CopyError.
    """
    written = 0
    try:
        while True:
            chunk = source.read(chunk_size)
            if not chunk:
                break
            target.write(chunk)
            written += len(chunk)
            if progress is not None:
                progress(written)
        target.flush()
        os.fsync(target.fileno())
    except OSError as e:
        raise CopyError(device_label, written, e) from e
    return written


def write_image(image: Path, device_path: str, chunk_size: int, progress=None) -> int:
    """Open image and device file (no truncation) and copy one into the other."""
    with open(image, "rb") as source:
        # O_WRONLY without O_TRUNC: block devices must not be truncated
        try:
            fd = os.open(device_path, os.O_WRONLY)
        except OSError as e:
            raise CopyError(device_path, 0, e) from e
        with open(fd, "wb", closefd=True) as target:
            return copy_image(source, target, device_path, chunk_size, progress)


def cmd_write(
    settings: Settings,
    out,
    image: Path,
    show_all: bool = False,
    device: Optional[str] = None,
    assume_yes: bool = False,
    selector: Optional[Selector] = None,
) -> int:
    """Write *image* to a device the user picks (or names with *device*).

    Sequence: TTY check, scan, gate, menu (or explicit device + confirm),
    size check, copy, fsync.

    Returns EXIT_OK on success or cancellation, EXIT_NO_DEVICE when no
    device passes the gate. Errors are raised as ScribeError subclasses.
    """
    check_tty()

    devices = list_block_devices(settings)

    if device is not None:
        target = resolve_explicit_device(devices, device, show_all)
        if not assume_yes and not out.confirm(
            f"Write {image} to {target.dev_file} ({target.label or 'no label'}, "
            f"{target.size})? All data on it will be lost"
        ):
            out.warn("Cancelled, nothing was written.")
            return EXIT_OK
    else:
        candidates = filter_eligible(devices, show_all)
        if not candidates:
            hint = "" if show_all else " Use --show-all to include flagged devices."
            out.warn(f"No suitable devices found.{hint}")
            return EXIT_NO_DEVICE
        target = (selector or _default_selector)(candidates)
        if target is None:
            out.warn("Cancelled, nothing was written.")
            return EXIT_OK

    image_bytes = check_image_fits(image, target)
    device_path = settings.device_path(target.device_name)
    logger.debug("Writing %d bytes from %s to %s", image_bytes, image, device_path)

    out.info("Write", f"Writing {image} to {target.dev_file}...")

    def progress(written: int) -> None:
        logger.debug("%s: %d/%d bytes", device_path, written, image_bytes)

    written = write_image(image, device_path, settings.chunk_size, progress)
    out.success(f"Wrote {written} bytes to {target.dev_file}; data flushed to the device.")
    return EXIT_OK
