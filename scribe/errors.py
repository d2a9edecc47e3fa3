"""Exception hierarchy and formatted error messages for scribe."""

from __future__ import annotations

import textwrap

from .theme import get_theme


def format_error(
    error_type: str,
    message: str,
    context: dict[str, str] | None = None,
    recovery: str | None = None,
) -> str:
    """Format an error message with optional context and recovery guidance.

    Args:
        error_type: Category of error (e.g., "No terminal", "Copy failed")
        message: Primary error description
        context: Optional dict of contextual information (device, image, path, ...)
        recovery: Optional prose with recovery steps, one step per line

    Returns:
        Multi-line string wrapped to 80 columns, ready for stderr
    """
    t = get_theme()
    lines = [f"{t.error}[FAIL]{t.reset} {error_type}: {message}"]

    if context:
        parts = [f"{key} '{value}'" for key, value in context.items()]
        lines.append("")
        lines.append(textwrap.fill("Affected: " + ", ".join(parts) + ".", width=80))

    if recovery:
        lines.append("")
        for line in recovery.split("\n"):
            lines.append(textwrap.fill(line, width=80) if line.strip() else "")

    return "\n".join(lines)


# Keyed by the ``template`` attribute of the exception classes below.
ERROR_TEMPLATES: dict[str, dict[str, str]] = {
    "no_terminal": {
        "error_type": "No terminal",
        "recovery_template": (
            "1. Run scribe directly from an interactive shell, not through a pipe\n"
            "2. Use `scribe list` to inspect devices non-interactively"
        ),
    },
    "sysfs_unreadable": {
        "error_type": "Device scan failed",
        "recovery_template": (
            "1. scribe only supports Linux; check that /sys/block exists\n"
            "2. If running in a container, bind-mount /sys read-only"
        ),
    },
    "mounts_unreadable": {
        "error_type": "Mount table unreadable",
        "recovery_template": (
            "1. Check that /proc is mounted: `ls /proc/mounts`\n"
            "2. Point SCRIBE_MOUNTS at a readable mount table"
        ),
    },
    "device_unreadable": {
        "error_type": "Device scan failed",
        "recovery_template": (
            "1. Re-plug the device and run `scribe list` again\n"
            "2. Check kernel messages: `dmesg | tail -20`"
        ),
    },
    "not_eligible": {
        "error_type": "Device refused",
        "recovery_template": (
            "1. Run `scribe list --show-all` to see why the device is flagged\n"
            "2. Unmount the device if it is mounted: `udisksctl unmount -b <partition>`\n"
            "3. Pass --show-all to allow flagged or internal devices"
        ),
    },
    "image_too_large": {
        "error_type": "Image too large",
        "recovery_template": (
            "1. Use a larger card or flash drive\n"
            "2. Check the image file is not corrupt or truncated"
        ),
    },
    "copy_failed": {
        "error_type": "Copy failed",
        "recovery_template": (
            "1. The device now holds a partial image and will not boot\n"
            "2. Check the connection and kernel messages: `dmesg | tail -20`\n"
            "3. Run the write again once the device is stable"
        ),
    },
}


def get_recovery_text(template_key: str) -> str:
    """Get recovery text for an error template."""
    return ERROR_TEMPLATES[template_key]["recovery_template"]


class ScribeError(Exception):
    """Base for all scribe errors."""

    template: str | None = None

    @property
    def error_type(self) -> str:
        if self.template is None:
            return "Error"
        return ERROR_TEMPLATES[self.template]["error_type"]

    @property
    def recovery(self) -> str | None:
        if self.template is None:
            return None
        return get_recovery_text(self.template)

    @property
    def context(self) -> dict[str, str]:
        return {}


class SysfsError(ScribeError):
    """The block device directory could not be listed."""

    template = "sysfs_unreadable"


class MountTableError(ScribeError):
    """The mount table could not be read."""

    template = "mounts_unreadable"


class NoTerminalError(ScribeError):
    """stdin or stdout is not attached to an interactive terminal."""

    template = "no_terminal"


class DeviceReadError(ScribeError):
    """An attribute of a single device could not be read or parsed."""

    template = "device_unreadable"

    def __init__(self, device_name: str, message: str):
        super().__init__(f"{device_name}: {message}")
        self.device_name = device_name

    @property
    def context(self) -> dict[str, str]:
        return {"device": self.device_name}


class DeviceNotEligibleError(ScribeError):
    """An explicitly named device is unknown or fails the write gate."""

    template = "not_eligible"

    def __init__(self, device: str, reason: str):
        super().__init__(f"Refusing to write to {device}: {reason}")
        self.device = device
        self.reason = reason

    @property
    def context(self) -> dict[str, str]:
        return {"device": self.device}


class ImageTooLargeError(ScribeError):
    """The image does not fit on the selected device."""

    template = "image_too_large"

    def __init__(self, image: str, image_bytes: int, device: str, device_bytes: int):
        super().__init__(
            f"{image} is {image_bytes} bytes but {device} only holds {device_bytes} bytes"
        )
        self.image = image
        self.device = device

    @property
    def context(self) -> dict[str, str]:
        return {"image": self.image, "device": self.device}


class CopyError(ScribeError):
    """I/O failure while streaming the image to the device."""

    template = "copy_failed"

    def __init__(self, device: str, bytes_written: int, cause: OSError):
        super().__init__(f"Write to {device} failed after {bytes_written} bytes: {cause}")
        self.device = device
        self.bytes_written = bytes_written

    @property
    def context(self) -> dict[str, str]:
        return {"device": self.device, "written": str(self.bytes_written)}
