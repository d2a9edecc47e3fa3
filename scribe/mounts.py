"""Mount table parsing (``/proc/mounts`` format)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .errors import MountTableError
from .log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MountEntry:
    """One mounted filesystem."""

    source: str  # "/dev/sda1"
    mount_point: str  # "/media/usb"


def parse_mounts(text: str) -> list[MountEntry]:
    """Parse mount table text into entries.

    Only the first two whitespace-separated fields are used. Blank lines
    and lines with fewer than two fields are skipped.
    """
    entries = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) < 2:
            logger.debug("Skipping malformed mount table line %d: %r", lineno, line)
            continue
        entries.append(MountEntry(source=fields[0], mount_point=fields[1]))
    return entries


def read_mount_table(path: str | Path) -> list[MountEntry]:
    """Read and parse the mount table at *path*.

    Raises MountTableError if the file cannot be read.
    """
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise MountTableError(f"Could not read mount table {path}: {e}") from e
    return parse_mounts(text)
