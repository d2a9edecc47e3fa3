"""Shared test fixtures: fake sysfs trees and mount tables."""
from pathlib import Path
from typing import Optional

import pytest

from scribe.config import Settings
from scribe.theme import reset_theme

GIB_SECTORS = 1024**3 // 512

# A typical desktop: NVMe root disk, one USB stick, one SD card, a DVD drive
DEFAULT_MOUNTS = """\
/dev/nvme0n1p2 / ext4 rw,relatime 0 0
/dev/nvme0n1p1 /boot/efi vfat rw,relatime 0 0
proc /proc proc rw,nosuid,nodev,noexec,relatime 0 0
tmpfs /run tmpfs rw,nosuid,nodev 0 0
"""


def make_device(
    root: Path,
    name: str,
    *,
    size: Optional[str] = "0",
    removable: Optional[str] = None,
    vendor: Optional[str] = None,
    model: Optional[str] = None,
    ro: Optional[str] = None,
    marker: bool = True,
) -> Path:
    """Create a sysfs-style directory for one block device.

    Attributes left as None are not created at all.
    """
    dev_dir = root / name
    dev_dir.mkdir(parents=True)
    if marker:
        (dev_dir / "device").mkdir()
    if size is not None:
        (dev_dir / "size").write_text(size + "\n")
    if removable is not None:
        (dev_dir / "removable").write_text(removable + "\n")
    if ro is not None:
        (dev_dir / "ro").write_text(ro + "\n")
    if vendor is not None:
        (dev_dir / "device" / "vendor").write_text(vendor + "  \n")
    if model is not None:
        (dev_dir / "device" / "model").write_text(model + "\n")
    return dev_dir


@pytest.fixture(autouse=True)
def plain_theme(monkeypatch):
    """Force the no-color theme so output assertions see plain text."""
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    reset_theme()
    yield
    reset_theme()


@pytest.fixture
def sys_block(tmp_path):
    block = tmp_path / "block"
    block.mkdir()
    return block


@pytest.fixture
def mounts_file(tmp_path):
    path = tmp_path / "mounts"
    path.write_text(DEFAULT_MOUNTS)
    return path


@pytest.fixture
def dev_dir(tmp_path):
    path = tmp_path / "dev"
    path.mkdir()
    return path


@pytest.fixture
def settings(sys_block, mounts_file, dev_dir):
    return Settings(
        sys_block=str(sys_block),
        mounts=str(mounts_file),
        dev_dir=str(dev_dir),
        chunk_size=4096,
    )


@pytest.fixture
def desktop(sys_block):
    """Populate the block directory with a representative set of devices."""
    make_device(sys_block, "nvme0n1", size=str(512 * GIB_SECTORS), removable="0",
                model="Samsung SSD 980")
    make_device(sys_block, "sda", size=str(500 * GIB_SECTORS), removable="0",
                vendor="ATA", model="WDC WD5000AAKX")
    make_device(sys_block, "sdb", size=str(15 * GIB_SECTORS), removable="1",
                vendor="SanDisk", model="Cruzer Blade")
    make_device(sys_block, "mmcblk0", size=str(30 * GIB_SECTORS), removable="0")
    make_device(sys_block, "sr0", size="2097151", removable="1",
                vendor="HL-DT-ST", model="DVDRAM GH24NSD1")
    make_device(sys_block, "loop0", size="131072", removable="0")
    make_device(sys_block, "loop1", size="0", marker=False)
    return sys_block


@pytest.fixture
def add_device(sys_block):
    """Factory fixture: ``add_device("sdb", size="1024", removable="1")``."""

    def _add(name: str, **attrs) -> Path:
        return make_device(sys_block, name, **attrs)

    return _add
