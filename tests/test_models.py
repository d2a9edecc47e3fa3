"""Tests for device data models and size formatting."""
import dataclasses

import pytest

from scribe.models import BlockDevice, DeviceType, Reason, Size


class TestSizeFormat:
    """Binary-prefixed size formatting."""

    @pytest.mark.parametrize(
        "sectors,expected",
        [
            (0, "0"),
            (1, "512"),
            (2, "1.0KiB"),
            (3, "1.5KiB"),
            (2048, "1.0MiB"),
            (2 * 1024 * 1024, "1.0GiB"),
            (62333952, "29.7GiB"),
            (2 * 1024**3, "1.0TiB"),
            (3 * 1024**3, "1.5TiB"),
        ],
    )
    def test_format(self, sectors, expected):
        assert Size(sectors).format() == expected

    def test_str_uses_one_decimal(self):
        assert str(Size(3)) == "1.5KiB"

    def test_precision(self):
        assert Size(62333952).format(precision=3) == "29.723GiB"
        assert Size(2).format(precision=0) == "1KiB"

    def test_bytes(self):
        assert Size(4).bytes == 2048


class TestDeviceType:
    """Safe and excluded predicates."""

    def test_only_flash_and_sd_are_safe(self):
        safe = {t for t in DeviceType if t.is_safe()}
        assert safe == {DeviceType.FLASH_DRIVE, DeviceType.SDMMC}

    def test_only_cdrom_and_loopback_are_excluded(self):
        excluded = {t for t in DeviceType if t.is_excluded()}
        assert excluded == {DeviceType.CDROM, DeviceType.LOOPBACK}

    def test_labels(self):
        assert str(DeviceType.SDMMC) == "SD/MMC Card"
        assert DeviceType.CDROM.label == "CD-ROM"


class TestReason:
    def test_display_names(self):
        assert [str(r) for r in Reason] == ["mounted", "zero-size", "read-only", "large"]


class TestBlockDevice:
    """The device record."""

    def test_dev_file(self):
        device = BlockDevice("mmcblk0", "", Size(0), DeviceType.SDMMC)
        assert device.dev_file == "/dev/mmcblk0"

    def test_is_frozen(self):
        device = BlockDevice("sdb", "SanDisk", Size(2), DeviceType.FLASH_DRIVE)
        with pytest.raises(dataclasses.FrozenInstanceError):
            device.flags = (Reason.MOUNTED,)

    def test_is_safe_requires_no_flags(self):
        clean = BlockDevice("sdb", "", Size(2), DeviceType.FLASH_DRIVE)
        flagged = BlockDevice("sdb", "", Size(2), DeviceType.FLASH_DRIVE, (Reason.MOUNTED,))
        internal = BlockDevice("sda", "", Size(2), DeviceType.INTERNAL_DRIVE)
        assert clean.is_safe
        assert not flagged.is_safe
        assert not internal.is_safe

    def test_format_line(self):
        device = BlockDevice(
            "sdb",
            "SanDisk Cruzer Blade",
            Size(2),
            DeviceType.FLASH_DRIVE,
            (Reason.MOUNTED, Reason.READ_ONLY),
        )
        line = device.format_line()
        assert line.startswith("/dev/sdb")
        assert "1.0KiB" in line
        assert "SanDisk Cruzer Blade" in line
        assert "Flash Drive" in line
        assert line.endswith("mounted,read-only")

    def test_format_line_without_flags_has_no_trailing_space(self):
        device = BlockDevice("sdb", "", Size(2), DeviceType.FLASH_DRIVE)
        assert device.format_line() == str(device)
        assert not device.format_line().endswith(" ")
