"""Tests for mount table parsing."""
import logging

import pytest

from scribe.errors import MountTableError
from scribe.mounts import MountEntry, parse_mounts, read_mount_table


def test_parse_takes_first_two_fields():
    entries = parse_mounts("/dev/sda1 /media/usb vfat rw 0 0\n")
    assert entries == [MountEntry(source="/dev/sda1", mount_point="/media/usb")]


def test_parse_skips_blank_and_truncated_lines(caplog):
    text = "\n   \n/dev/sda1\n/dev/sdb1 /mnt ext4 rw 0 0\n\t\n"
    caplog.set_level(logging.DEBUG, logger="scribe")

    entries = parse_mounts(text)

    assert entries == [MountEntry("/dev/sdb1", "/mnt")]
    assert any("malformed" in record.getMessage() for record in caplog.records)


def test_parse_accepts_tabs_and_extra_spaces():
    entries = parse_mounts("/dev/mmcblk0p1\t/boot   vfat rw 0 0")
    assert entries == [MountEntry("/dev/mmcblk0p1", "/boot")]


def test_parse_two_field_line_is_enough():
    assert parse_mounts("/dev/sdc1 /data") == [MountEntry("/dev/sdc1", "/data")]


def test_parse_empty():
    assert parse_mounts("") == []


def test_read_mount_table(tmp_path):
    path = tmp_path / "mounts"
    path.write_text("proc /proc proc rw 0 0\n/dev/sdb1 /media/stick vfat rw 0 0\n")

    entries = read_mount_table(path)

    assert [e.source for e in entries] == ["proc", "/dev/sdb1"]


def test_read_missing_mount_table_is_an_error(tmp_path):
    with pytest.raises(MountTableError, match="Could not read mount table"):
        read_mount_table(tmp_path / "nope")
