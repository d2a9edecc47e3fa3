"""Runtime settings: where to find sysfs, the mount table and device files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_SYS_BLOCK = "/sys/block"
DEFAULT_MOUNTS = "/proc/mounts"
DEFAULT_DEV_DIR = "/dev"
DEFAULT_CHUNK_SIZE = 4 * 1024 * 1024


@dataclass
class Settings:
    """Filesystem locations scribe reads from and writes to."""

    sys_block: str = DEFAULT_SYS_BLOCK
    mounts: str = DEFAULT_MOUNTS
    dev_dir: str = DEFAULT_DEV_DIR
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def device_path(self, device_name: str) -> str:
        """Device file to open for writing *device_name*."""
        return os.path.join(self.dev_dir, device_name)


def _resolve(explicit: Optional[str], env_var: str, default: str) -> str:
    if explicit:
        return explicit
    return os.environ.get(env_var) or default


def resolve_settings(
    sys_block: Optional[str] = None,
    mounts: Optional[str] = None,
    dev_dir: Optional[str] = None,
) -> Settings:
    """Build Settings from explicit values, then environment, then defaults.

    Environment variables: SCRIBE_SYS_BLOCK, SCRIBE_MOUNTS, SCRIBE_DEV_DIR.
    """
    return Settings(
        sys_block=_resolve(sys_block, "SCRIBE_SYS_BLOCK", DEFAULT_SYS_BLOCK),
        mounts=_resolve(mounts, "SCRIBE_MOUNTS", DEFAULT_MOUNTS),
        dev_dir=_resolve(dev_dir, "SCRIBE_DEV_DIR", DEFAULT_DEV_DIR),
    )
