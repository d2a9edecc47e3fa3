"""ANSI escape sequences and ANSI-aware string helpers.

Cursor and line-clearing sequences used by the selection menu to redraw in
place, plus width helpers for aligning themed text.
"""

from __future__ import annotations

import re
import unicodedata

CURSOR_HIDE = "\033[?25l"
CURSOR_SHOW = "\033[?25h"
CLEAR_LINE = "\033[2K"
STYLE_RESET = "\033[0m"

_ANSI_RE = re.compile(r"\033\[[0-9;?]*[A-Za-z]")


def cursor_up(lines: int) -> str:
    """Move the cursor up *lines* rows; empty string for zero."""
    if lines <= 0:
        return ""
    return f"\033[{lines}A"


def strip_ansi(s: str) -> str:
    """Remove all CSI escape sequences from *s*."""
    return _ANSI_RE.sub("", s)


def display_width(s: str) -> int:
    """Return the visible column count of *s*, ignoring ANSI codes.

    Wide characters (East Asian Width 'W' or 'F') count as 2 columns, which
    matters for vendor strings from some card readers.
    """
    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in strip_ansi(s))


def pad_to_width(s: str, target_width: int) -> str:
    """Pad *s* with spaces to *target_width* visible columns."""
    current = display_width(s)
    if current >= target_width:
        return s
    return s + " " * (target_width - current)
