"""Semantic terminal styles for scribe output and the selection menu.

Styles are named by role (``theme.warning``, ``theme.selected``), never by
color. Color is off when NO_COLOR is set (https://no-color.org/), when
stdout is not a terminal, or when TERM is ``dumb``.

    t = get_theme()
    print(f"{t.success}[OK]{t.reset} Image written")
"""

from __future__ import annotations

import enum
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional, TextIO

RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_REVERSE = "\033[7m"


class ColorTier(enum.Enum):
    ANSI256 = "256"
    ANSI16 = "16"
    NONE = "none"


def detect_color_tier(
    env: Optional[Mapping[str, str]] = None,
    stream: Optional[TextIO] = None,
) -> ColorTier:
    """Pick the color tier for *stream* (stdout) under *env* (os.environ).

    NO_COLOR wins over FORCE_COLOR; FORCE_COLOR wins over everything else.
    """
    env = os.environ if env is None else env
    stream = stream or sys.stdout

    if env.get("NO_COLOR"):
        return ColorTier.NONE
    if env.get("FORCE_COLOR"):
        return ColorTier.ANSI256
    term = env.get("TERM", "")
    if not stream.isatty() or term == "dumb":
        return ColorTier.NONE
    return ColorTier.ANSI256 if "256color" in term else ColorTier.ANSI16


# role -> (xterm-256 index, ANSI 16 foreground code)
PALETTE: dict[str, tuple[int, int]] = {
    "header": (117, 96),
    "prompt": (152, 97),
    "subtle": (245, 90),
    "green": (78, 92),
    "yellow": (221, 93),
    "red": (167, 91),
}

# Theme field -> (attribute prefix, palette entry or None)
_ROLES: dict[str, tuple[str, Optional[str]]] = {
    "header": (_BOLD, "header"),
    "prompt": (_BOLD, "prompt"),
    "subtle": ("", "subtle"),
    "success": ("", "green"),
    "warning": ("", "yellow"),
    "error": ("", "red"),
    "info": ("", "header"),
    "bold": (_BOLD, None),
    "dim": (_DIM, None),
}


def _fg(color: str, tier: ColorTier) -> str:
    idx256, code16 = PALETTE[color]
    if tier is ColorTier.ANSI256:
        return f"\033[38;5;{idx256}m"
    return f"\033[{code16}m"


@dataclass(frozen=True)
class Theme:
    """Escape sequence per role; all empty strings for ColorTier.NONE."""

    tier: ColorTier = ColorTier.NONE
    header: str = ""
    prompt: str = ""
    subtle: str = ""
    selected: str = ""  # highlighted menu row
    success: str = ""
    warning: str = ""
    error: str = ""
    info: str = ""
    bold: str = ""
    dim: str = ""
    reset: str = ""

    @classmethod
    def for_tier(cls, tier: ColorTier) -> Theme:
        if tier is ColorTier.NONE:
            return cls(tier=tier)
        styles = {
            role: prefix + (_fg(color, tier) if color else "")
            for role, (prefix, color) in _ROLES.items()
        }
        # 16-color terminals render reverse video poorly; bold is enough there
        if tier is ColorTier.ANSI256:
            styles["selected"] = _REVERSE + _fg("header", tier)
        else:
            styles["selected"] = _BOLD
        return cls(tier=tier, reset=RESET, **styles)


_theme: Optional[Theme] = None


def get_theme() -> Theme:
    """Theme for the current process, detected once and then reused."""
    global _theme
    if _theme is None:
        _theme = Theme.for_tier(detect_color_tier())
    return _theme


def reset_theme() -> None:
    """Forget the detected theme so the next get_theme() detects again."""
    global _theme
    _theme = None
