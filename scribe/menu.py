"""Interactive single-keypress device selection menu.

The menu is a small state machine over a fixed list of candidates: Up and
Down move the highlight, Enter selects, and ``q``, ``n``, Esc or Ctrl+C
cancel. The list is redrawn in place after every keypress.

The terminal is switched to raw mode only inside ``raw_terminal()``, which
restores the saved settings and cursor on every exit path.

Exports:
    select_from: Run the menu and return the chosen item or None.
    Menu: The state machine, usable without a terminal.
    raw_terminal: Context manager for raw, unbuffered input.
"""

from __future__ import annotations

import enum
import os
import sys
from collections.abc import Callable, Iterator, Sequence
from contextlib import AbstractContextManager, contextmanager
from typing import Generic, Optional, TextIO, TypeVar

from .ansi import (
    CLEAR_LINE,
    CURSOR_HIDE,
    CURSOR_SHOW,
    STYLE_RESET,
    cursor_up,
    display_width,
    pad_to_width,
)
from .theme import get_theme

T = TypeVar("T")

DEFAULT_TITLE = "Select device to write image to ('q' or 'n' to cancel):"

# ---------------------------------------------------------------------------
# Key names
# ---------------------------------------------------------------------------

KEY_UP = "up"
KEY_DOWN = "down"
KEY_ENTER = "enter"
KEY_ESCAPE = "esc"
KEY_INTERRUPT = "ctrl-c"
KEY_EOF = "eof"

_CANCEL_KEYS = frozenset({"q", "n", KEY_ESCAPE, KEY_INTERRUPT, KEY_EOF})

# Final byte of CSI / SS3 arrow sequences: ESC [ A, ESC O A, ...
_ARROW_FINALS = {"A": KEY_UP, "B": KEY_DOWN}

# Time to wait for the rest of an escape sequence after a leading ESC
_ESCAPE_TIMEOUT = 0.05


# ---------------------------------------------------------------------------
# Input handling
# ---------------------------------------------------------------------------


def decode_escape_sequence(
    read_char: Callable[[], str],
    has_input: Callable[[float], bool],
) -> str:
    """Decode what follows a leading ESC.

    Returns KEY_UP / KEY_DOWN for arrow keys, KEY_ESCAPE for a standalone
    Esc press, and ``""`` for any other sequence (function keys, Alt
    combinations), which is consumed so it cannot trigger an action.
    """
    if not has_input(_ESCAPE_TIMEOUT):
        return KEY_ESCAPE

    first = read_char()
    if first in ("[", "O"):
        body = ""
        while has_input(_ESCAPE_TIMEOUT):
            ch = read_char()
            if not ch:
                break
            body += ch
            if "@" <= ch <= "~":  # ANSI final byte
                break
        return _ARROW_FINALS.get(body, "")

    # Alt/meta combination: drop any immediately available trailing bytes
    while has_input(0):
        if not read_char():
            break
    return ""


def decode_key(
    ch: str,
    read_char: Callable[[], str],
    has_input: Callable[[float], bool],
) -> str:
    """Map the first character of a keypress to a key name or a lowercase char."""
    if ch == "":
        return KEY_EOF
    if ch == "\x03":  # Ctrl+C arrives as a byte in raw mode
        return KEY_INTERRUPT
    if ch in ("\r", "\n"):
        return KEY_ENTER
    if ch == "\x1b":
        return decode_escape_sequence(read_char, has_input)
    return ch.lower()


def read_key(stream: Optional[TextIO] = None) -> str:
    """Block until one keypress is read from *stream* (stdin by default).

    Reads the file descriptor directly so ``select`` sees every pending
    byte of an escape sequence. Expects the terminal to be in raw mode.
    """
    import select

    fd = (stream or sys.stdin).fileno()

    def read_char() -> str:
        data = os.read(fd, 1)
        return data.decode("latin-1") if data else ""

    def has_input(timeout: float) -> bool:
        return bool(select.select([fd], [], [], timeout)[0])

    return decode_key(read_char(), read_char, has_input)


@contextmanager
def raw_terminal(
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> Iterator[None]:
    """Put the terminal in raw mode and hide the cursor for the block.

    The saved terminal attributes and cursor visibility are restored however
    the block exits, including on exceptions.
    """
    import termios
    import tty

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    fd = stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        stdout.write(CURSOR_HIDE)
        stdout.flush()
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        stdout.write(CURSOR_SHOW + STYLE_RESET + "\n")
        stdout.flush()


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


class MenuState(enum.Enum):
    ACTIVE = "active"
    SELECTED = "selected"
    CANCELLED = "cancelled"


class Menu(Generic[T]):
    """Highlight-and-confirm selection over a non-empty list of items."""

    def __init__(
        self,
        items: Sequence[T],
        title: str = DEFAULT_TITLE,
        render_item: Callable[[T], str] = str,
    ) -> None:
        if not items:
            raise ValueError("Menu needs at least one item")
        self.items = list(items)
        self.title = title
        self.render_item = render_item
        self.current = 0
        self.state = MenuState.ACTIVE

    @property
    def selected(self) -> Optional[T]:
        """The chosen item once SELECTED, otherwise None."""
        if self.state is MenuState.SELECTED:
            return self.items[self.current]
        return None

    def handle_key(self, key: str) -> MenuState:
        """Apply one keypress and return the resulting state."""
        if self.state is not MenuState.ACTIVE:
            return self.state
        if key == KEY_UP:
            self.current = max(self.current - 1, 0)
        elif key == KEY_DOWN:
            self.current = min(self.current + 1, len(self.items) - 1)
        elif key == KEY_ENTER:
            self.state = MenuState.SELECTED
        elif key in _CANCEL_KEYS:
            self.state = MenuState.CANCELLED
        return self.state

    def render(self) -> str:
        """Render all rows; each row clears its line before drawing.

        Raw mode disables output newline translation, so rows are joined
        with ``\\r\\n``. The cursor is left at the end of the last row.
        """
        theme = get_theme()
        texts = [self.render_item(item) for item in self.items]
        width = max(display_width(text) for text in texts)
        rows = []
        for i, text in enumerate(texts):
            if i == self.current:
                row = f"> {theme.selected}{pad_to_width(text, width)}{theme.reset}"
            else:
                row = f"  {text}"
            rows.append(f"\r{CLEAR_LINE}{row}")
        return "\r\n".join(rows)

    def redraw(self) -> str:
        """Move back to the first row and render over the previous frame."""
        return cursor_up(len(self.items) - 1) + self.render()

    def run(self, next_key: Callable[[], str], stream: TextIO) -> Optional[T]:
        """Draw the menu and consume keys until selected or cancelled."""
        theme = get_theme()
        stream.write(f"{theme.prompt}{self.title}{theme.reset}\r\n")
        stream.write(self.render())
        stream.flush()

        while self.state is MenuState.ACTIVE:
            try:
                key = next_key()
            except KeyboardInterrupt:
                key = KEY_INTERRUPT
            if self.handle_key(key) is MenuState.ACTIVE:
                stream.write(self.redraw())
                stream.flush()

        return self.selected


def select_from(
    items: Sequence[T],
    *,
    title: str = DEFAULT_TITLE,
    render_item: Callable[[T], str] = str,
    stream: Optional[TextIO] = None,
    key_reader: Optional[Callable[[], str]] = None,
    terminal: Optional[Callable[[], AbstractContextManager]] = None,
) -> Optional[T]:
    """Let the user pick one of *items*; None if cancelled or *items* is empty.

    An empty list returns immediately without touching the terminal.

    Args:
        items: Candidates, shown in order.
        title: Header line above the list.
        render_item: Text for one item.
        stream: Where to draw (stdout by default).
        key_reader: Returns one key name per call (reads stdin by default).
        terminal: Factory for the context manager that holds the terminal
            in raw mode (``raw_terminal`` by default).
    """
    if not items:
        return None

    stream = stream or sys.stdout
    key_reader = key_reader or read_key
    if terminal is None:
        terminal = lambda: raw_terminal(sys.stdin, stream)  # noqa: E731

    menu = Menu(items, title=title, render_item=render_item)
    with terminal():
        return menu.run(key_reader, stream)
