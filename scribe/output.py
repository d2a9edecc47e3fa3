"""User-facing messages behind a small Protocol.

Commands in ``burn`` only talk to an ``Output``; the CLI passes a
``CliOutput`` and tests pass a ``NullOutput`` (or a recording subclass).
Device rows go to stdout untagged so ``scribe list`` can be piped; errors
go to stderr.
"""

from __future__ import annotations

import sys
from typing import Optional, Protocol, TextIO

from .theme import Theme, get_theme


class Output(Protocol):
    """What scribe commands may say to the user."""

    def info(self, section: str, message: str) -> None: ...
    def success(self, message: str) -> None: ...
    def warn(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def error_with_recovery(
        self,
        error_type: str,
        message: str,
        context: Optional[dict[str, str]] = None,
        recovery: Optional[str] = None,
    ) -> None: ...
    def line(self, text: str) -> None: ...
    def confirm(self, message: str, default: bool = False) -> bool: ...


class CliOutput:
    """Themed terminal output; streams are looked up per call."""

    def __init__(self, theme: Optional[Theme] = None) -> None:
        self.theme = theme or get_theme()

    def _tagged(self, style: str, tag: str, message: str, stream: Optional[TextIO] = None) -> None:
        print(f"{style}[{tag}]{self.theme.reset} {message}", file=stream or sys.stdout)

    def info(self, section: str, message: str) -> None:
        self._tagged(self.theme.info, section, message)

    def success(self, message: str) -> None:
        self._tagged(self.theme.success, "OK", message)

    def warn(self, message: str) -> None:
        self._tagged(self.theme.warning, "!!", message)

    def error(self, message: str) -> None:
        self._tagged(self.theme.error, "FAIL", message, sys.stderr)

    def error_with_recovery(
        self,
        error_type: str,
        message: str,
        context: Optional[dict[str, str]] = None,
        recovery: Optional[str] = None,
    ) -> None:
        """Print a ScribeError with its affected paths and numbered recovery steps."""
        from .errors import format_error

        print(format_error(error_type, message, context, recovery), file=sys.stderr)

    def line(self, text: str) -> None:
        print(text)

    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask a yes/no question; end of input counts as no."""
        choices = "Y/n" if default else "y/N"
        try:
            answer = input(f"{self.theme.prompt}{message} [{choices}]:{self.theme.reset} ")
        except EOFError:
            return False
        answer = answer.strip().lower()
        if not answer:
            return default
        return answer in ("y", "yes")


class NullOutput:
    """Output that discards everything.

    ``confirm`` returns ``answer`` so a caller can script a yes or a no.
    """

    def __init__(self, answer: bool = False) -> None:
        self.answer = answer

    def _discard(self, *args, **kwargs) -> None:
        return None

    info = success = warn = error = error_with_recovery = line = _discard

    def confirm(self, message: str, default: bool = False) -> bool:
        return self.answer
