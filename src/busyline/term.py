"""Line renderer — writes frames and final lines to a terminal stream."""

from __future__ import annotations

import logging
import os
import shutil
import sys
import unicodedata
from typing import TextIO

import click

from busyline.core.models import ExitStatus
from busyline.core.platform import current_platform, is_terminal_output

logger = logging.getLogger(__name__)

ERASE_TO_EOL = "\033[0K"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"

_STATUS_COLORS = {
    ExitStatus.SUCCESS: "bright_green",
    ExitStatus.ERROR: "bright_red",
}

# Variation selectors and zero-width joiners take no cells.
_ZERO_WIDTH = {0xFE0E, 0xFE0F, 0x200B, 0x200C, 0x200D}


def _char_width(ch: str) -> int:
    if ord(ch) in _ZERO_WIDTH or unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def display_width(text: str) -> int:
    """Number of terminal cells *text* occupies, ignoring ANSI styling."""
    return sum(_char_width(ch) for ch in click.unstyle(text))


def fit_width(text: str, width: int) -> str:
    """Cut *text* so it occupies at most *width* cells."""
    used = 0
    for i, ch in enumerate(text):
        used += _char_width(ch)
        if used > width:
            return text[:i]
    return text


class TerminalRenderer:
    """Render a single animated line on *stream* (stdout by default).

    Cursor and erase sequences are only emitted when the stream is a real
    terminal. On Windows consoles, or when the stream is not a terminal,
    blanking falls back to overwriting the last line with spaces.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        is_terminal: bool | None = None,
        color: bool | None = None,
        platform: str | None = None,
    ) -> None:
        self._stream = stream
        self.is_terminal = (
            is_terminal_output(self.stream) if is_terminal is None else is_terminal
        )
        self.color = color
        self.platform = platform or current_platform()
        self._last_len = 0

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so redirected sys.stdout (tests, CliRunner) is honoured.
        return self._stream if self._stream is not None else sys.stdout

    # ── line operations ─────────────────────────────────────────────

    def write_line(self, text: str) -> None:
        """Overwrite the current line from column 0 without a newline."""
        if self.is_terminal:
            width = self.terminal_size().columns
            if width > 1:
                text = fit_width(text, width - 1)
        self._emit("\r" + text)
        self._last_len = display_width(text)

    def blank_current_line(self) -> None:
        if self.is_terminal and not self._is_windows():
            self._emit("\r" + ERASE_TO_EOL, raw=True)
        else:
            self._emit("\r" + " " * self._last_len + "\r")
        self._last_len = 0

    def hide_cursor(self) -> None:
        if self.is_terminal:
            self._emit(HIDE_CURSOR, raw=True)

    def show_cursor(self) -> None:
        if self.is_terminal:
            self._emit(SHOW_CURSOR, raw=True)

    def write_final(self, symbol: str, message: str, status: ExitStatus) -> None:
        """Write ``<symbol> <message>`` in the status colour and end the line."""
        line = click.style(f"{symbol} {message}", fg=_STATUS_COLORS[status])
        self._emit("\r" + line + "\n")
        self._last_len = 0

    def write_abort(self, symbol: str, message: str) -> None:
        self._emit("\n")
        self.write_final(symbol, message, ExitStatus.ERROR)

    # ── capabilities ────────────────────────────────────────────────

    def terminal_size(self) -> os.terminal_size:
        """Current terminal dimensions, falling back to 80x24."""
        try:
            return shutil.get_terminal_size(fallback=(80, 24))
        except (OSError, ValueError) as exc:
            logger.debug("Could not query terminal size: %s", exc)
            return os.terminal_size((80, 24))

    # ── helpers ─────────────────────────────────────────────────────

    def _is_windows(self) -> bool:
        return self.platform.lower().startswith("win")

    def _emit(self, text: str, *, raw: bool = False) -> None:
        # Control sequences are already gated on is_terminal, so they must
        # not be stripped by click's colour detection.
        color = True if raw else self.color
        try:
            click.echo(text, file=self.stream, nl=False, color=color)
        except (OSError, ValueError) as exc:
            logger.warning("Renderer write failed: %s", exc)
