"""Per-platform defaults and terminal capability checks."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

logger = logging.getLogger(__name__)

WINDOWS_GLYPHS = ("|", "/", "-", "\\")
UNICODE_GLYPHS = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")


def current_platform() -> str:
    """Normalised identifier for the host: ``windows`` or ``sys.platform``."""
    if sys.platform.startswith("win"):
        return "windows"
    return sys.platform


def _is_windows(platform: str) -> bool:
    return platform.lower().startswith("win")


def default_glyphs(platform: str) -> tuple[str, ...]:
    """Glyph sequence that renders safely on *platform*'s default console."""
    if _is_windows(platform):
        return WINDOWS_GLYPHS
    return UNICODE_GLYPHS


def status_symbols(platform: str) -> tuple[str, str]:
    """Return ``(success_symbol, error_symbol)`` for *platform*."""
    if _is_windows(platform):
        return ">", "!"
    return "✓", "✗"


def is_terminal_output(stream: TextIO | None) -> bool:
    """True when *stream* is attached to an interactive terminal."""
    if stream is None:
        return False
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError, OSError) as exc:
        logger.debug("isatty() failed on %r: %s", stream, exc)
        return False
