"""Data shapes shared by the spinner, its renderer and the interrupt watcher."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

DEFAULT_TICK_MS = 100
DEFAULT_ABORT_MESSAGE = "Aborted."
MIN_TICK_MS = 1


class ExitStatus(enum.Enum):
    """How a spinner run ended."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass
class SpinnerState:
    """Mutable fields read by the animation loop and written by callers.

    Instances carry no locking of their own; the owning ``Spinner`` guards
    every access with a single mutex.
    """

    message: str = ""
    glyphs: tuple[str, ...] = field(default_factory=tuple)
    glyph_index: int = 0
    tick_ms: int = DEFAULT_TICK_MS
    success_symbol: str = ""
    error_symbol: str = ""
    abort_message: str = DEFAULT_ABORT_MESSAGE
    running: bool = False
    exit_status: ExitStatus = ExitStatus.SUCCESS

    def next_glyph(self) -> str:
        """Return the glyph at the current index and advance it."""
        index = self.glyph_index % len(self.glyphs)
        glyph = self.glyphs[index]
        self.glyph_index = (index + 1) % len(self.glyphs)
        return glyph


def clamp_tick(ms: int) -> int:
    return max(MIN_TICK_MS, int(ms))
