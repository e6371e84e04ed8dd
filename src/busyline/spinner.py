"""Animated single-line spinner.

A ``Spinner`` owns one background thread while it runs. The thread wakes
once per tick, draws ``<glyph> <message>`` over the current line and goes
back to sleep on a stop event, so a stop request interrupts the wait
immediately instead of being polled for.

Shared state lives in a single ``SpinnerState`` guarded by one mutex.
Writes to the terminal go through a separate render lock so an animated
frame can never interleave with a blank or a final line. When both are
needed the render lock is taken first.

    spin = Spinner("Building")
    spin.start()
    ...
    spin.success("Done")
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable, Mapping
from typing import Any, TextIO

from busyline import interrupt
from busyline.core.env import SpinnerSettings, load_settings
from busyline.core.models import ExitStatus, SpinnerState, clamp_tick
from busyline.core.platform import current_platform, default_glyphs, status_symbols
from busyline.term import TerminalRenderer

logger = logging.getLogger(__name__)


class Spinner:
    """Terminal busy indicator that ends in a success or error line."""

    START_RETRIES = 10
    START_RETRY_DELAY = 0.05
    NOT_RUNNING_SUFFIX = " (spinner was not running)"

    def __init__(
        self,
        message: str = "",
        *,
        stream: TextIO | None = None,
        renderer: Any = None,
        platform: str | None = None,
        settings: SpinnerSettings | None = None,
        watcher: interrupt.InterruptWatcher | None = None,
    ) -> None:
        settings = settings or load_settings()
        platform = platform or settings.platform or current_platform()
        success_symbol, error_symbol = status_symbols(platform)

        if renderer is None:
            renderer = TerminalRenderer(
                stream,
                color=None if settings.color else False,
                platform=platform,
            )
        self._renderer = renderer
        self.is_terminal: bool = bool(getattr(renderer, "is_terminal", False))

        self._state = SpinnerState(
            message=message,
            glyphs=default_glyphs(platform),
            tick_ms=clamp_tick(settings.tick_ms),
            success_symbol=success_symbol,
            error_symbol=error_symbol,
            abort_message=settings.abort_message,
        )
        # Re-entrant: the SIGINT handler runs on the main thread and may
        # interrupt it inside a state access.
        self._lock = threading.RLock()
        self._render_lock = threading.Lock()
        self._lifecycle = threading.RLock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

        self._watcher = watcher
        self._handle_interrupts = watcher is not None or settings.handle_interrupts

    def __repr__(self) -> str:
        return f"Spinner(message={self.message!r}, running={self.running})"

    def __enter__(self) -> Spinner:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.success()
        else:
            self.error()

    # ── state accessors ─────────────────────────────────────────────

    @property
    def message(self) -> str:
        with self._lock:
            return self._state.message

    @property
    def glyphs(self) -> tuple[str, ...]:
        with self._lock:
            return self._state.glyphs

    @property
    def glyph_index(self) -> int:
        with self._lock:
            return self._state.glyph_index

    @property
    def tick_interval(self) -> int:
        """Milliseconds between frames."""
        with self._lock:
            return self._state.tick_ms

    @property
    def success_symbol(self) -> str:
        with self._lock:
            return self._state.success_symbol

    @property
    def error_symbol(self) -> str:
        with self._lock:
            return self._state.error_symbol

    @property
    def abort_message(self) -> str:
        with self._lock:
            return self._state.abort_message

    @property
    def exit_status(self) -> ExitStatus:
        with self._lock:
            return self._state.exit_status

    @property
    def running(self) -> bool:
        with self._lock:
            return self._state.running

    def set_glyphs(self, glyphs: Iterable[str]) -> None:
        """Replace the glyph sequence; takes effect on the next frame."""
        frames = tuple(str(g) for g in glyphs)
        if not frames:
            raise ValueError("glyph sequence must not be empty")
        with self._lock:
            self._state.glyphs = frames
            self._state.glyph_index %= len(frames)

    def set_tick_interval(self, ms: int) -> None:
        """Set the delay between frames. Values below 1ms are raised to 1ms."""
        ms = clamp_tick(ms)
        with self._lock:
            self._state.tick_ms = ms
        logger.debug("Tick interval set to %dms", ms)

    def set_success_symbol(self, symbol: str) -> None:
        with self._lock:
            self._state.success_symbol = symbol

    def set_error_symbol(self, symbol: str) -> None:
        with self._lock:
            self._state.error_symbol = symbol

    def set_abort_message(self, message: str) -> None:
        """Message printed when Ctrl-C aborts the process."""
        with self._lock:
            self._state.abort_message = message

    def update_message(self, message: str) -> None:
        """Change the message shown next to the glyph.

        Appending to the current message redraws in place. Anything else
        blanks the line first so a shorter message leaves no residue.
        """
        with self._render_lock:
            with self._lock:
                previous = self._state.message
                self._state.message = message
            if not message.startswith(previous):
                self._renderer.blank_current_line()

    # ── lifecycle ───────────────────────────────────────────────────

    def start(self, message: str | None = None) -> None:
        """Start animating, optionally replacing the message.

        Starting while a previous run is still stopping waits a little for
        it to finish. If it never does, the running spinner is stopped with
        an error line instead of a second animation being spawned.
        """
        attempts = 0
        while self.running and attempts < self.START_RETRIES:
            time.sleep(self.START_RETRY_DELAY)
            attempts += 1

        with self._lifecycle:
            if self.running:
                logger.warning("start() called on a running spinner: %r", self.message)
                self.error("Tried to start a running spinner with message: " + self.message)
                return

            with self._lock:
                if message is not None:
                    self._state.message = message
                self._state.running = True

            self._renderer.hide_cursor()
            self._arm_interrupts()

            stop_event = threading.Event()
            self._stop_event = stop_event
            self._thread = threading.Thread(
                target=self._animate,
                args=(stop_event,),
                name="busyline-spinner",
                daemon=True,
            )
            self._thread.start()

    def restart(self, message: str) -> None:
        """Finish the current run as a success (if any) and start again."""
        with self._lifecycle:
            if self.running:
                self.success()
            self.start(message)

    def success(self, message: str | None = None) -> None:
        """Stop with the success symbol and *message* (default: current message)."""
        self._stop(ExitStatus.SUCCESS, message)

    def error(self, message: str | None = None) -> None:
        """Stop with the error symbol and *message* (default: current message)."""
        self._stop(ExitStatus.ERROR, message)

    def successf(self, fmt: str, *args: Any) -> None:
        self.success(_format(fmt, args))

    def errorf(self, fmt: str, *args: Any) -> None:
        self.error(_format(fmt, args))

    def abort(self) -> None:
        """Stop immediately and print the abort line.

        Used by the interrupt watcher right before the process exits. It
        does not take the render lock; the interrupted thread may hold it.
        """
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=max(0.5, 2 * self.tick_interval / 1000))
        with self._lock:
            self._state.running = False
            self._state.exit_status = ExitStatus.ERROR
            symbol = self._state.error_symbol
            text = self._state.abort_message
        self._renderer.write_abort(symbol, text)
        self._renderer.show_cursor()

    def _stop(self, status: ExitStatus, message: str | None) -> None:
        with self._lifecycle:
            with self._lock:
                self._state.exit_status = status
                was_running = self._state.running
                final = self._state.message if message is None else message

            if was_running:
                self._stop_event.set()
                if self._thread is not None:
                    self._thread.join()
                self._thread = None
            else:
                logger.warning("Stopped a spinner that was not running: %r", final)
                final += self.NOT_RUNNING_SUFFIX

            with self._lock:
                self._state.running = False
                status = self._state.exit_status
                if status is ExitStatus.ERROR:
                    symbol = self._state.error_symbol
                else:
                    symbol = self._state.success_symbol

            with self._render_lock:
                self._renderer.blank_current_line()
                self._renderer.write_final(symbol, final, status)
                self._renderer.show_cursor()

            self._release_interrupts()

    # ── animation ───────────────────────────────────────────────────

    def _animate(self, stop_event: threading.Event) -> None:
        interval_ms = self.tick_interval
        logger.debug("Animation loop started (%dms)", interval_ms)
        while not stop_event.wait(interval_ms / 1000):
            with self._render_lock:
                if stop_event.is_set():
                    break
                with self._lock:
                    glyph = self._state.next_glyph()
                    text = f"{glyph} {self._state.message}"
                    tick_ms = self._state.tick_ms
                # No full clear here; it makes the line flicker.
                self._renderer.write_line(text)

            if tick_ms != interval_ms:
                logger.debug("Re-arming tick: %dms -> %dms", interval_ms, tick_ms)
                interval_ms = tick_ms
        logger.debug("Animation loop stopped")

    # ── interrupts ──────────────────────────────────────────────────

    def _interrupt_watcher(self) -> interrupt.InterruptWatcher | None:
        if not self._handle_interrupts:
            return None
        if self._watcher is None:
            self._watcher = interrupt.watcher()
        return self._watcher

    def _arm_interrupts(self) -> None:
        watcher = self._interrupt_watcher()
        if watcher is None:
            return
        watcher.arm()
        watcher.track(self)

    def _release_interrupts(self) -> None:
        watcher = self._interrupt_watcher()
        if watcher is not None:
            watcher.release(self)


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    """printf-style formatting; a single mapping argument fills %(name)s fields."""
    if not args:
        return fmt
    if len(args) == 1 and isinstance(args[0], Mapping):
        return fmt % args[0]
    return fmt % args


def new(message: str = "", **kwargs: Any) -> Spinner:
    """Shorthand for ``Spinner(message, **kwargs)``."""
    return Spinner(message, **kwargs)
