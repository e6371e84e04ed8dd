"""Process-wide Ctrl-C handling for the active spinner."""

from __future__ import annotations

import logging
import os
import signal
import sys
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from busyline.spinner import Spinner

logger = logging.getLogger(__name__)

ABORT_EXIT_CODE = 1


def _terminate(code: int) -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):
            pass
    os._exit(code)


class InterruptWatcher:
    """Turn SIGINT into a clean spinner abort followed by process exit.

    At most one SIGINT handler is installed per watcher, however many
    spinners are started. While a spinner is tracked, an interrupt stops
    its animation, prints its abort line and ends the process with
    ``exit_code``. With no spinner tracked the previous handler runs as if
    the watcher were not there.
    """

    def __init__(
        self,
        exit_func: Callable[[int], Any] | None = None,
        exit_code: int = ABORT_EXIT_CODE,
    ) -> None:
        self.exit_code = exit_code
        self._exit = exit_func or _terminate
        # Re-entrant: the handler runs on the main thread, which may already
        # hold the lock inside track()/release().
        self._lock = threading.RLock()
        self._active: Spinner | None = None
        self._armed = False
        self._aborting = False
        self._previous_handler: Any = None

    @property
    def armed(self) -> bool:
        return self._armed

    @property
    def active(self) -> Spinner | None:
        with self._lock:
            return self._active

    def arm(self) -> bool:
        """Install the SIGINT handler once. Returns whether it is installed."""
        with self._lock:
            if self._armed:
                return True
            try:
                self._previous_handler = signal.signal(signal.SIGINT, self._handle_signal)
            except ValueError as exc:
                # signal.signal() only works on the main thread.
                logger.debug("Interrupt watcher not armed: %s", exc)
                return False
            self._armed = True
            logger.debug("Interrupt watcher armed")
            return True

    def disarm(self) -> None:
        """Restore the handler that was in place before arm()."""
        with self._lock:
            if not self._armed:
                return
            previous = self._previous_handler
            if previous is None:
                previous = signal.default_int_handler
            try:
                signal.signal(signal.SIGINT, previous)
            except ValueError as exc:
                logger.debug("Interrupt watcher not disarmed: %s", exc)
                return
            self._armed = False
            self._previous_handler = None

    def track(self, spinner: Spinner) -> None:
        with self._lock:
            self._active = spinner

    def release(self, spinner: Spinner) -> None:
        with self._lock:
            if self._active is spinner:
                self._active = None

    def trigger(self) -> None:
        """Abort the tracked spinner and end the process.

        Only the first call does anything; an interrupt that lands while an
        abort is already in flight is ignored. The exit happens even when
        the abort itself fails.
        """
        with self._lock:
            if self._aborting:
                return
            self._aborting = True
            spinner = self._active
            self._active = None
        try:
            if spinner is not None:
                spinner.abort()
        except Exception:
            # e.g. a reentrant stdout write when SIGINT lands mid-print
            logger.exception("Spinner abort failed")
        finally:
            self._exit(self.exit_code)

    def _handle_signal(self, signum: int, frame: Any) -> None:
        if self.active is None:
            self._fallback(signum, frame)
            return
        self.trigger()

    def _fallback(self, signum: int, frame: Any) -> None:
        previous = self._previous_handler
        if callable(previous):
            previous(signum, frame)
        elif previous == signal.SIG_IGN:
            return
        else:
            raise KeyboardInterrupt


_watcher: InterruptWatcher | None = None
_watcher_lock = threading.Lock()


def watcher() -> InterruptWatcher:
    """The process-wide watcher, created on first use."""
    global _watcher
    with _watcher_lock:
        if _watcher is None:
            _watcher = InterruptWatcher()
        return _watcher
