import threading
import time

import pytest
from click.testing import CliRunner

from busyline.core.env import SpinnerSettings
from busyline.interrupt import InterruptWatcher
from busyline.spinner import Spinner


class RecordingRenderer:
    """Line renderer double that logs every call with a timestamp."""

    def __init__(self, is_terminal=True):
        self.is_terminal = is_terminal
        self.events = []
        self._lock = threading.Lock()

    def _record(self, *event):
        with self._lock:
            self.events.append((time.monotonic(), *event))

    def write_line(self, text):
        self._record("line", text)

    def blank_current_line(self):
        self._record("blank")

    def hide_cursor(self):
        self._record("hide")

    def show_cursor(self):
        self._record("show")

    def write_final(self, symbol, message, status):
        self._record("final", symbol, message, status)

    def write_abort(self, symbol, message):
        self._record("abort", symbol, message)

    def kinds(self):
        with self._lock:
            return [e[1] for e in self.events]

    def of(self, kind):
        with self._lock:
            return [e[2:] for e in self.events if e[1] == kind]

    def stamps(self, kind):
        with self._lock:
            return [e[0] for e in self.events if e[1] == kind]


@pytest.fixture
def runner():
    """Click CLI runner fixture."""
    return CliRunner()


@pytest.fixture
def quiet_settings():
    """Settings that never touch SIGINT."""
    return SpinnerSettings(tick_ms=10, handle_interrupts=False)


@pytest.fixture
def recorder():
    return RecordingRenderer()


@pytest.fixture
def make_spinner(recorder, quiet_settings):
    """Factory for linux-flavoured spinners drawing into ``recorder``."""
    created = []

    def _make(message="", **kwargs):
        kwargs.setdefault("renderer", recorder)
        kwargs.setdefault("settings", quiet_settings)
        kwargs.setdefault("platform", "linux")
        spin = Spinner(message, **kwargs)
        created.append(spin)
        return spin

    yield _make

    for spin in created:
        if spin.running:
            spin.success()


@pytest.fixture
def watcher():
    """A private interrupt watcher whose exit is recorded, not performed."""
    codes = []
    w = InterruptWatcher(exit_func=codes.append)
    w.exit_calls = codes
    yield w
    w.disarm()


def spinner_threads():
    return [t for t in threading.enumerate() if t.name == "busyline-spinner" and t.is_alive()]


@pytest.fixture
def live_loops():
    return spinner_threads
