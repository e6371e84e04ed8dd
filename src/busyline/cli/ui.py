"""Context-manager helpers around ``Spinner``."""

from __future__ import annotations

import contextlib
from collections.abc import Iterator
from typing import Any

from busyline.spinner import Spinner


@contextlib.contextmanager
def spinning(message: str, *, done: str | None = None, **kwargs: Any) -> Iterator[Spinner]:
    """Spin while the ``with`` body runs.

    Ends with a success line (*done*, or the current message) when the body
    returns, or an error line naming the exception when it raises. The
    exception is re-raised.
    """
    spin = Spinner(message, **kwargs)
    spin.start()
    try:
        yield spin
    except BaseException as exc:
        detail = str(exc) or type(exc).__name__
        spin.error(f"{spin.message}: {detail}")
        raise
    else:
        spin.success(done)
