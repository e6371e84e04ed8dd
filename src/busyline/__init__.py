"""busyline — a single-line terminal busy indicator."""

from __future__ import annotations

__version__ = "0.1.0"

from busyline.core.models import ExitStatus  # noqa: E402
from busyline.spinner import Spinner, new  # noqa: E402

__all__ = ["ExitStatus", "Spinner", "new", "__version__"]
