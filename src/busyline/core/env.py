"""Runtime settings sourced from environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from busyline.core.models import DEFAULT_ABORT_MESSAGE, DEFAULT_TICK_MS, clamp_tick

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class SpinnerSettings:
    """Defaults applied to every new spinner unless overridden by arguments."""

    tick_ms: int = DEFAULT_TICK_MS
    abort_message: str = DEFAULT_ABORT_MESSAGE
    platform: str | None = None
    color: bool = True
    handle_interrupts: bool = True


def load_settings(environ: Mapping[str, str] | None = None) -> SpinnerSettings:
    """Build settings from ``BUSYLINE_*`` variables and ``NO_COLOR``."""
    env = os.environ if environ is None else environ

    return SpinnerSettings(
        tick_ms=_parse_tick(env.get("BUSYLINE_TICK_MS", "")),
        abort_message=env.get("BUSYLINE_ABORT_MESSAGE", "") or DEFAULT_ABORT_MESSAGE,
        platform=env.get("BUSYLINE_PLATFORM", "").strip() or None,
        color=not env.get("NO_COLOR", ""),
        handle_interrupts=not _is_truthy(env.get("BUSYLINE_NO_INTERRUPT", "")),
    )


def _parse_tick(raw: str) -> int:
    raw = raw.strip()
    if not raw:
        return DEFAULT_TICK_MS
    try:
        return clamp_tick(int(raw))
    except ValueError:
        logger.warning("Ignoring invalid BUSYLINE_TICK_MS=%r", raw)
        return DEFAULT_TICK_MS


def _is_truthy(raw: str) -> bool:
    return raw.strip().lower() in _TRUTHY
