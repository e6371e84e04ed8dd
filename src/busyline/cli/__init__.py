"""CLI entry point — Click command group."""

from __future__ import annotations

import logging
import sys

import click

from busyline import __version__

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr so they never land on the spinner line."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


@click.group()
@click.version_option(__version__, prog_name="busyline")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """busyline — a one-line terminal busy indicator.

    Animate a glyph next to a status message and finish with a
    success or error line.
    """
    setup_logging(verbose)


# Register all sub-commands on import
from busyline.cli import commands as _commands  # noqa: F401, E402
