"""CLI commands — demo, run."""

from __future__ import annotations

import subprocess
import time

import click

from busyline.cli import cli
from busyline.core.env import load_settings
from busyline.core.platform import current_platform
from busyline.spinner import Spinner, new


# ── demo ────────────────────────────────────────────────────────────


@cli.command()
@click.option(
    "--pause", type=click.FloatRange(min=0), default=2.0, show_default=True,
    help="Seconds each step spins before finishing.",
)
@click.option("--no-bomb", is_flag=True, help="Skip the final Ctrl-C step.")
def demo(pause: float, no_bomb: bool) -> None:
    """Walk through every spinner feature in turn."""
    windows = (load_settings().platform or current_platform()).startswith("win")

    a = new("This is a success")
    a.start()
    time.sleep(pause)
    a.success()

    a = new("This is an error")
    a.start()
    time.sleep(pause)
    a.error()

    a = new("This is a custom success message")
    a.start()
    time.sleep(pause)
    a.success("Awesome!")

    a = new("This is a custom error message")
    a.start()
    time.sleep(pause)
    a.error("Much sad")

    a = new("This is a formatted custom success message")
    a.start()
    time.sleep(pause)
    a.successf("%s is %s!", "Spinner", "Awesome")

    a = new("This is a formatted custom error message")
    a.start()
    time.sleep(pause)
    a.errorf("I waited %g seconds to error!", pause)

    a.start("Spinner reuse FTW!")
    time.sleep(pause)
    a.success()

    a = new("Change spinners on the fly")
    a.start()
    for frames in (["+", "x", "X", "x"], ["\\", "|", "/", "-"], ["-->  ", " --> ", "  -->"]):
        time.sleep(pause)
        a.set_glyphs(frames)
    time.sleep(pause)
    a.success()

    msg = "Change spinner timing on the fly: Normal"
    a = new(msg)
    a.start()
    for label, ms in (("Slow", 300), ("Normal", 100), ("Fast", 50)):
        time.sleep(pause)
        msg += f" {label}"
        a.set_tick_interval(ms)
        a.update_message(msg)
    time.sleep(pause)
    a.success(msg + ". Much Wow.")

    a = new()
    a.start("Message is now optional on Spinner creation")
    time.sleep(pause)
    a.success("Awesome! More flexibility!")

    if windows:
        a.set_glyphs(["^", ">", "v", "<"])
        a.set_success_symbol("+")
    else:
        a.set_glyphs(["🌕", "🌖", "🌗", "🌘", "🌑", "🌒", "🌓", "🌔"])
        a.set_success_symbol("👍")
    a.start("Custom spinner + Success Symbol!")
    time.sleep(pause)
    a.success()

    if windows:
        a.set_glyphs([".", "o", "O", "@", "*"])
        a.set_error_symbol("!")
    else:
        a.set_glyphs(["🕐", "🕑", "🕒", "🕓", "🕔", "🕕", "🕖", "🕗", "🕘", "🕙", "🕚", "🕛"])
        a.set_error_symbol("💩")
    a.start("Custom spinner + Error Symbol!")
    time.sleep(pause)
    a.error()

    progress = "2"
    a.start(progress)
    for step in (" 4", " 6", " 8"):
        time.sleep(pause / 2)
        progress += step
        a.update_message(progress)
    time.sleep(pause / 2)
    a.success(progress + " Motorway!")

    click.echo("")
    click.echo("Stopping a spinner that is not running only issues a warning.")
    click.echo("")

    new("Test success()").success()
    new("Test error()").error()
    a = new("Test custom messages")
    a.success('Test success("")')
    a.error('Test error("")')
    a.successf('Test successf("")')
    a.errorf('Test errorf("")')

    if no_bomb:
        return

    click.echo("")
    click.echo("Interrupt handling. Hit Ctrl-C to stop the bomb exploding!")
    click.echo("")

    a = new("💣  Tick...tick...tick...")
    a.set_abort_message("Defused!")
    a.start()
    time.sleep(pause * 2.5)
    a.success("💥  Boom!")


# ── run ─────────────────────────────────────────────────────────────


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.option("-m", "--message", default=None, help="Text shown while the command runs.")
@click.option(
    "--tick", type=click.IntRange(min=1), default=None,
    help="Milliseconds between frames.",
)
@click.pass_context
def run(ctx: click.Context, command: tuple[str, ...], message: str | None, tick: int | None) -> None:
    """Spin while COMMAND runs and finish with its outcome.

    The command's output is captured and only shown when it fails.
    Put -- before the command when it takes options of its own:

    \b
      busyline run -m "Running tests" -- pytest -q
    """
    label = message or " ".join(command)
    spin = Spinner(label)
    if tick is not None:
        spin.set_tick_interval(tick)

    spin.start()
    try:
        proc = subprocess.run(list(command), capture_output=True, text=True)
    except OSError as exc:
        spin.error(f"{label}: {exc.strerror or exc}")
        raise click.ClickException(str(exc)) from exc

    if proc.returncode == 0:
        spin.success()
        return

    spin.errorf("%s (exit %d)", label, proc.returncode)
    if proc.stdout:
        click.echo(proc.stdout, nl=False)
    if proc.stderr:
        click.echo(proc.stderr, err=True, nl=False)
    ctx.exit(proc.returncode)
