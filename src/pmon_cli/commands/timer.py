"""Run the work/break timer in the foreground."""

from __future__ import annotations

import os
import signal
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pmon_cli.models.accounting import Summary
from pmon_cli.models.config_models import TimerConfig
from pmon_cli.models.cycling import ConfigurationError, TimerSettings
from pmon_cli.services.keyboard_listener import KeyboardListener
from pmon_cli.services.runner import PomodoroRunner, TerminationRequested
from pmon_cli.ui.console import get_console
from pmon_cli.ui.renderers import create_renderer
from pmon_cli.utils.exit_codes import ERROR_INVALID_ARGS
from pmon_cli.utils.logger import get_logger

from .decorators import AppError, command_wrapper


def resolve_settings(
    defaults: TimerConfig,
    cycles: int | None = None,
    work: int | None = None,
    short_break: int | None = None,
    long_break: int | None = None,
) -> TimerSettings:
    """Merge command-line overrides (minutes) into the persisted defaults."""
    overrides = {
        "cycles": cycles,
        "work_minutes": work,
        "short_break_minutes": short_break,
        "long_break_minutes": long_break,
    }
    merged = defaults.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )
    try:
        return merged.to_settings()
    except ConfigurationError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e


def _request_quit() -> None:
    # Route through the SIGTERM handler so the main thread unwinds.
    os.kill(os.getpid(), signal.SIGTERM)


@contextmanager
def handle_signals(runner: PomodoroRunner) -> Iterator[None]:
    """Install terminate/pause signal handlers for the duration of a run."""

    def _terminate(signum, frame):
        runner.terminate(signum)

    def _toggle(signum, frame):
        runner.toggle_pause()

    handlers = {signal.SIGINT: _terminate, signal.SIGTERM: _terminate}
    if hasattr(signal, "SIGUSR1"):
        handlers[signal.SIGUSR1] = _toggle

    previous = {}
    try:
        for sig, handler in handlers.items():
            previous[sig] = signal.signal(sig, handler)
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def start_timer(
    settings: TimerSettings,
    output: Path | None = None,
    keys: bool = False,
    color: bool = True,
) -> Summary:
    """Run phases until terminated and return the final totals."""
    console = get_console(color)
    try:
        renderer = create_renderer(output, console)
    except OSError as e:
        raise AppError(
            f"Cannot open log file '{output}': {e.strerror or e}", ERROR_INVALID_ARGS
        ) from e

    runner = PomodoroRunner(settings, renderer)
    listener = (
        KeyboardListener(on_pause=runner.toggle_pause, on_quit=_request_quit)
        if keys
        else None
    )
    get_logger().info("timer pid=%d (SIGUSR1 toggles pause)", os.getpid())

    try:
        with handle_signals(runner):
            try:
                if listener is not None:
                    listener.start()
                return runner.run()
            except TerminationRequested:
                # Arrived before the run loop could catch it.
                return runner.finish()
            finally:
                if listener is not None:
                    listener.stop()
    finally:
        renderer.close()


@command_wrapper
def run_timer(
    defaults: TimerConfig,
    cycles: int | None = None,
    work: int | None = None,
    short_break: int | None = None,
    long_break: int | None = None,
    output: Path | None = None,
    keys: bool = False,
    color: bool = True,
) -> Summary:
    """Resolve settings and run the timer; errors become exit codes."""
    settings = resolve_settings(defaults, cycles, work, short_break, long_break)
    return start_timer(settings, output=output, keys=keys, color=color)
