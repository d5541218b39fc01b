"""Runs the phase cycle until terminated, then reports the totals."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from pmon_cli.models.accounting import Summary, compute_summary, format_summary
from pmon_cli.models.cycling import RunState, TimerSettings
from pmon_cli.utils.logger import get_logger

from .pause import PauseToggle
from .timer_engine import TimerEngine

if TYPE_CHECKING:
    from pmon_cli.ui.renderers import Renderer


class TerminationRequested(Exception):
    """Raised into the timer loop to stop the run immediately."""

    def __init__(self, signum: int | None = None):
        super().__init__(f"termination requested (signal {signum})")
        self.signum = signum


class PomodoroRunner:
    """Owns the run state and cycles phases through the engine."""

    def __init__(
        self,
        settings: TimerSettings,
        renderer: Renderer,
        pause_toggle: PauseToggle | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.renderer = renderer
        self.pause_toggle = pause_toggle or PauseToggle()
        self.state = RunState()
        self._stopping = False
        self.engine = TimerEngine(
            settings,
            renderer,
            pause_toggle=self.pause_toggle,
            clock=clock,
            sleep=sleep,
        )
        self.logger = get_logger("runner")

    def toggle_pause(self) -> None:
        """Flip the pause flag; takes effect at the next tick boundary."""
        self.pause_toggle.toggle()

    def terminate(self, signum: int | None = None) -> None:
        """Abort the run. Call from the main thread or a signal handler.

        Only the first request raises; later ones are ignored so the summary
        can be written undisturbed.
        """
        if self._stopping:
            return
        self._stopping = True
        raise TerminationRequested(signum)

    def summary(self) -> Summary:
        return compute_summary(self.state)

    def finish(self) -> Summary:
        """Stop accepting termination requests and show the final totals."""
        self._stopping = True
        result = self.summary()
        self.logger.info(
            "totals: work=%ds break=%ds",
            result.total_work_seconds,
            result.total_break_seconds,
        )
        self.renderer.show_summary(format_summary(result))
        return result

    def run(self, max_phases: int | None = None) -> Summary:
        """Cycle phases until terminated (or *max_phases* have completed).

        On termination the summary is computed from the current state,
        including a partially completed phase, and handed to the renderer.
        The renderer is always closed on the way out.
        """
        try:
            try:
                self.logger.info(
                    "run started: cycles=%d work=%ds short=%ds long=%ds",
                    self.settings.cycles_per_long_break,
                    self.settings.work_seconds,
                    self.settings.short_break_seconds,
                    self.settings.long_break_seconds,
                )
                completed = 0
                while max_phases is None or completed < max_phases:
                    self.engine.run_phase(self.state)
                    completed += 1
                    previous = self.state.phase
                    self.state.advance(self.settings)
                    self.logger.info(
                        "transition: %s -> %s (cycle %d/%d)",
                        previous.label,
                        self.state.phase.label,
                        self.state.cycle_count,
                        self.settings.cycles_per_long_break,
                    )
            except (TerminationRequested, KeyboardInterrupt) as exc:
                self.logger.info("run terminated: %r", exc)

            return self.finish()
        finally:
            self.renderer.close()
