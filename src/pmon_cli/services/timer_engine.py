"""Countdown loop that drives a single phase to completion."""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pmon_cli.models.cycling import Phase, RunState, TimerSettings
from pmon_cli.utils.logger import get_logger

from .pause import PauseToggle

if TYPE_CHECKING:
    from pmon_cli.ui.renderers import Renderer

TICK_SECONDS = 1.0


@dataclass(frozen=True)
class ProgressUpdate:
    """One progress notification, emitted once per tick."""

    phase: Phase
    minutes_remaining: int
    seconds_remaining: int
    total_seconds: int
    paused: bool = False


class TimerEngine:
    """Runs phases against an absolute deadline.

    The remaining time is recomputed from the clock on every tick, so an
    imprecise sleep never accumulates into drift. A pause shifts the deadline
    forward by the pause length instead of freezing a counter.
    """

    def __init__(
        self,
        settings: TimerSettings,
        renderer: Renderer,
        pause_toggle: PauseToggle | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        tick_seconds: float = TICK_SECONDS,
    ):
        self.settings = settings
        self.renderer = renderer
        self.pause_toggle = pause_toggle or PauseToggle()
        self._clock = clock
        self._sleep = sleep
        self.tick_seconds = tick_seconds
        self._paused_at: float | None = None
        self.logger = get_logger("engine")

    @staticmethod
    def _seconds_left(deadline: float, now: float, duration: int) -> int:
        # Whole seconds, rounded up so the first tick shows the full duration.
        return min(duration, max(0, math.ceil(deadline - now)))

    def _notify(self, phase: Phase, left: int, duration: int, paused: bool) -> None:
        self.renderer.render(
            ProgressUpdate(
                phase=phase,
                minutes_remaining=left // 60,
                seconds_remaining=left % 60,
                total_seconds=duration,
                paused=paused,
            )
        )

    def run_phase(self, state: RunState) -> None:
        """Run ``state.phase`` until its full duration has elapsed.

        Mutates *state* in place. On completion the configured duration (not
        the wall-clock time) is credited to the work or break total.
        """
        phase = state.phase
        duration = self.settings.duration_for(phase)
        deadline = self._clock() + duration
        state.current_phase_elapsed_seconds = 0
        self.logger.info("phase started: %s (%ds)", phase.label, duration)

        try:
            while True:
                now = self._clock()
                if now >= deadline:
                    break

                left = self._seconds_left(deadline, now, duration)
                state.current_phase_elapsed_seconds = duration - left
                self._notify(phase, left, duration, paused=False)

                self._sleep(self.tick_seconds)

                if self.pause_toggle.poll():
                    deadline += self._wait_while_paused(state, deadline, duration)
        except BaseException:
            # Interrupted mid-tick: count active time up to now, but not
            # time spent paused.
            if self._paused_at is None:
                left = self._seconds_left(deadline, self._clock(), duration)
                state.current_phase_elapsed_seconds = duration - left
            self._paused_at = None
            raise

        state.current_phase_elapsed_seconds = duration
        state.complete_phase(duration)
        self.logger.info(
            "phase completed: %s (work=%ds, break=%ds)",
            phase.label,
            state.accumulated_work_seconds,
            state.accumulated_break_seconds,
        )

    def _wait_while_paused(
        self, state: RunState, deadline: float, duration: int
    ) -> float:
        """Block until resumed; return how long the pause lasted."""
        paused_at = self._paused_at = self._clock()
        left = self._seconds_left(deadline, paused_at, duration)
        state.current_phase_elapsed_seconds = duration - left
        self._notify(state.phase, left, duration, paused=True)
        self.logger.info("paused: %s with %ds left", state.phase.label, left)

        while self.pause_toggle.poll():
            self._sleep(self.tick_seconds)

        paused_for = self._clock() - paused_at
        self._paused_at = None
        self.logger.info("resumed after %.1fs, deadline shifted", paused_for)
        return paused_for
