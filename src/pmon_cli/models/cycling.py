"""Phase rotation for the work / short break / long break cycle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SECONDS_IN_MINUTE = 60


class ConfigurationError(ValueError):
    """Raised when timer settings contain a non-positive value."""


class Phase(str, Enum):
    """A timed interval of the cycle."""

    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def label(self) -> str:
        """Human-readable phase name."""
        return _PHASE_LABELS[self]

    @property
    def is_break(self) -> bool:
        return self is not Phase.WORK


_PHASE_LABELS = {
    Phase.WORK: "Work",
    Phase.SHORT_BREAK: "Short Break",
    Phase.LONG_BREAK: "Long Break",
}


@dataclass(frozen=True)
class TimerSettings:
    """Finalized timer configuration, all durations in seconds."""

    cycles_per_long_break: int = 4
    work_seconds: int = 25 * SECONDS_IN_MINUTE
    short_break_seconds: int = 5 * SECONDS_IN_MINUTE
    long_break_seconds: int = 30 * SECONDS_IN_MINUTE

    def __post_init__(self) -> None:
        for name in (
            "cycles_per_long_break",
            "work_seconds",
            "short_break_seconds",
            "long_break_seconds",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(
                    f"{name} must be a positive integer, got {value!r}"
                )

    @classmethod
    def from_minutes(
        cls,
        cycles: int,
        work_minutes: int,
        short_break_minutes: int,
        long_break_minutes: int,
    ) -> "TimerSettings":
        """Build settings from minute values as entered on the command line."""
        return cls(
            cycles_per_long_break=cycles,
            work_seconds=work_minutes * SECONDS_IN_MINUTE,
            short_break_seconds=short_break_minutes * SECONDS_IN_MINUTE,
            long_break_seconds=long_break_minutes * SECONDS_IN_MINUTE,
        )

    def duration_for(self, phase: Phase) -> int:
        """Get duration in seconds for a phase."""
        if phase is Phase.WORK:
            return self.work_seconds
        if phase is Phase.LONG_BREAK:
            return self.long_break_seconds
        return self.short_break_seconds


def next_phase(
    phase: Phase, cycle_count: int, cycles_per_long_break: int
) -> tuple[Phase, int]:
    """Return the phase that follows *phase* and the updated cycle count.

    A completed work session increments the count and is followed by a long
    break once the count reaches *cycles_per_long_break*, otherwise by a short
    break. The count is only reset when leaving a long break.
    """
    if phase is Phase.WORK:
        cycle_count += 1
        if cycle_count >= cycles_per_long_break:
            return Phase.LONG_BREAK, cycle_count
        return Phase.SHORT_BREAK, cycle_count

    if phase is Phase.LONG_BREAK:
        return Phase.WORK, 0

    return Phase.WORK, cycle_count


@dataclass
class RunState:
    """Mutable state of one timer run, owned by the runner and its engine."""

    phase: Phase = Phase.WORK
    cycle_count: int = 0
    accumulated_work_seconds: int = 0
    accumulated_break_seconds: int = 0
    current_phase_elapsed_seconds: int = 0

    def advance(self, settings: TimerSettings) -> Phase:
        """Move to the next phase in the cycle and return it."""
        self.phase, self.cycle_count = next_phase(
            self.phase, self.cycle_count, settings.cycles_per_long_break
        )
        return self.phase

    def complete_phase(self, duration: int) -> None:
        """Credit a finished phase to the lifetime totals.

        The in-progress time is cleared before the total grows, so an
        interruption in between never counts the phase twice.
        """
        self.current_phase_elapsed_seconds = 0
        if self.phase.is_break:
            self.accumulated_break_seconds += duration
        else:
            self.accumulated_work_seconds += duration
