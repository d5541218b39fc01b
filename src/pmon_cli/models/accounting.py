"""Lifetime work/break totals and the exit summary."""

from __future__ import annotations

from dataclasses import dataclass

from .cycling import RunState


@dataclass(frozen=True)
class Summary:
    """Totals for a run, including the phase currently in progress."""

    total_work_seconds: int
    total_break_seconds: int


def compute_summary(state: RunState) -> Summary:
    """Compute totals for *state*; safe to call mid-phase."""
    in_progress = state.current_phase_elapsed_seconds
    work = state.accumulated_work_seconds
    on_break = state.accumulated_break_seconds

    if state.phase.is_break:
        on_break += in_progress
    else:
        work += in_progress

    return Summary(total_work_seconds=work, total_break_seconds=on_break)


def split_duration(secs: int) -> tuple[int, int, int]:
    """Split seconds into (hours, minutes, seconds)."""
    return secs // 3600, (secs % 3600) // 60, secs % 60


def _format_line(label: str, secs: int) -> str:
    hours, mins, rest = split_duration(secs)
    return f"{label}: {hours} hrs {mins} mins {rest} secs"


def format_summary(summary: Summary) -> str:
    """Render the two-line summary printed when the timer exits."""
    return "\n".join(
        [
            _format_line("Time Studying", summary.total_work_seconds),
            _format_line("Time On Break", summary.total_break_seconds),
        ]
    )
