"""Progress renderers: a live terminal line or an overwritten log file."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.live import Live
from rich.text import Text

from pmon_cli.models.cycling import Phase
from pmon_cli.services.timer_engine import ProgressUpdate

from .console import get_console

_PHASE_STYLES = {
    Phase.WORK: "bold cyan",
    Phase.SHORT_BREAK: "bold green",
    Phase.LONG_BREAK: "bold magenta",
}


def format_total(total_seconds: int) -> str:
    """Phase length in minutes, or mm:ss when it is not a whole minute."""
    mins, secs = divmod(total_seconds, 60)
    if secs:
        return f"{mins:02d}:{secs:02d}"
    return str(mins)


def format_progress(update: ProgressUpdate) -> str:
    """Render a progress update as ``Work: [24:59/25]``."""
    line = (
        f"{update.phase.label}: "
        f"[{update.minutes_remaining:02d}:{update.seconds_remaining:02d}"
        f"/{format_total(update.total_seconds)}]"
    )
    if update.paused:
        line += " (paused)"
    return line


class Renderer(ABC):
    """Sink for progress notifications and the exit summary."""

    def __init__(self, console: Console | None = None):
        self.console = console or get_console()

    @abstractmethod
    def render(self, update: ProgressUpdate) -> None:
        """Show the latest progress."""

    def show_summary(self, text: str) -> None:
        """Print the exit summary on the terminal."""
        self.console.print()
        self.console.print(Text(text))

    def close(self) -> None:
        """Release any resources held by the renderer."""


class TerminalRenderer(Renderer):
    """Rewrites a single terminal line each tick, cursor hidden."""

    def __init__(self, console: Console | None = None):
        super().__init__(console)
        self._live: Live | None = None

    def _text(self, update: ProgressUpdate) -> Text:
        style = "bold yellow" if update.paused else _PHASE_STYLES[update.phase]
        return Text(format_progress(update), style=style)

    def render(self, update: ProgressUpdate) -> None:
        text = self._text(update)
        if self._live is None:
            self._live = Live(
                text,
                console=self.console,
                auto_refresh=False,
                redirect_stdout=False,
                redirect_stderr=False,
            )
            self._live.start()
        self._live.update(text, refresh=True)

    def _stop_live(self) -> None:
        if self._live is not None:
            self._live.stop()
            self._live = None

    def show_summary(self, text: str) -> None:
        self._stop_live()
        super().show_summary(text)

    def close(self) -> None:
        self._stop_live()
        self.console.show_cursor(True)


class FileRenderer(Renderer):
    """Keeps only the latest progress line in a log file.

    The file is rewound and truncated on every update, so a status bar or
    ``watch cat`` always reads the current state.
    """

    def __init__(self, path: str | Path, console: Console | None = None):
        super().__init__(console)
        self.path = Path(path)
        self._file: TextIO | None = open(self.path, "w", encoding="utf-8")

    def render(self, update: ProgressUpdate) -> None:
        if self._file is None:
            raise ValueError(f"log file {self.path} is closed")
        self._file.seek(0)
        self._file.truncate()
        self._file.write(format_progress(update) + "\n\n")
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


def create_renderer(
    output: str | Path | None = None, console: Console | None = None
) -> Renderer:
    """Return a file renderer when *output* is given, else a terminal one.

    Raises OSError if the output file cannot be opened.
    """
    if output:
        return FileRenderer(output, console)
    return TerminalRenderer(console)
