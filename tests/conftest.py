"""Shared test fixtures and configuration.

Isolates tests from the real log/config directories and provides a virtual
clock so the timer loop runs without real sleeps.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable

import pytest
from rich.console import Console

from pmon_cli.services.timer_engine import ProgressUpdate
from pmon_cli.ui.renderers import Renderer


# ---------------------------------------------------------------------------
# Virtual time
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock stand-in; ``sleep`` advances time and fires actions."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: list[float] = []
        self._actions: list[tuple[float, Callable[[], None]]] = []

    def __call__(self) -> float:
        return self.now

    def at(self, when: float, action: Callable[[], None]) -> None:
        """Run *action* once virtual time reaches *when* (after a sleep)."""
        self._actions.append((when, action))
        self._actions.sort(key=lambda item: item[0])

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        due = [item for item in self._actions if item[0] <= self.now]
        self._actions = [item for item in self._actions if item[0] > self.now]
        for _, action in due:
            action()


class RecordingRenderer(Renderer):
    """Renderer that keeps every notification in memory."""

    def __init__(self):
        super().__init__(Console(file=io.StringIO()))
        self.updates: list[ProgressUpdate] = []
        self.summaries: list[str] = []
        self.closed = False

    def render(self, update: ProgressUpdate) -> None:
        self.updates.append(update)

    def show_summary(self, text: str) -> None:
        self.summaries.append(text)

    def close(self) -> None:
        self.closed = True

    @property
    def remaining(self) -> list[int]:
        return [u.minutes_remaining * 60 + u.seconds_remaining for u in self.updates]


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_dirs(tmp_path, monkeypatch):
    """Point the logger and config service at *tmp_path*."""
    import pmon_cli.utils.logger as logger_mod
    from pmon_cli.services.config_service import get_config_service

    log_dir = tmp_path / "logs"
    config_dir = tmp_path / "config"
    monkeypatch.setattr(logger_mod, "user_log_dir", lambda *_: str(log_dir))
    monkeypatch.setattr(
        "pmon_cli.services.config_service.user_config_dir",
        lambda *_: str(config_dir),
    )

    def _reset():
        app_logger = logging.getLogger("pmon_cli")
        for handler in list(app_logger.handlers):
            handler.close()
            app_logger.removeHandler(handler)
        logger_mod._logger = None
        get_config_service.cache_clear()

    _reset()
    yield tmp_path
    _reset()
