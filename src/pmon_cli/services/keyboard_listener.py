"""Background thread turning key presses into pause and quit requests."""

from __future__ import annotations

import threading
from collections.abc import Callable

from pmon_cli.models.keyboard import KeyboardHandler
from pmon_cli.utils.logger import get_logger

PAUSE_KEYS = ("p", " ")
QUIT_KEYS = ("q",)


class KeyboardListener:
    """Polls the keyboard on a daemon thread.

    ``on_pause`` runs for ``p`` or space, ``on_quit`` for ``q``. Both run on
    the listener thread, so they must be thread-safe.
    """

    def __init__(
        self,
        on_pause: Callable[[], None],
        on_quit: Callable[[], None],
        handler_factory: Callable[[], KeyboardHandler] = KeyboardHandler,
        poll_interval: float = 0.2,
    ):
        self._on_pause = on_pause
        self._on_quit = on_quit
        self._handler_factory = handler_factory
        self.poll_interval = poll_interval
        self._handler: KeyboardHandler | None = None
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None
        self.logger = get_logger("keys")

    def start(self) -> None:
        self._handler = self._handler_factory()
        self._thread = threading.Thread(
            target=self._run, name="pmon-keyboard", daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        assert self._handler is not None
        while not self._stopped.is_set():
            key = self._handler.get_key(self.poll_interval)
            if key in PAUSE_KEYS:
                self.logger.debug("pause key pressed")
                self._on_pause()
            elif key in QUIT_KEYS:
                self.logger.debug("quit key pressed")
                self._on_quit()
                return

    def stop(self) -> None:
        """Stop polling and restore the terminal mode."""
        self._stopped.set()
        if self._thread is not None:
            self._thread.join(timeout=self.poll_interval * 5)
            self._thread = None
        if self._handler is not None:
            self._handler.stop()
            self._handler = None
