"""Pause/resume toggle shared between input sources and the timer loop."""

from __future__ import annotations

import queue


class PauseToggle:
    """Single pause flag fed by asynchronous toggle events.

    ``toggle()`` only enqueues an event, so it is safe to call from other
    threads and from signal handlers (``SimpleQueue.put`` is reentrant).
    The timer loop is the only reader: it calls ``poll()`` at tick boundaries,
    which applies every pending toggle and returns the resulting state.
    """

    def __init__(self) -> None:
        self._events: queue.SimpleQueue[None] = queue.SimpleQueue()
        self._paused = False

    def toggle(self) -> None:
        """Request a pause if running, or a resume if paused."""
        self._events.put(None)

    def poll(self) -> bool:
        """Apply pending toggles and return True while paused."""
        while True:
            try:
                self._events.get_nowait()
            except queue.Empty:
                return self._paused
            self._paused = not self._paused

    @property
    def paused(self) -> bool:
        """State as of the last ``poll()``."""
        return self._paused
