"""Non-blocking single-key input for the pause/quit controls."""

import select
import sys
import termios
import tty
from typing import Optional


class KeyboardHandler:
    """Puts stdin in cbreak mode and reads single keys without blocking."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self.fd = self.stream.fileno()
        self.old_settings = None
        self._setup()

    def _setup(self):
        """Setup terminal for non-blocking input."""
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error:
            # Not a terminal
            self.old_settings = None

    def get_key(self, timeout: float = 0) -> Optional[str]:
        """
        Get a single keypress, waiting at most *timeout* seconds.

        Returns the lower-cased key or None if no key was pressed.
        """
        readable, _, _ = select.select([self.stream], [], [], timeout)
        if not readable:
            return None
        key = self.stream.read(1)
        return key.lower() if key else None

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None
