"""pmon - a Pomodoro interval timer for the terminal."""

__version__ = "0.3.0"
